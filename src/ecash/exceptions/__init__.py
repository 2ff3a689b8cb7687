"""Custom exceptions for the e-cash system."""

from typing import Optional


class EcashException(Exception):
    """
    Base exception for all e-cash errors.

    Carries the coin guid, share index and side involved (when known) so
    that a failed operation can be audited after the fact.
    """

    def __init__(
        self,
        message: str,
        guid: Optional[str] = None,
        index: Optional[int] = None,
        side: Optional[str] = None,
    ):
        super().__init__(message)
        self.guid = guid
        self.index = index
        self.side = side


# Cryptography Errors
class CryptoError(EcashException):
    """Base exception for cryptographic errors."""
    pass


class SigningError(CryptoError):
    """Raised when the bank cannot sign (or the owner cannot unblind) a message."""
    pass


class InvalidSignatureError(CryptoError):
    """Raised when the bank signature on a coin does not verify."""
    pass


class HashMismatchError(CryptoError):
    """Raised when a revealed preimage does not hash to its commitment."""
    pass


# Coin Errors
class CoinError(EcashException):
    """Base exception for coin data errors."""
    pass


class FormatError(CoinError):
    """Raised when a coin's wire encoding is malformed."""
    pass


class MalformedCoinError(FormatError):
    """Raised when a coin's commitment lists do not have the expected length."""
    pass


class MissingPreimageError(CoinError):
    """Raised when a coin cannot supply the preimage for a side and index."""
    pass


# Adjudication Errors
class AdjudicationError(EcashException):
    """Base exception for double-spend adjudication errors."""
    pass


class IndeterminateAdjudicationError(AdjudicationError):
    """Raised when no identity can be recovered from two reveals."""
    pass
