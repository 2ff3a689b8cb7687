"""
Anonymous coin with embedded identity shares.

Per Chaum, Fiat & Naor, "Untraceable Electronic Cash" (1988):
  The owner's identity is split k times into one-time-pad pairs
  (L_i, R_i) with L_i XOR R_i = IDENT || owner. Only the hashes of the
  shares are signed by the bank. Each spend reveals one side of every
  pair, so a single spend says nothing about the owner while two spends
  that disagree on any index expose the identity.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
import logging
import uuid

from ecash.config import get_settings
from ecash.crypto.blind_signature import PublicParams, blind, unblind
from ecash.utils.hash import hash_preimage
from ecash.utils.otp import make_otp
from ecash.exceptions import FormatError, MalformedCoinError, MissingPreimageError, SigningError

logger = logging.getLogger(__name__)


class Side(str, Enum):
    """Which half of every identity share pair is revealed."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class CoinRecord:
    """
    The public part of a coin, as recovered from its wire encoding.

    This is everything a merchant or the bank can know about a coin
    without the owner's cooperation.
    """

    amount: int
    guid: str
    left_hashes: Tuple[str, ...]
    right_hashes: Tuple[str, ...]

    def hashes_for(self, side: Side) -> Tuple[str, ...]:
        """Commitments on one side."""
        return self.left_hashes if Side(side) is Side.LEFT else self.right_hashes


@dataclass
class Coin:
    """
    Coin minted by its owner and blind-signed by the bank.

    Identity shares and commitments are fixed at mint time. Only the
    signature (and the ephemeral blinding material) change afterwards.
    """

    amount: int
    guid: str
    n: int
    e: int
    left_hashes: Tuple[str, ...]
    right_hashes: Tuple[str, ...]

    # Owner secrets (never transmitted directly)
    owner: str = field(default="", repr=False)
    left_ident: Tuple[bytes, ...] = field(default=(), repr=False)
    right_ident: Tuple[bytes, ...] = field(default=(), repr=False)

    # Wire constants the coin was minted with
    bank_marker: str = field(default="", repr=False)

    # Blind signature state
    blinded: Optional[int] = field(default=None, repr=False)
    blinding_factor: Optional[int] = field(default=None, repr=False)
    signature: Optional[int] = field(default=None, repr=False)

    def __post_init__(self):
        if not self.bank_marker:
            self.bank_marker = get_settings().bank_marker

    @classmethod
    def mint(
        cls,
        owner: str,
        amount: int,
        params: PublicParams,
        ris_length: Optional[int] = None,
        identity_marker: Optional[str] = None,
        bank_marker: Optional[str] = None,
    ) -> "Coin":
        """
        Create a new coin for owner.

        For each of the k indices a fresh one-time pad splits
        identity_marker || owner into a left and right preimage, and both
        are committed with hash_preimage. The serialized coin is then
        blinded for the bank.

        Args:
            owner: Owner identity (embedded, never sent in clear)
            amount: Coin value
            params: Bank public parameters
            ris_length: Number of share pairs k (default from settings)
            identity_marker: Identity prefix (default from settings)
            bank_marker: Wire marker (default from settings)

        Returns:
            Coin: Unsigned coin holding its blinding material
        """
        settings = get_settings()
        k = settings.ris_length if ris_length is None else ris_length
        marker = identity_marker or settings.identity_marker
        if k < 1:
            raise ValueError("ris_length must be at least 1")
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
            raise ValueError("Amount must be a non-negative integer")

        ident = f"{marker}{owner}"
        left_ident, right_ident = [], []
        for _ in range(k):
            key, ciphertext = make_otp(ident)
            left_ident.append(key)
            right_ident.append(ciphertext)

        coin = cls(
            amount=amount,
            guid=uuid.uuid4().hex,
            n=params.n,
            e=params.e,
            left_hashes=tuple(hash_preimage(p) for p in left_ident),
            right_hashes=tuple(hash_preimage(p) for p in right_ident),
            owner=owner,
            left_ident=tuple(left_ident),
            right_ident=tuple(right_ident),
            bank_marker=bank_marker or settings.bank_marker,
        )
        coin.blinded, coin.blinding_factor = blind(coin.message, params)

        logger.info(f"Minted coin {coin.guid} (amount={amount}, k={k})")
        return coin

    @property
    def public_params(self) -> PublicParams:
        """Bank parameters the coin claims to be signed under."""
        return PublicParams(n=self.n, e=self.e)

    @property
    def ris_length(self) -> int:
        """Number of identity share pairs carried by the coin."""
        return len(self.left_hashes)

    @property
    def message(self) -> str:
        """The message the bank signs (the canonical encoding)."""
        return self.serialize()

    def unblind(self, blind_signature: int):
        """
        Turn the bank's blind signature into a signature on the coin.

        The blinding material is discarded afterwards.

        Raises:
            SigningError: If the coin holds no blinding material
        """
        if self.blinding_factor is None:
            raise SigningError("Coin has no blinding material", guid=self.guid)

        self.signature = unblind(blind_signature, self.blinding_factor, self.public_params)
        self.blinded = None
        self.blinding_factor = None

    def serialize(self) -> str:
        """
        Canonical wire encoding.

        Format: <bank marker>-<amount>-<guid>-<left hashes>-<right hashes>
        with each hash list joined by commas.
        """
        return "-".join([
            self.bank_marker,
            str(self.amount),
            self.guid,
            ",".join(self.left_hashes),
            ",".join(self.right_hashes),
        ])

    @staticmethod
    def parse(
        text: str,
        ris_length: Optional[int] = None,
        bank_marker: Optional[str] = None,
    ) -> CoinRecord:
        """
        Parse a wire-encoded coin.

        Args:
            text: Output of serialize()
            ris_length: Expected number of commitments per side
            bank_marker: Expected leading field

        Returns:
            CoinRecord: Amount, guid and commitment lists

        Raises:
            FormatError: Wrong field count, bad amount or marker mismatch
            MalformedCoinError: A commitment list does not have k entries
        """
        settings = get_settings()
        k = settings.ris_length if ris_length is None else ris_length
        expected_marker = bank_marker or settings.bank_marker

        if not isinstance(text, str):
            raise FormatError("Coin encoding must be a string")

        fields = text.split("-")
        if len(fields) != 5:
            raise FormatError(f"Coin encoding must have 5 fields, got {len(fields)}")

        marker, amount_text, guid, left_text, right_text = fields
        if marker != expected_marker:
            raise FormatError(
                f"Invalid bank marker: expected {expected_marker}, got {marker}",
                guid=guid,
            )

        try:
            amount = int(amount_text)
        except ValueError:
            raise FormatError(f"Invalid amount: {amount_text!r}", guid=guid)

        left_hashes = tuple(left_text.split(",")) if left_text else ()
        right_hashes = tuple(right_text.split(",")) if right_text else ()

        if len(left_hashes) != k or len(right_hashes) != k:
            raise MalformedCoinError(
                f"Invalid RIS length: expected {k}, "
                f"got left={len(left_hashes)}, right={len(right_hashes)}",
                guid=guid,
            )

        return CoinRecord(
            amount=amount,
            guid=guid,
            left_hashes=left_hashes,
            right_hashes=right_hashes,
        )

    def record(self) -> CoinRecord:
        """Public view of this coin."""
        return CoinRecord(
            amount=self.amount,
            guid=self.guid,
            left_hashes=tuple(self.left_hashes),
            right_hashes=tuple(self.right_hashes),
        )

    def reveal_side(self, side: Side, index: int) -> bytes:
        """
        Return the stored preimage for one side at one index.

        Raises:
            MissingPreimageError: If the coin holds no such preimage
        """
        side = Side(side)
        preimages = self.left_ident if side is Side.LEFT else self.right_ident
        if not 0 <= index < len(preimages):
            raise MissingPreimageError(
                f"Missing preimage at index {index} for {side.value} identity",
                guid=self.guid,
                index=index,
                side=side.value,
            )
        return preimages[index]

    def get_ris(self, side: Side) -> List[bytes]:
        """All preimages of one side, in index order."""
        return [self.reveal_side(side, i) for i in range(self.ris_length)]
