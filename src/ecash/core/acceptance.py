"""Merchant-side acceptance of a coin."""

from typing import List, Optional
import logging
import secrets

from ecash.config import get_settings
from ecash.crypto.blind_signature import BlindSigningAuthority
from ecash.crypto.coin import Coin, Side
from ecash.utils.hash import hash_preimage
from ecash.exceptions import HashMismatchError, InvalidSignatureError

logger = logging.getLogger(__name__)


class AcceptanceProtocol:
    """
    Verify a coin and challenge its owner for one side of every share pair.

    Steps:
    1. Verify the bank signature over the coin message
    2. Parse the coin's commitment lists (length k each)
    3. Pick left or right at random, once per transaction
    4. Check every revealed preimage against its commitment
    5. Return the k preimages as the RIS

    The random source only needs a ``random()`` method returning a float
    in [0, 1); pass a seeded ``random.Random`` to make the challenge
    reproducible.
    """

    def __init__(
        self,
        ris_length: Optional[int] = None,
        bank_marker: Optional[str] = None,
        rng=None,
    ):
        settings = get_settings()
        self.ris_length = settings.ris_length if ris_length is None else ris_length
        self.bank_marker = bank_marker or settings.bank_marker
        self._rng = rng if rng is not None else secrets.SystemRandom()

    def choose_side(self) -> Side:
        """One fair coin flip for the whole transaction."""
        return Side.LEFT if self._rng.random() < 0.5 else Side.RIGHT

    def accept(self, coin: Coin) -> List[bytes]:
        """
        Accept a coin as payment.

        Args:
            coin: Signed coin presented by its owner

        Returns:
            List[bytes]: k preimages from one side, in index order

        Raises:
            InvalidSignatureError: If the bank signature does not verify
            MalformedCoinError: If a commitment list does not have k entries
            MissingPreimageError: If the owner cannot supply a preimage
            HashMismatchError: If a preimage does not match its commitment
        """
        message = coin.message
        if not BlindSigningAuthority.verify(coin.signature, message, coin.public_params):
            raise InvalidSignatureError(
                "Invalid signature. Coin is not valid.", guid=coin.guid
            )

        record = Coin.parse(message, ris_length=self.ris_length, bank_marker=self.bank_marker)

        side = self.choose_side()
        hashes = record.hashes_for(side)
        ris = []
        for i in range(self.ris_length):
            preimage = coin.reveal_side(side, i)
            hashed = hash_preimage(preimage)
            if hashed != hashes[i]:
                raise HashMismatchError(
                    f"Hash mismatch at index {i}: expected {hashes[i]}, got {hashed}",
                    guid=coin.guid,
                    index=i,
                    side=side.value,
                )
            logger.debug(f"Coin {coin.guid}: {side.value} share {i} matches commitment")
            ris.append(preimage)

        logger.info(
            f"Coin accepted: GUID={coin.guid}, Amount={record.amount}, Side={side.value}"
        )
        return ris
