"""Double-spend adjudication: who cheated, the merchant or the owner?"""

from typing import Optional, Sequence
import logging

from ecash.config import get_settings
from ecash.crypto.coin import CoinRecord, Side
from ecash.models.schemas import CheaterReport, Verdict
from ecash.utils.hash import hash_preimage
from ecash.utils.otp import decrypt_otp
from ecash.exceptions import FormatError, HashMismatchError, IndeterminateAdjudicationError

logger = logging.getLogger(__name__)


class Adjudicator:
    """
    Compare two reveals of the same coin.

    Two honest spends pick the same side for every index with
    probability 2^-k. At any index where they disagree, the left and
    right preimages XOR to identity_marker || owner. Identical reveals
    mean a merchant deposited the same payment twice.

    Stateless: an instance only carries the identity marker.
    """

    def __init__(self, identity_marker: Optional[str] = None):
        self.identity_marker = identity_marker or get_settings().identity_marker

    def determine_cheater(
        self,
        guid: str,
        ris_a: Sequence[bytes],
        ris_b: Sequence[bytes],
        record: Optional[CoinRecord] = None,
        strict: bool = False,
    ) -> CheaterReport:
        """
        Decide who cheated with coin guid.

        Args:
            guid: Coin identifier
            ris_a: Preimages revealed in the first deposit
            ris_b: Preimages revealed in the second deposit
            record: Coin commitments; when given, every preimage is checked
                against them before it is trusted
            strict: Raise instead of returning an indeterminate report

        Returns:
            CheaterReport: Verdict and, for a double spend, the owner

        Raises:
            FormatError: If the reveals differ in length or the record is
                for another coin
            HashMismatchError: If a preimage does not match the record
            IndeterminateAdjudicationError: If strict and no identity found
        """
        if len(ris_a) != len(ris_b):
            raise FormatError(
                f"Reveals differ in length: {len(ris_a)} and {len(ris_b)}", guid=guid
            )

        if record is not None:
            if record.guid != guid:
                raise FormatError(
                    f"Coin record is for {record.guid}, not {guid}", guid=guid
                )
            self.check_reveal(guid, ris_a, record)
            self.check_reveal(guid, ris_b, record)

        if list(ris_a) == list(ris_b):
            logger.warning(f"Merchant is cheating with coin {guid}")
            return CheaterReport(guid=guid, verdict=Verdict.MERCHANT_FRAUD)

        marker = self.identity_marker.encode("utf-8")
        for i, (share_a, share_b) in enumerate(zip(ris_a, ris_b)):
            if len(share_a) != len(share_b):
                logger.debug(f"Coin {guid}: shares at index {i} differ in length")
                continue
            plaintext = decrypt_otp(share_a, share_b)
            if plaintext.startswith(marker):
                cheater = plaintext[len(marker):].decode("utf-8", errors="replace")
                logger.warning(f"Double spending detected for coin {guid}! Cheater is {cheater}")
                return CheaterReport(
                    guid=guid,
                    verdict=Verdict.OWNER_DOUBLE_SPEND,
                    identity=cheater,
                    index=i,
                )

        logger.error(f"Unable to identify cheater for coin {guid}")
        if strict:
            raise IndeterminateAdjudicationError(
                f"No identity recovered after scanning {len(ris_a)} shares", guid=guid
            )
        return CheaterReport(guid=guid, verdict=Verdict.INDETERMINATE)

    @staticmethod
    def check_reveal(guid: str, ris: Sequence[bytes], record: CoinRecord):
        """Every preimage must open the commitment of one side, the same side throughout."""
        k = len(record.left_hashes)
        if len(ris) != k:
            raise FormatError(f"Expected {k} revealed shares, got {len(ris)}", guid=guid)
        if k == 0:
            return

        first = hash_preimage(ris[0])
        if first == record.left_hashes[0]:
            side = Side.LEFT
        elif first == record.right_hashes[0]:
            side = Side.RIGHT
        else:
            raise HashMismatchError(
                "Revealed share 0 matches neither commitment", guid=guid, index=0
            )

        hashes = record.hashes_for(side)
        for i in range(1, k):
            hashed = hash_preimage(ris[i])
            if hashed != hashes[i]:
                raise HashMismatchError(
                    f"Hash mismatch at index {i}: expected {hashes[i]}, got {hashed}",
                    guid=guid,
                    index=i,
                    side=side.value,
                )


def determine_cheater(
    guid: str,
    ris_a: Sequence[bytes],
    ris_b: Sequence[bytes],
    record: Optional[CoinRecord] = None,
    identity_marker: Optional[str] = None,
    strict: bool = False,
) -> CheaterReport:
    """Adjudicate two reveals with a fresh Adjudicator."""
    return Adjudicator(identity_marker).determine_cheater(
        guid, ris_a, ris_b, record=record, strict=strict
    )
