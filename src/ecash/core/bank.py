"""Bank: issues coins and adjudicates deposits of the same coin.

In-memory, single process. The bank keeps the first reveal it sees for
each coin; any later deposit of that coin is adjudicated against it.

Flow:

    ISSUE Phase:
        1. Owner mints a coin (identity shares + commitments)
        2. Bank signs the blinded coin message
        3. Owner unblinds; the bank never saw the coin it signed

    SPEND Phase (merchant, see AcceptanceProtocol):
        1. Merchant verifies the bank signature
        2. Merchant challenges for one side of every share pair
        3. Merchant deposits the coin with the revealed shares

    DEPOSIT Phase:
        1. Bank verifies signature and format
        2. First deposit of a guid is recorded
        3. Any further deposit is adjudicated against the first
"""

from collections import defaultdict
from typing import Dict, List, Optional
import logging
import threading

from ecash.config import Settings, get_settings
from ecash.core.adjudicator import Adjudicator
from ecash.crypto.blind_signature import BlindSigningAuthority, PublicParams
from ecash.crypto.coin import Coin
from ecash.models.schemas import CheaterReport, DepositRequest
from ecash.exceptions import InvalidSignatureError

logger = logging.getLogger(__name__)


class Bank:
    """
    Coin issuer and double-spend judge.

    Owns exactly one BlindSigningAuthority; pass one in to share a key
    pair across banks (e.g. in tests).
    """

    def __init__(
        self,
        authority: Optional[BlindSigningAuthority] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize bank with empty deposit state.

        Args:
            authority: Signing authority (a new key pair if omitted)
            settings: Protocol settings (process settings if omitted)
        """
        self.settings = settings or get_settings()
        self.authority = authority or BlindSigningAuthority(key_size=self.settings.bank_key_size)
        self.adjudicator = Adjudicator(self.settings.identity_marker)

        # guid -> first deposit seen
        self.deposits: Dict[str, DepositRequest] = {}
        # guid -> reports, oldest first
        self.reports: Dict[str, List[CheaterReport]] = {}

        self._registry_lock = threading.Lock()
        self._guid_locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)

    @property
    def public_params(self) -> PublicParams:
        """Bank public parameters (n, e)."""
        return self.authority.public_params

    def sign_coin(self, blinded: int) -> int:
        """Sign a blinded coin message on behalf of the bank."""
        return self.authority.sign(blinded)

    def issue_coin(self, owner: str, amount: int) -> Coin:
        """
        Mint, blind-sign and unblind a coin for owner.

        Raises:
            InvalidSignatureError: If the unblinded signature does not verify
        """
        coin = Coin.mint(
            owner,
            amount,
            self.public_params,
            ris_length=self.settings.ris_length,
            identity_marker=self.settings.identity_marker,
            bank_marker=self.settings.bank_marker,
        )
        coin.unblind(self.sign_coin(coin.blinded))

        if not self.authority.verify(coin.signature, coin.message, self.public_params):
            raise InvalidSignatureError("Issued coin does not verify", guid=coin.guid)

        logger.info(f"Coin issued: GUID={coin.guid}, Amount={coin.amount}")
        return coin

    def deposit(self, request: DepositRequest) -> Optional[CheaterReport]:
        """
        Accept a merchant deposit.

        Args:
            request: Deposited coin with the shares its spender revealed

        Returns:
            None for the first deposit of a coin, otherwise the report of
            adjudicating this deposit against the first one

        Raises:
            InvalidSignatureError: If the coin is not signed by this bank
            FormatError: If the coin encoding or reveal is malformed
            HashMismatchError: If a revealed share does not open its commitment
        """
        if not self.authority.verify(request.signature_value, request.coin, self.public_params):
            raise InvalidSignatureError("Deposited coin is not signed by this bank")

        record = Coin.parse(
            request.coin,
            ris_length=self.settings.ris_length,
            bank_marker=self.settings.bank_marker,
        )
        guid = record.guid
        shares = request.shares

        with self._lock_for(guid):
            first = self.deposits.get(guid)
            if first is None:
                # Validate the reveal before it becomes the reference
                self.adjudicator.check_reveal(guid, shares, record)
                self.deposits[guid] = request
                logger.info(f"Deposit recorded: GUID={guid}, Merchant={request.merchant_id}")
                return None

            logger.info(
                f"Second deposit of {guid} by {request.merchant_id} "
                f"(first by {first.merchant_id}); adjudicating"
            )
            report = self.adjudicator.determine_cheater(
                guid, first.shares, shares, record=record
            )
            self.reports.setdefault(guid, []).append(report)
            return report

    def report_for(self, guid: str) -> Optional[CheaterReport]:
        """Latest adjudication report for a coin, if any."""
        reports = self.reports.get(guid)
        return reports[-1] if reports else None

    def _lock_for(self, guid: str) -> threading.Lock:
        with self._registry_lock:
            return self._guid_locks[guid]
