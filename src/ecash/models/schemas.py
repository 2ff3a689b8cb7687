"""Pydantic data models for the e-cash system."""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Sequence, TYPE_CHECKING
from datetime import datetime
from enum import Enum

from ecash.utils.encoding import int_to_hex, parse_int, shares_to_hex, hex_to_shares

if TYPE_CHECKING:
    from ecash.crypto.coin import Coin


class Verdict(str, Enum):
    """Outcome of comparing two reveals of the same coin."""
    MERCHANT_FRAUD = "merchant_fraud"
    OWNER_DOUBLE_SPEND = "owner_double_spend"
    INDETERMINATE = "indeterminate"


class CheaterReport(BaseModel):
    """Result of adjudicating two deposits of one coin."""
    guid: str = Field(..., description="Coin identifier")
    verdict: Verdict
    identity: Optional[str] = Field(default=None, description="Recovered owner identity")
    index: Optional[int] = Field(default=None, description="Share index that exposed the owner")
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def is_fraud(self) -> bool:
        """True when someone was caught cheating."""
        return self.verdict in (Verdict.MERCHANT_FRAUD, Verdict.OWNER_DOUBLE_SPEND)


class DepositRequest(BaseModel):
    """A merchant's deposit of a spent coin with the shares it was shown."""
    merchant_id: str = Field(..., min_length=1, description="Depositing merchant")
    coin: str = Field(..., description="Wire-encoded coin")
    signature: str = Field(..., description="Unblinded bank signature (hex or decimal)")
    ris: List[str] = Field(..., min_length=1, description="Revealed preimages (hex)")

    @field_validator("signature")
    @classmethod
    def _check_signature(cls, value: str) -> str:
        try:
            parse_int(value)
        except ValueError:
            raise ValueError("Signature must be an integer in hex or decimal")
        return value

    @field_validator("ris")
    @classmethod
    def _check_ris(cls, value: List[str]) -> List[str]:
        try:
            hex_to_shares(value)
        except ValueError:
            raise ValueError("Revealed preimages must be hex encoded")
        return value

    @property
    def signature_value(self) -> int:
        """Signature as an integer."""
        return parse_int(self.signature)

    @property
    def shares(self) -> List[bytes]:
        """Revealed preimages as bytes."""
        return hex_to_shares(self.ris)

    @classmethod
    def from_acceptance(
        cls, coin: "Coin", ris: Sequence[bytes], merchant_id: str
    ) -> "DepositRequest":
        """Build the deposit a merchant sends after accept()."""
        if coin.signature is None:
            raise ValueError("Coin is not signed")
        return cls(
            merchant_id=merchant_id,
            coin=coin.serialize(),
            signature="0x" + int_to_hex(coin.signature),
            ris=shares_to_hex(ris),
        )
