"""Main package initialization."""

__version__ = "0.1.0"
__author__ = "E-Cash Team"
__description__ = "Anonymous e-cash with double-spender identification"

from .crypto.blind_signature import BlindSigningAuthority, PublicParams
from .crypto.coin import Coin, CoinRecord, Side
from .core.acceptance import AcceptanceProtocol
from .core.adjudicator import Adjudicator, determine_cheater
from .core.bank import Bank
from .models.schemas import CheaterReport, DepositRequest, Verdict

__all__ = [
    "BlindSigningAuthority",
    "PublicParams",
    "Coin",
    "CoinRecord",
    "Side",
    "AcceptanceProtocol",
    "Adjudicator",
    "determine_cheater",
    "Bank",
    "CheaterReport",
    "DepositRequest",
    "Verdict",
]
