"""Cryptographic primitives module"""

from ecash.crypto.blind_signature import (
    PublicParams,
    BlindSigningAuthority,
    generate_keys,
    blind,
    unblind,
)

from ecash.crypto.coin import (
    Side,
    Coin,
    CoinRecord,
)

__all__ = [
    'PublicParams',
    'BlindSigningAuthority',
    'generate_keys',
    'blind',
    'unblind',
    'Side',
    'Coin',
    'CoinRecord',
]
