"""Encoding and decoding utilities."""

from typing import List, Sequence, Union


def ensure_bytes(data: Union[bytes, str]) -> bytes:
    """
    Ensure data is in bytes format.
    
    Args:
        data: Bytes or string
        
    Returns:
        bytes: Data as bytes
    """
    if isinstance(data, bytes):
        return data
    elif isinstance(data, str):
        return data.encode('utf-8')
    else:
        raise TypeError(f"Expected bytes or str, got {type(data)}")


def int_to_hex(value: int) -> str:
    """Encode a non-negative integer as lowercase hex (no prefix)."""
    if not isinstance(value, int) or value < 0:
        raise ValueError("Value must be a non-negative integer")
    return format(value, "x")


def parse_int(text: str) -> int:
    """
    Parse an integer given in decimal or ``0x``-prefixed hex.
    
    Raises:
        ValueError: If text is not a valid integer
    """
    text = text.strip()
    if text.lower().startswith("0x"):
        return int(text[2:], 16)
    return int(text, 10)


def shares_to_hex(shares: Sequence[bytes]) -> List[str]:
    """Hex-encode a sequence of revealed preimages."""
    return [share.hex() for share in shares]


def hex_to_shares(encoded: Sequence[str]) -> List[bytes]:
    """
    Decode hex-encoded preimages.
    
    Raises:
        ValueError: If any entry is not valid hex
    """
    return [bytes.fromhex(item) for item in encoded]
