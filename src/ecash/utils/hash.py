"""Cryptographic hash utilities."""

import hashlib
from typing import Union


def sha256(data: Union[bytes, str]) -> bytes:
    """
    Compute SHA-256 hash of data.
    
    Args:
        data: Bytes or string to hash
        
    Returns:
        bytes: 32-byte SHA-256 hash
    """
    if isinstance(data, str):
        data = data.encode('utf-8')
    return hashlib.sha256(data).digest()


def hash_preimage(data: Union[bytes, str]) -> str:
    """
    Commit to an identity share: hex(SHA-256(data)).
    
    This is the one-way function binding each left/right preimage of a
    coin. The hex digest is what travels in the coin's wire format.
    
    Args:
        data: Preimage bytes (strings are UTF-8 encoded)
        
    Returns:
        str: 64-char lowercase hex digest
    """
    return sha256(data).hex()


def message_representative(message: Union[bytes, str]) -> int:
    """
    Map a message to the integer that the bank signs.
    
    Full-domain hash: SHA-256 of the message read as a big-endian integer.
    
    Args:
        message: Message to be signed (the serialized coin)
        
    Returns:
        int: Message representative
    """
    return int.from_bytes(sha256(message), byteorder='big')
