"""One-time pad used to split an identity into two committed shares."""

import os
from typing import Tuple, Union

from ecash.utils.encoding import ensure_bytes


RETURN_TYPES = ("bytes", "string", "hex")


def xor_bytes(left: bytes, right: bytes) -> bytes:
    """
    Byte-wise XOR of two equal-length operands.
    
    Raises:
        ValueError: If operand lengths differ
    """
    if len(left) != len(right):
        raise ValueError(
            f"XOR operands must have equal length, got {len(left)} and {len(right)}"
        )
    return bytes(a ^ b for a, b in zip(left, right))


def make_otp(plaintext: Union[bytes, str]) -> Tuple[bytes, bytes]:
    """
    Split plaintext into a fresh random key and its ciphertext.
    
    Either half alone is uniformly random; XOR of the two is the plaintext.
    
    Args:
        plaintext: Bytes or string (UTF-8) to split
        
    Returns:
        tuple: (key, ciphertext), both len(plaintext) bytes
    """
    data = ensure_bytes(plaintext)
    key = os.urandom(len(data))
    return key, xor_bytes(key, data)


def decrypt_otp(
    key: Union[bytes, str],
    ciphertext: Union[bytes, str],
    return_type: str = "bytes",
) -> Union[bytes, str]:
    """
    Recover the plaintext of a one-time pad.
    
    Args:
        key: Pad key
        ciphertext: Pad ciphertext (same length as key)
        return_type: "bytes", "string" (UTF-8, undecodable bytes replaced)
            or "hex"
        
    Returns:
        Plaintext in the requested encoding
        
    Raises:
        ValueError: On length mismatch or unknown return type
    """
    if return_type not in RETURN_TYPES:
        raise ValueError(f"return_type must be one of {RETURN_TYPES}, got {return_type!r}")

    plaintext = xor_bytes(ensure_bytes(key), ensure_bytes(ciphertext))
    if return_type == "string":
        return plaintext.decode("utf-8", errors="replace")
    if return_type == "hex":
        return plaintext.hex()
    return plaintext
