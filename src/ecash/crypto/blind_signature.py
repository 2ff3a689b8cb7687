"""RSA blind signatures (Chaum, 1983) used by the bank to issue coins."""

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from dataclasses import dataclass
from typing import Optional, Tuple, Union
import logging
import math
import secrets

from ecash.utils.hash import message_representative
from ecash.exceptions import SigningError

logger = logging.getLogger(__name__)


PUBLIC_EXPONENT = 65537


@dataclass(frozen=True)
class PublicParams:
    """Bank public parameters (n, e) embedded in every coin."""

    n: int
    e: int

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"n": str(self.n), "e": str(self.e)}


def generate_keys(bit_length: int) -> Tuple[PublicParams, rsa.RSAPrivateKey]:
    """
    Generate a bank key pair.

    Args:
        bit_length: RSA modulus size in bits

    Returns:
        tuple: (public parameters, private key)
    """
    private_key = rsa.generate_private_key(
        public_exponent=PUBLIC_EXPONENT,
        key_size=bit_length,
        backend=default_backend()
    )
    numbers = private_key.public_key().public_numbers()
    return PublicParams(n=numbers.n, e=numbers.e), private_key


def blind(message: Union[bytes, str], params: PublicParams) -> Tuple[int, int]:
    """
    Blind a message so the bank can sign it without reading it.

    Computes m' = H(message) * r^e mod n for a fresh blinding factor r
    coprime to n.

    Args:
        message: Message to be signed
        params: Bank public parameters

    Returns:
        tuple: (blinded message, blinding factor r)
    """
    m = message_representative(message) % params.n
    while True:
        r = secrets.randbelow(params.n - 2) + 2
        if math.gcd(r, params.n) == 1:
            break
    blinded = (m * pow(r, params.e, params.n)) % params.n
    return blinded, r


def unblind(blind_signature: int, blinding_factor: int, params: PublicParams) -> int:
    """
    Strip the blinding factor from a bank signature: s = s' * r^-1 mod n.

    Raises:
        SigningError: If the blinding factor is not invertible mod n
    """
    try:
        inverse = pow(blinding_factor, -1, params.n)
    except (ValueError, TypeError) as e:
        raise SigningError(f"Cannot unblind signature: {e}")
    return (blind_signature * inverse) % params.n


class BlindSigningAuthority:
    """
    The bank's signing capability.

    The authority signs blinded coin messages and verifies unblinded
    signatures. Each instance owns its own key pair; create one per
    process or test that needs it.
    """

    # Constants
    RSA_KEY_SIZE = 2048

    def __init__(self, private_key: Optional[bytes] = None, key_size: Optional[int] = None):
        """
        Initialize authority with new or existing RSA key pair.

        Args:
            private_key: Optional existing private key (PEM format)
            key_size: Modulus size for a new key (default RSA_KEY_SIZE)

        Raises:
            ValueError: If provided private key is invalid
        """
        if private_key is None:
            self.public_params, self._private_key = generate_keys(key_size or self.RSA_KEY_SIZE)
        else:
            try:
                loaded = serialization.load_pem_private_key(
                    private_key,
                    password=None,
                    backend=default_backend()
                )
            except (ValueError, TypeError) as e:
                raise ValueError(f"Failed to load private key: {e}")
            if not isinstance(loaded, rsa.RSAPrivateKey):
                raise ValueError("Provided key is not an RSA private key")
            self._private_key = loaded
            numbers = loaded.public_key().public_numbers()
            self.public_params = PublicParams(n=numbers.n, e=numbers.e)

        logger.info(f"Bank authority ready ({self._private_key.key_size}-bit modulus)")

    @property
    def private_key(self) -> bytes:
        """
        Return the authority's private key in PEM format.

        Security: This must be stored securely and never exposed in logs
        or error messages.
        """
        return self._private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption()
        )

    def sign(self, blinded_message: int) -> int:
        """
        Sign a blinded message: s' = m'^d mod n.

        Args:
            blinded_message: Output of blind()

        Returns:
            int: Blind signature

        Raises:
            SigningError: If the input is not an integer in [0, n)
        """
        n = self.public_params.n
        if isinstance(blinded_message, bool) or not isinstance(blinded_message, int):
            raise SigningError("Blinded message must be an integer")
        if not 0 <= blinded_message < n:
            raise SigningError("Blinded message is outside the RSA modulus range")

        d = self._private_key.private_numbers().d
        return pow(blinded_message, d, n)

    @staticmethod
    def verify(signature: int, message: Union[bytes, str], params: PublicParams) -> bool:
        """
        Check an unblinded signature: s^e mod n == H(message) mod n.

        Pure predicate; never raises. Whether False is an error is up to
        the caller.
        """
        try:
            if isinstance(signature, bool) or not isinstance(signature, int):
                return False
            if params.n <= 1 or not 0 < signature < params.n:
                return False
            expected = message_representative(message) % params.n
            return pow(signature, params.e, params.n) == expected
        except (TypeError, ValueError, AttributeError):
            return False
