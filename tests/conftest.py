"""Pytest configuration and fixtures."""

import pytest
import sys
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from ecash.config import reset_settings
from ecash.crypto.blind_signature import BlindSigningAuthority
from ecash.crypto.coin import Coin


class FixedChoice:
    """Random source that always returns the same value."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


ALWAYS_LEFT = FixedChoice(0.1)
ALWAYS_RIGHT = FixedChoice(0.9)


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Run every test against default settings."""
    for name in ("ECASH_RIS_LENGTH", "ECASH_BANK_MARKER", "ECASH_IDENTITY_MARKER",
                 "ECASH_BANK_KEY_SIZE", "ECASH_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(scope="session")
def authority():
    """One 1024-bit bank key pair shared by the whole session."""
    return BlindSigningAuthority(key_size=1024)


@pytest.fixture
def mint_signed(authority):
    """Factory minting a coin and having the session authority sign it."""
    def _mint(owner="alice", amount=20, ris_length=None):
        coin = Coin.mint(owner, amount, authority.public_params, ris_length=ris_length)
        coin.unblind(authority.sign(coin.blinded))
        return coin
    return _mint


@pytest.fixture(scope="session")
def test_data():
    """Fixture providing test data."""
    return {
        "sample_identity": "alice",
        "sample_amount": 20,
        "sample_ris_length": 3,
    }


@pytest.fixture
def always_left():
    """Challenge source that always picks the left side."""
    return ALWAYS_LEFT


@pytest.fixture
def always_right():
    """Challenge source that always picks the right side."""
    return ALWAYS_RIGHT
