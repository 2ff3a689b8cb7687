"""Runtime configuration loaded from the environment (or a .env file)."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Characters that delimit fields of the coin wire format
WIRE_DELIMITERS = ("-", ",")


class Settings(BaseSettings):
    """
    Protocol constants and operational settings.

    Every field can be overridden with an ``ECASH_``-prefixed environment
    variable, e.g. ``ECASH_RIS_LENGTH=40``.
    """

    model_config = SettingsConfigDict(
        env_prefix="ECASH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    ris_length: int = Field(default=20, ge=1, description="Identity share pairs per coin (k)")
    bank_marker: str = Field(default="ELECTRONIC_PIGGYBANK", description="Leading wire field")
    identity_marker: str = Field(default="IDENT:", description="Prefix of embedded identities")
    bank_key_size: int = Field(default=2048, ge=1024, description="Bank RSA modulus size in bits")
    log_level: str = Field(default="INFO")

    @field_validator("bank_marker", "identity_marker")
    @classmethod
    def _check_marker(cls, value: str) -> str:
        if not value:
            raise ValueError("Marker must not be empty")
        for delimiter in WIRE_DELIMITERS:
            if delimiter in value:
                raise ValueError(f"Marker must not contain {delimiter!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.upper()


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the process settings."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings():
    """Reset cached settings (for testing)."""
    global _settings
    _settings = None
