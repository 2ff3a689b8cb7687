"""Tests for the pydantic data models."""

import pytest
from pydantic import ValidationError
from ecash.crypto.coin import Coin, Side
from ecash.models.schemas import CheaterReport, DepositRequest, Verdict


class TestCheaterReport:
    """Tests for CheaterReport."""

    def test_verdict_values(self):
        """Test the wire values of verdicts."""
        assert Verdict.MERCHANT_FRAUD.value == "merchant_fraud"
        assert Verdict.OWNER_DOUBLE_SPEND.value == "owner_double_spend"
        assert Verdict.INDETERMINATE.value == "indeterminate"

    def test_report_dump(self):
        """Test serialising a report."""
        report = CheaterReport(guid="g1", verdict=Verdict.OWNER_DOUBLE_SPEND, identity="alice")
        data = report.model_dump(mode="json")

        assert data["verdict"] == "owner_double_spend"
        assert data["identity"] == "alice"
        assert data["index"] is None


class TestDepositRequest:
    """Tests for DepositRequest."""

    def test_from_acceptance(self, mint_signed):
        """Test building a deposit from an accepted coin."""
        coin = mint_signed(ris_length=3)
        ris = coin.get_ris(Side.LEFT)

        request = DepositRequest.from_acceptance(coin, ris, merchant_id="m1")

        assert request.coin == coin.serialize()
        assert request.signature_value == coin.signature
        assert request.shares == ris

    def test_from_acceptance_unsigned(self, authority):
        """Test that an unsigned coin cannot be deposited."""
        coin = Coin.mint("alice", 1, authority.public_params, ris_length=1)

        with pytest.raises(ValueError):
            DepositRequest.from_acceptance(coin, coin.get_ris(Side.LEFT), merchant_id="m1")

    def test_decimal_signature(self):
        """Test that decimal signatures are accepted."""
        request = DepositRequest(merchant_id="m1", coin="c", signature="12345", ris=["00"])
        assert request.signature_value == 12345

    @pytest.mark.parametrize("fields", [
        {"signature": "not-a-number"},
        {"ris": []},
        {"ris": ["zz"]},
        {"merchant_id": ""},
    ])
    def test_invalid_fields(self, fields):
        """Test field validation."""
        data = {"merchant_id": "m1", "coin": "c", "signature": "0x1f", "ris": ["00"]}
        data.update(fields)

        with pytest.raises(ValidationError):
            DepositRequest(**data)
