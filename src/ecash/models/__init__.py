"""Pydantic data models."""

from ecash.models.schemas import Verdict, CheaterReport, DepositRequest

__all__ = ["Verdict", "CheaterReport", "DepositRequest"]
