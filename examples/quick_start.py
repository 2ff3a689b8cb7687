#!/usr/bin/env python3
"""
Quick start guide for the e-cash system.

Run this to see a coin minted, spent twice and the cheater identified.
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ecash.core.acceptance import AcceptanceProtocol
from ecash.core.adjudicator import determine_cheater
from ecash.core.bank import Bank
from ecash.utils.log import configure_logging


def main():
    """Run a simple example of the e-cash system."""
    configure_logging()

    print("=" * 70)
    print("E-CASH QUICK START EXAMPLE")
    print("=" * 70)
    print()

    # Step 1: Bank setup
    print("Step 1: Initialize the bank")
    print("-" * 70)
    bank = Bank()
    print(f"✓ Bank key generated ({bank.public_params.n.bit_length()}-bit modulus)")
    print()

    # Step 2: Alice gets a coin
    print("Step 2: Alice mints a coin worth 20 and has it blind-signed")
    print("-" * 70)
    coin = bank.issue_coin("alice", 20)
    print(f"✓ Coin created: GUID={coin.guid}, Amount={coin.amount}")
    print()

    # Step 3: Alice spends it twice
    print("Step 3: Alice spends the same coin at two merchants")
    print("-" * 70)
    merchant = AcceptanceProtocol()
    ris1 = merchant.accept(coin)
    ris2 = merchant.accept(coin)
    print(f"✓ Both merchants accepted ({len(ris1)} shares each)")
    print()

    # Step 4: Adjudication
    print("Step 4: The bank compares the reveals")
    print("-" * 70)
    report = determine_cheater(coin.guid, ris1, ris2)
    print(f"  Verdict: {report.verdict.value}, Cheater: {report.identity}")
    print("  (merchants that drew the same side saw identical shares: merchant_fraud)")

    report = determine_cheater(coin.guid, ris1, ris1)
    print(f"  Same reveal twice -> Verdict: {report.verdict.value}")
    print()


if __name__ == "__main__":
    main()
