"""Property-based tests using Hypothesis for the coin's cryptographic invariants."""

import pytest
from hypothesis import given, strategies as st, settings, HealthCheck

from ecash.core.adjudicator import determine_cheater
from ecash.crypto.coin import Coin, Side
from ecash.models.schemas import Verdict
from ecash.utils.hash import hash_preimage
from ecash.utils.otp import decrypt_otp


identities = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",)),
    min_size=1,
    max_size=40,
)
ris_lengths = st.integers(min_value=1, max_value=8)

SETTINGS = dict(
    max_examples=40,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    deadline=None,
)


class TestCoinProperties:
    """Property-based tests for minted coins."""

    @given(owner=identities, k=ris_lengths)
    @settings(**SETTINGS)
    def test_every_preimage_opens_its_commitment(self, authority, owner, k):
        """Property: hash(preimage[side][i]) == commitment[side][i]."""
        coin = Coin.mint(owner, 1, authority.public_params, ris_length=k)

        for side in Side:
            hashes = coin.record().hashes_for(side)
            for i in range(k):
                assert hash_preimage(coin.reveal_side(side, i)) == hashes[i]

    @given(owner=identities, k=ris_lengths)
    @settings(**SETTINGS)
    def test_every_pair_hides_the_owner(self, authority, owner, k):
        """Property: left[i] XOR right[i] == marker || owner."""
        coin = Coin.mint(owner, 1, authority.public_params, ris_length=k)

        for i in range(k):
            plaintext = decrypt_otp(coin.left_ident[i], coin.right_ident[i])
            assert plaintext.startswith(b"IDENT:")
            assert plaintext[len(b"IDENT:"):].decode("utf-8") == owner

    @given(amount=st.integers(min_value=0, max_value=2**63 - 1), k=ris_lengths)
    @settings(**SETTINGS)
    def test_parse_recovers_commitments(self, authority, amount, k):
        """Property: parse(serialize(coin)) recovers the public record."""
        coin = Coin.mint("alice", amount, authority.public_params, ris_length=k)

        assert Coin.parse(coin.serialize(), ris_length=k) == coin.record()

    @given(owner=identities, k=ris_lengths)
    @settings(**SETTINGS)
    def test_opposite_reveals_identify_owner(self, authority, owner, k):
        """Property: opposite-side reveals always expose the owner."""
        coin = Coin.mint(owner, 1, authority.public_params, ris_length=k)

        report = determine_cheater(
            coin.guid, coin.get_ris(Side.LEFT), coin.get_ris(Side.RIGHT), record=coin.record()
        )

        assert report.verdict == Verdict.OWNER_DOUBLE_SPEND
        assert report.identity == owner

    @given(shares=st.lists(st.binary(min_size=1, max_size=32), min_size=0, max_size=10))
    @settings(**SETTINGS)
    def test_identical_reveals_blame_merchant(self, shares):
        """Property: determine_cheater(guid, ris, ris) is merchant fraud."""
        report = determine_cheater("g", shares, list(shares))

        assert report.verdict == Verdict.MERCHANT_FRAUD
