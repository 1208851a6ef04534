# tests/test_identity.py
"""Tests for identity fingerprinting."""

from echo_board.services.identity import (
    MAX_IDENTITY_LENGTH,
    UNKNOWN_IDENTITY,
    client_address,
    resolve_identity,
)


class TestResolveIdentity:
    """Fingerprints are stable, alphanumeric and bounded."""

    def test_deterministic(self):
        first = resolve_identity("203.0.113.7", "Mozilla/5.0 (X11; Linux x86_64)")
        second = resolve_identity("203.0.113.7", "Mozilla/5.0 (X11; Linux x86_64)")
        assert first == second

    def test_strips_non_alphanumeric(self):
        assert resolve_identity("10.0.0.1", "curl/8.1") == "10001curl81"

    def test_truncated_to_limit(self):
        fingerprint = resolve_identity("::1", "A" * 500)
        assert len(fingerprint) == MAX_IDENTITY_LENGTH
        assert fingerprint.isalnum()

    def test_distinct_user_agents_differ(self):
        assert resolve_identity("10.0.0.1", "firefox") != resolve_identity("10.0.0.1", "chrome")

    def test_missing_metadata_is_unknown(self):
        assert resolve_identity(None, None) == UNKNOWN_IDENTITY

    def test_missing_address_still_uses_user_agent(self):
        assert resolve_identity(None, "curl") == "unknowncurl"

    def test_nothing_alphanumeric_left_is_unknown(self):
        assert resolve_identity("::", "") == UNKNOWN_IDENTITY


class TestClientAddress:
    def test_peer_used_by_default(self):
        assert client_address("10.0.0.2", "198.51.100.1", trust_proxy=False) == "10.0.0.2"

    def test_first_forwarded_hop_when_trusted(self):
        forwarded = "198.51.100.1, 10.0.0.1"
        assert client_address("10.0.0.2", forwarded, trust_proxy=True) == "198.51.100.1"

    def test_trusted_without_header_falls_back_to_peer(self):
        assert client_address("10.0.0.2", None, trust_proxy=True) == "10.0.0.2"
