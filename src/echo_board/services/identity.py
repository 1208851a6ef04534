"""Pseudo-identity derived from connection metadata.

There are no accounts. A caller is recognized by a fingerprint of its
address and user-agent, which is stable across requests from the same
client but not unique: clients behind one NAT with the same browser share a
fingerprint.
"""

from __future__ import annotations

import re

UNKNOWN_IDENTITY = "unknown"
MAX_IDENTITY_LENGTH = 64

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")


def resolve_identity(address: str | None, user_agent: str | None) -> str:
    """Return the identity fingerprint for a client.

    Args:
        address: Source address of the connection, if known.
        user_agent: Raw ``User-Agent`` header, if sent.

    Returns:
        At most 64 alphanumeric characters; ``"unknown"`` when nothing usable
        remains after normalization.
    """
    raw = f"{address or UNKNOWN_IDENTITY}-{user_agent or ''}"
    fingerprint = _NON_ALPHANUMERIC.sub("", raw)[:MAX_IDENTITY_LENGTH]
    return fingerprint or UNKNOWN_IDENTITY


def client_address(peer_host: str | None, forwarded_for: str | None, *, trust_proxy: bool) -> str | None:
    """Pick the address used for fingerprinting.

    When running behind a trusted reverse proxy the first ``X-Forwarded-For``
    hop is the real client; otherwise the socket peer is used.
    """
    if trust_proxy and forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop
    return peer_host
