from __future__ import annotations

from fastapi import Request

FORWARDED_FOR_HEADER = "x-forwarded-for"
UNKNOWN_CLIENT = "unknown"


def client_id_from(forwarded_for: str | None, peer_host: str | None) -> str:
    # Header values are caller-controlled; the result is a quota key, not an identity.
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    if peer_host:
        return peer_host
    return UNKNOWN_CLIENT


def resolve_client_id(request: Request) -> str:
    peer_host = request.client.host if request.client else None
    return client_id_from(request.headers.get(FORWARDED_FOR_HEADER), peer_host)
