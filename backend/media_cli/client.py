"""HTTP client helpers for the Mediashelf CLI."""
from __future__ import annotations

import httpx

DEFAULT_HEADERS = {"Accept": "application/json", "User-Agent": "mediashelf-cli/0.1.0"}


def create_client(base_url: str, *, timeout: float = 10.0, transport: httpx.BaseTransport | None = None) -> httpx.Client:
    """Instantiate an HTTPX client pointed at the Mediashelf API."""

    return httpx.Client(
        base_url=base_url,
        timeout=timeout,
        transport=transport,
        headers=DEFAULT_HEADERS,
    )
