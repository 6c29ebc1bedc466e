"""Errors raised by the service layer and mapped to HTTP statuses by the server."""

from __future__ import annotations


class NotFoundError(Exception):
    """A requested resource (such as a static asset) does not exist. Maps to 404."""

    def __init__(self, kind: str, key: str = ""):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} not found: /{key.lstrip('/')}" if key else f"{kind} not found")
