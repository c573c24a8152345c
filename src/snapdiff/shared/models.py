"""
Summary: Small value objects shared across features.
Why: Keep configuration and feature layers free of import cycles.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Credentials:
    """API key pair used to authenticate against the comparison service."""

    api_key: str
    api_secret: str

    def as_auth(self) -> tuple[str, str]:
        """Return the pair in the shape ``requests`` expects for basic auth."""

        return (self.api_key, self.api_secret)

    def __repr__(self) -> str:
        return f"Credentials(api_key={self.api_key!r}, api_secret='***')"


__all__ = ["Credentials"]
