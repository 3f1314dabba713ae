"""Endpoint response DTOs.

Type-safe response containers that provide consistent structure
across all endpoint responses.
"""

from dataclasses import dataclass
from typing import Any

from fastapi.responses import Response

from astraventa.api.cors import json_response


@dataclass(frozen=True, slots=True)
class RelayResponse:
    """Status and JSON body produced by a relay service."""

    status: int
    content: dict[str, Any]

    @property
    def ok(self) -> bool:
        return bool(self.content.get("ok"))

    def to_response(self, origin: str) -> Response:
        """Convert to FastAPI response."""
        return json_response(self.content, self.status, origin=origin)
