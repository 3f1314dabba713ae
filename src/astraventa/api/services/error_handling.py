"""Error responses for the relay endpoints.

Every error goes through ``ErrorResponseBuilder`` so that CORS headers and
``Cache-Control: no-store`` are present on failures as well as successes.
Error bodies keep the flat ``{"error": "<message>"}`` shape the site's
front end already reads.
"""

import logging
from dataclasses import dataclass

from fastapi.responses import JSONResponse

from astraventa.api.cors import json_response

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ErrorResponseBuilder:
    """Centralized builder for consistent error responses across all endpoints."""

    @staticmethod
    def bad_request(message: str, origin: str = "*") -> JSONResponse:
        """Build a 400 Bad Request error response.

        Args:
            message: Why the body was rejected (e.g. "Invalid JSON")
            origin: Allowed origin for CORS headers

        Returns:
            JSONResponse with 400 status and error details
        """
        return json_response({"error": message}, 400, origin=origin)

    @staticmethod
    def method_not_allowed(origin: str = "*") -> JSONResponse:
        """Build a 405 Method Not Allowed error response."""
        response = json_response({"error": "Method Not Allowed"}, 405, origin=origin)
        response.headers["Allow"] = "POST, OPTIONS"
        return response

    @staticmethod
    def client_closed_request(origin: str = "*") -> JSONResponse:
        """Build a 499 response for a caller that disconnected mid-request."""
        return json_response({"error": "Client disconnected"}, 499, origin=origin)

    @staticmethod
    def internal_error(message: str, origin: str = "*") -> JSONResponse:
        """Build a 500 Internal Server Error response.

        Args:
            message: Human-readable error message
            origin: Allowed origin for CORS headers

        Returns:
            JSONResponse with 500 status and error details
        """
        return json_response({"ok": False, "error": message}, 500, origin=origin)
