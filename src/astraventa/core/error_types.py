"""Error type enumeration for Astraventa Relay.

Provides type-safe error categorization for provider failures, metrics and
error responses.
"""

from enum import Enum


class ErrorType(str, Enum):
    """Error type categories for provider failures and error responses.

    These error types are used throughout the codebase for:
    - ProviderError.error_type (why a provider in the chain was passed over)
    - RequestMetrics.error_type field
    - Error aggregation in metrics summaries
    """

    # Provider chain outcomes
    MISSING_CREDENTIAL = "missing_credential"  # Provider skipped, never called
    UPSTREAM_TIMEOUT = "upstream_timeout"  # Per-call timeout elapsed
    UPSTREAM_HTTP_ERROR = "upstream_http_error"  # Non-2xx status from provider
    TRANSPORT_ERROR = "transport_error"  # Connection/protocol failure
    MALFORMED_RESPONSE = "malformed_response"  # Body is not JSON or has no text
    EMPTY_CONTENT = "empty_content"  # 2xx with nothing left after sanitizing
    ALL_PROVIDERS_FAILED = "all_providers_failed"  # Chain exhausted, fallback served

    # Request lifecycle errors
    BAD_REQUEST = "bad_request"  # Invalid inbound request
    CANCELLED = "cancelled"  # Client disconnected mid-chain

    # Catch-all
    UNEXPECTED_ERROR = "unexpected_error"  # Unhandled/unexpected error
