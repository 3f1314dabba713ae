import logging
import time
from collections import defaultdict
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, Optional

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

NOISY_HTTP_LOGGERS = (
    "httpx",
    "httpcore",
    "httpcore.http11",
    "httpcore.connection",
)

# Request id of the chat request running in the current task, if any
_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def normalize_log_level(log_level: str) -> str:
    """Return an upper-case level name, defaulting to INFO when unknown."""
    # Extract just the first word to handle comments
    words = (log_level or "").split()
    level = words[0].upper() if words else ""
    return level if level in VALID_LOG_LEVELS else "INFO"


def set_noisy_http_logger_levels(current_log_level: str) -> None:
    """Ensure HTTP client noise only surfaces at DEBUG level."""

    noisy_level = logging.DEBUG if current_log_level == "DEBUG" else logging.WARNING
    for logger_name in NOISY_HTTP_LOGGERS:
        logging.getLogger(logger_name).setLevel(noisy_level)


# Enhanced Logging Infrastructure
@dataclass
class RequestMetrics:
    """Metrics for a single chat request"""

    request_id: str
    start_time: float
    end_time: Optional[float] = None
    conversation_id: Optional[str] = None
    message_count: int = 0
    request_size: int = 0  # bytes
    model_identifier: Optional[str] = None
    fallback: bool = False
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def duration_ms(self) -> float:
        """Request duration in milliseconds"""
        if self.end_time:
            return (self.end_time - self.start_time) * 1000
        return 0


@dataclass
class SummaryMetrics:
    """Accumulated metrics for summary"""

    total_requests: int = 0
    total_fallbacks: int = 0
    total_errors: int = 0
    total_duration_ms: float = 0
    model_counts: Dict[str, int] = field(default_factory=lambda: defaultdict(int))
    error_counts: Dict[str, int] = field(default_factory=lambda: defaultdict(int))

    def add_request(self, metrics: RequestMetrics) -> None:
        """Add request metrics to summary"""
        self.total_requests += 1
        self.total_duration_ms += metrics.duration_ms

        if metrics.model_identifier:
            self.model_counts[metrics.model_identifier] += 1

        if metrics.fallback:
            self.total_fallbacks += 1

        if metrics.error:
            self.total_errors += 1
            error_key = metrics.error_type or "unknown"
            self.error_counts[error_key] += 1


class RequestTracker:
    """Tracks in-flight chat requests and emits periodic summaries"""

    def __init__(self, summary_interval: int = 100) -> None:
        self.active_requests: Dict[str, RequestMetrics] = {}
        self.summary_metrics = SummaryMetrics()
        self.summary_interval = summary_interval
        self.request_count = 0

    def start_request(
        self, request_id: str, conversation_id: Optional[str] = None, message_count: int = 0
    ) -> RequestMetrics:
        """Start tracking a new request"""
        metrics = RequestMetrics(
            request_id=request_id,
            start_time=time.time(),
            conversation_id=conversation_id,
            message_count=message_count,
        )
        self.active_requests[request_id] = metrics
        return metrics

    def end_request(self, request_id: str, **kwargs: Any) -> None:
        """End request tracking and update summary"""
        if request_id not in self.active_requests:
            return

        metrics = self.active_requests.pop(request_id)
        metrics.end_time = time.time()

        for key, value in kwargs.items():
            if hasattr(metrics, key):
                setattr(metrics, key, value)

        self.summary_metrics.add_request(metrics)
        self.request_count += 1

        if self.request_count % self.summary_interval == 0:
            self._emit_summary()

    def get_request(self, request_id: str) -> Optional[RequestMetrics]:
        """Get active request metrics"""
        return self.active_requests.get(request_id)

    def _emit_summary(self) -> None:
        """Emit summary log"""
        summary = self.summary_metrics
        logger.info(
            f"📊 SUMMARY (last {self.summary_interval} requests) | "
            f"Total: {summary.total_requests} | "
            f"Fallbacks: {summary.total_fallbacks} | "
            f"Errors: {summary.total_errors} | "
            f"Avg Duration: {summary.total_duration_ms / max(1, summary.total_requests):.0f}ms"
        )

        if summary.model_counts:
            model_dist = " | ".join(
                [f"{model}: {count}" for model, count in summary.model_counts.items()]
            )
            logger.info(f"📊 MODELS | {model_dist}")

        if summary.error_counts:
            error_dist = " | ".join(
                [f"{error}: {count}" for error, count in summary.error_counts.items()]
            )
            logger.warning(f"📊 ERRORS | {error_dist}")

        self.summary_metrics = SummaryMetrics()


class ConversationLogger:
    """Logger with correlation ID support"""

    @staticmethod
    def get_logger() -> logging.Logger:
        """Get logger with correlation ID support"""
        return logging.getLogger("conversation")

    @staticmethod
    @contextmanager
    def correlation_context(request_id: str) -> Generator[None, None, None]:
        """Tag log records emitted by the current task with ``request_id``.

        The id lives in a context variable, so overlapping requests on the same
        event loop each keep their own.
        """
        token = _correlation_id.set(request_id)
        try:
            yield
        finally:
            _correlation_id.reset(token)


def current_correlation_id() -> Optional[str]:
    return _correlation_id.get()


class CorrelationIdFilter(logging.Filter):
    """Copies the current correlation ID onto each record passing through."""

    def filter(self, record: logging.LogRecord) -> bool:
        request_id = _correlation_id.get()
        if request_id is not None:
            record.correlation_id = request_id
        return True


class CorrelationFormatter(logging.Formatter):
    """Prefixes messages with the first 8 characters of the correlation ID"""

    def format(self, record: logging.LogRecord) -> str:
        if hasattr(record, "correlation_id"):
            # Work on a copy so other handlers see the original message
            record = logging.makeLogRecord(record.__dict__)
            record.msg = f"[{record.correlation_id[:8]}] {record.msg}"
        return super().format(record)


class HttpRequestLogDowngradeFilter(logging.Filter):
    """Downgrade noisy third-party HTTP logs to DEBUG."""

    def __init__(self, *prefixes: str) -> None:
        super().__init__()
        self.prefixes = prefixes

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno == logging.INFO:
            for prefix in self.prefixes:
                if record.name.startswith(prefix):
                    record.levelno = logging.DEBUG
                    record.levelname = logging.getLevelName(logging.DEBUG)
                    break
        return True


def configure_root_logging(log_level: str) -> str:
    """Install the correlation-aware handler on the root logger.

    Returns the effective level name.
    """
    level = normalize_log_level(log_level)

    handler = logging.StreamHandler()
    handler.addFilter(CorrelationIdFilter())
    handler.addFilter(HttpRequestLogDowngradeFilter(*NOISY_HTTP_LOGGERS))
    handler.setFormatter(
        CorrelationFormatter("%(asctime)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S")
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level))

    # Configure uvicorn to be quieter
    for uvicorn_logger in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        logging.getLogger(uvicorn_logger).setLevel(logging.WARNING)

    set_noisy_http_logger_levels(level)
    logger.debug(f"Logging configured at {level}")
    return level


# Global instances
logger = logging.getLogger(__name__)
conversation_logger = ConversationLogger.get_logger()
