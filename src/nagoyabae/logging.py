"""Centralized logging configuration.

All entry points (CLI, server) should call configure_logging() early.

Logging Levels:
- DEBUG: Provider calls, generation attempts
- INFO: Completed scoring/generation, fallback transitions
- WARNING: Terminal failures, exhausted fallback chains
- ERROR: Unexpected failures in the HTTP layer

Event-style messages (``logger.info("generation_fallback", extra={...})``)
have their extra fields rendered as ``key=value`` pairs after the message.
Every record passes through secret redaction before it is emitted.
"""

import logging
import os
import re
from dataclasses import dataclass, field

# Default patterns for secret detection and redaction
DEFAULT_REDACT_PATTERNS: list[str] = [
    # Anthropic (sk-ant-...) and OpenAI (sk-..., sk-proj-...) keys
    r"\b(sk-[A-Za-z0-9_-]{20,})\b",
    # Google AI Studio keys
    r"\b(AIza[0-9A-Za-z\-_]{20,})\b",
    # ENV-style assignments: API_KEY=secret or API_KEY: secret
    r"\b[A-Z0-9_]+(?:KEY|TOKEN|SECRET)\s*[=:]\s*([^\s\"']{8,})",
    # Bearer tokens in headers
    r"\bBearer\s+([A-Za-z0-9._\-+=]{20,})\b",
]

# Attributes every LogRecord has; anything else came from ``extra``
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime", "component"}


@dataclass
class SecretRedactor:
    """Redacts API keys and tokens, keeping the first and last 4 characters."""

    patterns: list[re.Pattern[str]] = field(default_factory=list)
    enabled: bool = True

    def __post_init__(self) -> None:
        if not self.patterns:
            self.patterns = [
                re.compile(p, re.IGNORECASE) for p in DEFAULT_REDACT_PATTERNS
            ]

    def redact(self, text: str) -> str:
        if not self.enabled or not text:
            return text
        result = text
        for pattern in self.patterns:
            result = pattern.sub(self._mask_match, result)
        return result

    def _mask_match(self, match: re.Match[str]) -> str:
        full = match.group(0)
        token = match.group(1) if match.lastindex else full

        # Already masked
        if "..." in token:
            return full

        if len(token) < 12:
            return full.replace(token, "***") if token != full else "***"

        masked = f"{token[:4]}...{token[-4:]}"
        return full.replace(token, masked) if token != full else masked


class RedactingFilter(logging.Filter):
    """Applies a SecretRedactor to the message, args and extra fields."""

    def __init__(self, redactor: SecretRedactor | None = None):
        super().__init__()
        self.redactor = redactor or SecretRedactor()

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = self.redactor.redact(record.getMessage())
        record.args = None
        for key, value in _extra_fields(record).items():
            if isinstance(value, str):
                setattr(record, key, self.redactor.redact(value))
        return True


def _extra_fields(record: logging.LogRecord) -> dict[str, object]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class ComponentFormatter(logging.Formatter):
    """Formatter that shortens logger paths and renders extra fields.

    - nagoyabae.llm.fallback -> llm
    - nagoyabae.server.routes.analyze -> server
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = record.name.split(".")
        if len(parts) >= 2 and parts[0] == "nagoyabae":
            record.component = parts[1]
        else:
            record.component = parts[0]
        text = super().format(record)
        extras = _extra_fields(record)
        if extras:
            text += " " + " ".join(f"{key}={value}" for key, value in extras.items())
        return text


# Third-party loggers that are too noisy at INFO level
NOISY_LOGGERS = [
    "httpx",  # HTTP client used by the provider SDKs
    "httpcore",
    "uvicorn.access",
    "anthropic",
    "openai",
    "google_genai",
]


def configure_logging(level: str | None = None, use_rich: bool = False) -> None:
    """Configure logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses NAGOYABAE_LOG_LEVEL env var or INFO.
        use_rich: Use Rich handler for colorful output (server mode).
    """
    if level is None:
        level = os.environ.get("NAGOYABAE_LOG_LEVEL", "INFO")
    level = level.upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        level = "INFO"

    if use_rich:
        from rich.logging import RichHandler

        handler: logging.Handler = RichHandler(
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
            markup=False,
        )
        handler.setFormatter(ComponentFormatter("%(component)s | %(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            ComponentFormatter(
                "%(asctime)s | %(levelname)-8s | %(component)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )
    handler.addFilter(RedactingFilter())

    logging.basicConfig(
        level=getattr(logging, level),
        handlers=[handler],
        force=True,
    )

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    if use_rich:
        for logger_name in ("uvicorn", "uvicorn.error"):
            uv_logger = logging.getLogger(logger_name)
            uv_logger.handlers = [handler]
            uv_logger.propagate = False
