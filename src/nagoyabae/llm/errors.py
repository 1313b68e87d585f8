"""Typed provider errors carrying their failure classification."""

from nagoyabae.llm.types import FailureKind


class ProviderError(Exception):
    """Base error raised by adapters, codec and normalizer."""

    kind: FailureKind = FailureKind.UNKNOWN

    def __init__(self, message: str, *, kind: FailureKind | None = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class MissingCredentialError(ProviderError):
    kind = FailureKind.MISSING_CREDENTIAL


class QuotaExceededError(ProviderError):
    kind = FailureKind.QUOTA_EXCEEDED


class UnsupportedModelError(ProviderError):
    kind = FailureKind.UNSUPPORTED_MODEL


class MalformedResponseError(ProviderError):
    kind = FailureKind.MALFORMED_RESPONSE


class MalformedInputError(ProviderError):
    kind = FailureKind.MALFORMED_INPUT


class TerminalFailure(Exception):
    """Raised by the orchestrator once a request cannot succeed.

    Carries the classified kind, the raw diagnostic message and, for
    generation, every attempt made along the fallback chain.
    """

    def __init__(self, kind: FailureKind, message: str, attempts=None):
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind
        self.message = message
        self.attempts = list(attempts or [])
