import enum


class FetchErrorCause(enum.Enum):
    NETWORK = "network"
    TIMEOUT = "timeout"
    DNS = "dns"
    HTTP_5XX = "http_5xx"
    HTTP_4XX = "http_4xx"
    MALFORMED = "malformed"


RETRYABLE_CAUSES = frozenset(
    {
        FetchErrorCause.NETWORK,
        FetchErrorCause.TIMEOUT,
        FetchErrorCause.DNS,
        FetchErrorCause.HTTP_5XX,
    }
)


class PlanSyncError(Exception):
    """Base class for every error raised by the plansync services."""


class FetchError(PlanSyncError):
    """The provider feed could not be retrieved."""

    def __init__(self, message: str, cause: FetchErrorCause):
        super().__init__(message)
        self.cause = cause

    @property
    def retryable(self) -> bool:
        return self.cause in RETRYABLE_CAUSES

    def __str__(self) -> str:
        return f"[{self.cause.value}] {super().__str__()}"


class ParseError(FetchError):
    """The provider answered, but the body is not a usable plan feed."""

    def __init__(self, message: str):
        super().__init__(message, FetchErrorCause.MALFORMED)


class StorageError(PlanSyncError):
    """A storage operation failed; writes have been rolled back."""


class ValidationError(PlanSyncError):
    """Client supplied query input that violates a search constraint."""


class SyncInProgressError(PlanSyncError):
    """A sync was requested while another one is still running."""
