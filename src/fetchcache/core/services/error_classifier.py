"""Error classification for negative caching."""

from collections.abc import Collection
from enum import Enum

from fetchcache.core.entities.cache_config import DEFAULT_FINAL_STATUS_CODES


class Retryability(Enum):
    """Whether a failed request may be retried without intervention.

    RETRYABLE: The failure may resolve on its own (5xx, 429, network).
    NON_RETRYABLE: A client error that will not change by itself.
    """

    RETRYABLE = "RETRYABLE"
    NON_RETRYABLE = "NON_RETRYABLE"


def classify_status(
    status: int | None,
    final_status_codes: Collection[int] = DEFAULT_FINAL_STATUS_CODES,
) -> Retryability:
    """Classify an HTTP status code.

    Args:
        status: The status code, or None when no response was received.
        final_status_codes: Codes treated as non-retryable.

    Returns:
        NON_RETRYABLE for codes in the final set, RETRYABLE otherwise.
    """
    if status is not None and status in final_status_codes:
        return Retryability.NON_RETRYABLE
    return Retryability.RETRYABLE


class ErrorClassifier:
    """Classify fetch failures by the status code they carry.

    ``HttpError`` is classified by its status. Transport and parse
    errors carry no status and are always retryable.
    """

    def __init__(
        self,
        final_status_codes: Collection[int] = DEFAULT_FINAL_STATUS_CODES,
    ) -> None:
        self._final_status_codes = frozenset(final_status_codes)

    @property
    def final_status_codes(self) -> frozenset[int]:
        return self._final_status_codes

    def classify_status(self, status: int | None) -> Retryability:
        return classify_status(status, self._final_status_codes)

    def classify_error(self, error: BaseException) -> Retryability:
        """Classify an exception raised while fetching.

        Args:
            error: The failure.

        Returns:
            The retryability of the failure.
        """
        return self.classify_status(getattr(error, "status", None))

    def is_final(self, error: BaseException) -> bool:
        return self.classify_error(error) is Retryability.NON_RETRYABLE
