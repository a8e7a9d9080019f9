import logging
import time
from typing import Callable
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from plansync.core.errors import FetchError

logger = logging.getLogger(__name__)


def is_retryable(error: BaseException) -> bool:
    return isinstance(error, FetchError) and error.retryable


def build_retrying(
    max_retries: int,
    sleep: Callable[[float], None] = time.sleep,
) -> Retrying:
    """
    Retry controller for provider requests.

    Makes at most `max_retries + 1` attempts and waits 2, 4, 8... seconds
    between them. Only retryable FetchErrors are retried; anything else, and
    the last error once attempts run out, is re-raised unchanged.
    """
    return Retrying(
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_exponential(multiplier=2, exp_base=2),
        retry=retry_if_exception(is_retryable),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        sleep=sleep,
        reraise=True,
    )
