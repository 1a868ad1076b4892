"""Retry with exponential backoff around the model call, rate limits only."""

import time
from typing import Callable, Optional, TypeVar

from logdigest.core.logging import get_logger
from logdigest.errors import InterpretationError

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY = 2.0

RATE_LIMIT_MARKERS = ("429", "too many requests", "rate limit", "quota")


def is_rate_limit_error(exc: BaseException) -> bool:
    """True for HTTP 429 style failures, whichever client raised them."""
    for attr in ("status_code", "status", "code"):
        if getattr(exc, attr, None) == 429:
            return True
    message = str(exc).lower()
    return any(marker in message for marker in RATE_LIMIT_MARKERS)


def backoff_delay(attempt: int, base_delay: float = DEFAULT_BASE_DELAY) -> float:
    """Delay before retry number `attempt` (0-based): 2s, 4s, 8s with the default base."""
    return base_delay * (2 ** attempt)


def with_retry(
    fn: Callable[[], T],
    max_retries: int = DEFAULT_MAX_RETRIES,
    base_delay: float = DEFAULT_BASE_DELAY,
    sleep: Callable[[float], None] = time.sleep,
    venue: Optional[str] = None,
) -> T:
    """
    Call `fn` up to `max_retries` times.

    Only rate-limit errors are retried. Anything else, or running out of
    attempts, surfaces as InterpretationError with the last cause chained.
    """
    attempts = max(1, int(max_retries))
    last_error: Optional[BaseException] = None

    for attempt in range(attempts):
        try:
            return fn()
        except InterpretationError:
            raise
        except Exception as e:
            last_error = e
            logger.error(f"[{venue or 'llm'}] Attempt {attempt + 1}/{attempts} failed: {e}")

            if not is_rate_limit_error(e):
                break

            if attempt < attempts - 1:
                delay = backoff_delay(attempt, base_delay)
                logger.info(f"[{venue or 'llm'}] Rate limited. Waiting {delay:.1f}s before retry...")
                sleep(delay)

    raise InterpretationError(
        f"Failed to analyze log digest: {last_error}. "
        "You may have hit your API quota - try again later.",
        venue=venue,
        attempts=attempts,
    ) from last_error
