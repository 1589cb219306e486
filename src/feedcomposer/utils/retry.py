"""Retry utilities with exponential backoff for feedcomposer storage access."""

from __future__ import annotations

import functools
import random
import time
from dataclasses import dataclass, field
from typing import Callable, ParamSpec, TypeVar

from feedcomposer.exceptions import DatabaseBusyError
from feedcomposer.utils.logging import get_logger

logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY = 0.05  # seconds
DEFAULT_MAX_DELAY = 2.0  # seconds
DEFAULT_EXPONENTIAL_BASE = 2.0


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay: float = DEFAULT_BASE_DELAY
    max_delay: float = DEFAULT_MAX_DELAY
    exponential_base: float = DEFAULT_EXPONENTIAL_BASE
    jitter: bool = True
    retryable_exceptions: tuple[type[Exception], ...] = field(
        default_factory=lambda: (DatabaseBusyError,)
    )

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if self.base_delay <= 0:
            raise ValueError("base_delay must be positive")
        if self.max_delay < self.base_delay:
            raise ValueError("max_delay must be >= base_delay")


def calculate_backoff_delay(attempt: int, config: RetryConfig) -> float:
    """
    Calculate delay with exponential backoff and optional jitter.

    Args:
        attempt: Current attempt number (0-indexed).
        config: Retry configuration.

    Returns:
        Delay in seconds before next attempt.
    """
    delay = min(config.base_delay * (config.exponential_base**attempt), config.max_delay)

    if config.jitter:
        # Up to 25% extra
        delay += delay * 0.25 * random.random()

    return delay


def with_retry(
    config: RetryConfig | None = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Decorator retrying a storage call while it fails with a retryable error.

    Usage:
        @with_retry(DATABASE_RETRY)
        def count_reviews() -> int:
            with get_connection() as conn:
                return conn.execute("SELECT COUNT(*) FROM reviews").fetchone()[0]

    Non-retryable exceptions propagate immediately. Once the attempts are
    used up the last retryable exception is re-raised unchanged.
    """
    if config is None:
        config = RetryConfig()

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            attempts = config.max_retries + 1
            for attempt in range(attempts):
                try:
                    return func(*args, **kwargs)
                except config.retryable_exceptions as e:
                    if attempt == config.max_retries:
                        logger.error(f"All {attempts} attempts failed for {func.__name__}")
                        raise

                    delay = calculate_backoff_delay(attempt, config)
                    logger.warning(
                        f"{func.__name__} attempt {attempt + 1}/{attempts} failed: {e}. "
                        f"Retrying in {delay:.2f}s..."
                    )
                    time.sleep(delay)

            raise RuntimeError("Unexpected retry loop exit")

        return wrapper

    return decorator


# Short waits: sqlite already blocks for busy_timeout before reporting a lock
DATABASE_RETRY = RetryConfig(
    max_retries=3,
    base_delay=0.05,
    max_delay=1.0,
)
