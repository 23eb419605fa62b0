"""Retry utilities using tenacity.

Two flavours live here: ``RetryPolicy`` guards a single unit of work with a
fixed retry budget and no backoff (used by the pollers), and
``create_retry_decorator`` builds the exponential-backoff decorator used for
transport-level network failures.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    before_sleep_log,
    retry,
    retry_if_exception,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_none,
    wait_random,
)

from analytix.domain.config.retry import RetrySpec, TransportRetryConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy:
    """Invoke work, retrying it while it fails with one of ``spec.on``.

    The first invocation plus up to ``spec.max_attempts`` retries are made;
    the last failure is re-raised as-is once the budget is spent. Failures of
    any other kind propagate immediately without consuming the budget.
    """

    def __init__(self, spec: Optional[RetrySpec] = None):
        self.spec = spec or RetrySpec()

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self.spec.max_attempts + 1),
            wait=wait_none(),
            retry=retry_if_exception_type(self.spec.on),
            reraise=True,
        )

    def call(self, work: Callable[[], T]) -> T:
        """Run ``work`` under this policy and return its result"""
        return self._retrying()(work)


def retryable(
    work: Callable[[], T],
    max_attempts: int = 1,
    on: Tuple[Type[BaseException], ...] = (Exception,),
) -> T:
    """Shortcut for ``RetryPolicy(RetrySpec(...)).call(work)``"""
    spec = RetrySpec(max_attempts=max_attempts, on=on)
    return RetryPolicy(spec).call(work)


def create_retry_decorator(
    retry_config: TransportRetryConfig,
    retry_condition: Callable[[BaseException], bool],
    before_sleep: Callable[[RetryCallState], None] | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Create an exponential-backoff retry decorator with tenacity.

    Args:
        retry_config: Transport retry configuration
        retry_condition: Function that returns True if exception should be retried
        before_sleep: Optional callback before sleep (defaults to logging)

    Returns:
        Retry decorator
    """
    # Exponential backoff: initial_delay * (backoff_multiplier ^ attempt)
    wait = wait_exponential(
        multiplier=retry_config.initial_delay,
        exp_base=retry_config.backoff_multiplier,
        min=retry_config.initial_delay,
        max=60.0,
    )

    if retry_config.jitter > 0:
        jitter_amount = retry_config.initial_delay * retry_config.jitter
        wait = wait + wait_random(-jitter_amount, jitter_amount)

    if before_sleep is None:
        before_sleep = before_sleep_log(logger, logging.WARNING)

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        return retry(
            stop=stop_after_attempt(retry_config.max_attempts),
            wait=wait,
            retry=retry_if_exception(retry_condition),
            reraise=True,
            before_sleep=before_sleep,
        )(func)

    return decorator
