"""Bounded polling for conditions that have an observable ready signal."""

import time
from typing import Callable

from tenacity import (
    Retrying,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
)

# Hard cap on polls, independent of the sleep function in use
MAX_POLLS = 50


def wait_until(
    condition: Callable[[], bool],
    timeout_ms: int,
    sleep: Callable[[float], None] = time.sleep,
    initial_delay: float = 0.1,
    max_delay: float = 2.0,
) -> bool:
    """Poll ``condition`` with exponential backoff until it holds or time runs out.

    Returns the last result instead of raising, so callers decide whether a
    timeout is fatal. Exceptions raised by ``condition`` count as "not yet".
    """
    if timeout_ms <= 0:
        try:
            return bool(condition())
        except Exception:
            return False

    retrying = Retrying(
        stop=stop_after_delay(timeout_ms / 1000) | stop_after_attempt(MAX_POLLS),
        wait=wait_exponential(multiplier=initial_delay, min=initial_delay, max=max_delay),
        retry=retry_if_result(lambda ok: not ok) | retry_if_exception_type(Exception),
        retry_error_callback=lambda state: False,
        sleep=sleep,
        reraise=False,
    )
    return bool(retrying(condition))
