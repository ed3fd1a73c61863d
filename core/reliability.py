"""
Circuit breaker for the upstream sports data APIs.

When ESPN or CFBD keeps failing, stop calling it for a cooldown period
and answer from the degraded path instead.
"""

import logging
import time
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional

__all__ = [
    "CircuitState",
    "CircuitBreaker",
    "get_circuit_breaker",
    "reset_circuit_breakers",
]

logger = logging.getLogger(__name__)


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = "closed"  # Normal operation
    OPEN = "open"  # Failing, reject requests
    HALF_OPEN = "half_open"  # Testing recovery


class CircuitBreaker:
    """
    Stops calls to an upstream after repeated failures.

    ``call`` returns None instead of raising, both when the wrapped
    coroutine fails and while the circuit is open.
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = 5,
        success_threshold: int = 1,
        timeout: float = 300.0,
    ):
        self.name = name
        self.failure_threshold = failure_threshold
        self.success_threshold = success_threshold
        self.timeout = timeout

        self.failure_count = 0
        self.success_count = 0
        self.state = CircuitState.CLOSED
        self.opened_at: Optional[float] = None

    async def call(self, func: Callable[..., Awaitable[Any]], *args, **kwargs) -> Any:
        """Execute async function through circuit breaker."""
        if self.state == CircuitState.OPEN:
            if time.time() - (self.opened_at or 0) >= self.timeout:
                self.state = CircuitState.HALF_OPEN
                self.success_count = 0
            else:
                logger.debug(f"{self.name} circuit open, skipping call")
                return None

        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            logger.warning(f"{self.name} API error: {e}")
            self._on_failure()
            return None

        self._on_success()
        return result

    def _on_success(self):
        self.failure_count = 0
        if self.state == CircuitState.HALF_OPEN:
            self.success_count += 1
            if self.success_count >= self.success_threshold:
                self.state = CircuitState.CLOSED
                self.success_count = 0
                logger.info(f"{self.name} circuit closed")

    def _on_failure(self):
        self.failure_count += 1
        if (
            self.state == CircuitState.HALF_OPEN
            or self.failure_count >= self.failure_threshold
        ):
            self.state = CircuitState.OPEN
            self.opened_at = time.time()
            self.failure_count = 0
            logger.warning(f"{self.name} circuit opened for {self.timeout:.0f}s")


# Global circuit breakers per upstream
_circuit_breakers: Dict[str, CircuitBreaker] = {}


def get_circuit_breaker(source: str) -> CircuitBreaker:
    """Get or create circuit breaker for an upstream."""
    if source not in _circuit_breakers:
        _circuit_breakers[source] = CircuitBreaker(source)
    return _circuit_breakers[source]


def reset_circuit_breakers() -> None:
    _circuit_breakers.clear()
