# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Circuit breaker expressed as a set of middleware hooks."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from datetime import timedelta
from enum import Enum, auto
from typing import Any

from fnware.kernel.exceptions import CircuitOpenException
from fnware.middleware.types import MiddlewareConfig


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = auto()
    OPEN = auto()
    HALF_OPEN = auto()


class CircuitBreaker:
    """Circuit breaker that prevents cascading failures.

    Tracks consecutive failures of the decorated function and opens the
    circuit when the threshold is reached. While open, ``on_input`` rejects
    calls before they reach the function. After the recovery timeout the
    circuit is half-open: exactly one trial call is let through and every
    other call is rejected until it settles. A successful trial closes the
    circuit, a failed one re-opens it.

    All state lives here, so one breaker may guard several functions.

    Usage:
        breaker = CircuitBreaker(failure_threshold=3)

        @middleware(breaker.config())
        def fetch(url): ...

    Args:
        failure_threshold: Number of consecutive failures before opening.
        recovery_timeout: How long to wait before allowing a trial call.
        clock: Monotonic time source in seconds.
    """

    def __init__(
        self,
        failure_threshold: int = 5,
        recovery_timeout: timedelta = timedelta(seconds=30),
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._failure_threshold = failure_threshold
        self._recovery_timeout = recovery_timeout.total_seconds()
        self._clock = clock
        self._lock = threading.Lock()
        self._failure_count = 0
        self._last_failure_time: float | None = None
        self._state = CircuitState.CLOSED
        self._trial_in_flight = False

    @property
    def state(self) -> CircuitState:
        """Current circuit state, accounting for recovery timeout."""
        with self._lock:
            return self._current_state()

    @property
    def failure_count(self) -> int:
        return self._failure_count

    def on_input(self, definition: Callable[..., Any], *inputs: Any) -> tuple[Any, ...]:
        """Reject the call while open, or while a half-open trial is running."""
        with self._lock:
            state = self._current_state()
            if state == CircuitState.HALF_OPEN and not self._trial_in_flight:
                self._state = CircuitState.HALF_OPEN
                self._trial_in_flight = True
                return inputs
            failure_count = self._failure_count
        if state != CircuitState.CLOSED:
            detail = "open" if state == CircuitState.OPEN else "half-open with a trial call in flight"
            raise CircuitOpenException(
                f"Circuit breaker is {detail} for {getattr(definition, '__name__', definition)!s}",
                code="CIRCUIT_OPEN",
                context={"state": state.name, "failure_count": failure_count},
            )
        return inputs

    def on_output(self, definition: Callable[..., Any], output: Any, *inputs: Any) -> Any:
        """Close the circuit on a successful call."""
        with self._lock:
            self._failure_count = 0
            self._state = CircuitState.CLOSED
            self._last_failure_time = None
            self._trial_in_flight = False
        return output

    def on_error(self, definition: Callable[..., Any], error: Exception, *inputs: Any) -> Any:
        """Record the failure, possibly open the circuit, and re-raise."""
        with self._lock:
            self._failure_count += 1
            self._last_failure_time = self._clock()
            if self._state == CircuitState.HALF_OPEN or self._failure_count >= self._failure_threshold:
                self._state = CircuitState.OPEN
            self._trial_in_flight = False
        raise error

    def config(self) -> MiddlewareConfig:
        """The three hooks of this breaker as a middleware configuration."""
        return MiddlewareConfig(
            on_input=self.on_input,
            on_output=self.on_output,
            on_error=self.on_error,
        )

    def _current_state(self) -> CircuitState:
        if self._state == CircuitState.OPEN and self._last_failure_time is not None:
            if self._clock() - self._last_failure_time >= self._recovery_timeout:
                return CircuitState.HALF_OPEN
        return self._state
