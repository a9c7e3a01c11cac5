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
"""Exception hierarchy for fnware.

Errors raised by a decorated function or by one of its hooks are never
wrapped in these types; they reach the caller unchanged. The classes below
cover only what fnware itself detects.

Categories:
- MiddlewareException: decoration-time failures (bad config, failed examples)
- HookException: failures raised by the ready-made hooks in ``fnware.hooks``
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class FnwareException(Exception):
    """Base exception for all fnware errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "EXAMPLE_MISMATCH").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Middleware Exceptions
# =============================================================================


class MiddlewareException(FnwareException):
    """Failures detected while decorating a function."""


class MiddlewareConfigException(MiddlewareException):
    """The middleware configuration is malformed or cannot be applied."""


class ExampleMismatchException(MiddlewareException):
    """A declared example produced a different value than expected."""


# =============================================================================
# Hook Exceptions
# =============================================================================


class HookException(FnwareException):
    """Failures raised by the ready-made hooks."""


class InputValidationException(HookException):
    """Inputs were rejected by a validation hook."""


class CircuitOpenException(HookException):
    """Circuit breaker is open, call rejected before reaching the function."""
