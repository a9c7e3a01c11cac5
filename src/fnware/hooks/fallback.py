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
"""Fallback hooks for graceful degradation."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any


def fallback_value(
    value: Any,
    on: tuple[type[Exception], ...] = (Exception,),
) -> Callable[..., Any]:
    """Return an ``on_error`` hook producing a static value.

    Args:
        value: Result returned in place of the failed call.
        on: Exception types to recover from; others are re-raised.
    """

    def on_error(definition: Callable[..., Any], error: Exception, *inputs: Any) -> Any:
        if not isinstance(error, on):
            raise error
        return value

    return on_error


def fallback_to(
    fallback_method: Callable[..., Any],
    on: tuple[type[Exception], ...] = (Exception,),
) -> Callable[..., Any]:
    """Return an ``on_error`` hook delegating to another function.

    The fallback receives the same inputs as the failed call plus the
    exception as a keyword argument ``exc``. For coroutine functions the
    fallback may itself be async; its result is awaited.

    Args:
        fallback_method: Callable invoked as ``fallback_method(*inputs, exc=error)``.
        on: Exception types to recover from; others are re-raised.
    """

    def on_error(definition: Callable[..., Any], error: Exception, *inputs: Any) -> Any:
        if not isinstance(error, on):
            raise error
        return fallback_method(*inputs, exc=error)

    return on_error
