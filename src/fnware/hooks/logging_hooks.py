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
"""Logging hooks — structured call, result and failure events."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fnware.logging import get_logger

_RAISE: Any = object()


def _resolve_logger(logger: Any | None) -> Any:
    return logger if logger is not None else get_logger("fnware.hooks")


def _name(definition: Callable[..., Any]) -> str:
    return getattr(definition, "__qualname__", None) or repr(definition)


def log_inputs(logger: Any | None = None, event: str = "call.started") -> Callable[..., tuple[Any, ...]]:
    """Return an ``on_input`` hook that logs the inputs and leaves them unchanged."""
    log = _resolve_logger(logger)

    def on_input(definition: Callable[..., Any], *inputs: Any) -> tuple[Any, ...]:
        log.info(event, function=_name(definition), inputs=inputs)
        return inputs

    return on_input


def log_outputs(logger: Any | None = None, event: str = "call.succeeded") -> Callable[..., Any]:
    """Return an ``on_output`` hook that logs the output and leaves it unchanged."""
    log = _resolve_logger(logger)

    def on_output(definition: Callable[..., Any], output: Any, *inputs: Any) -> Any:
        log.info(event, function=_name(definition), inputs=inputs, output=output)
        return output

    return on_output


def log_errors(
    logger: Any | None = None,
    event: str = "call.failed",
    fallback: Any = _RAISE,
) -> Callable[..., Any]:
    """Return an ``on_error`` hook that logs the failure.

    The error is re-raised unless *fallback* is given, in which case the
    fallback value becomes the function's result.
    """
    log = _resolve_logger(logger)

    def on_error(definition: Callable[..., Any], error: Exception, *inputs: Any) -> Any:
        log.error(
            event,
            function=_name(definition),
            inputs=inputs,
            error_type=type(error).__name__,
            error=str(error),
        )
        if fallback is _RAISE:
            raise error
        return fallback

    return on_error
