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
"""Middleware decorator — wraps a function with input, output and error hooks."""

from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Callable, Coroutine, Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any, TypeVar

from fnware.kernel.exceptions import ExampleMismatchException, MiddlewareConfigException
from fnware.middleware.types import MiddlewareConfig

F = TypeVar("F", bound=Callable[..., Any])


def create_function_with_middleware(
    definition: F,
    config: MiddlewareConfig | Mapping[str, Any] | None = None,
    /,
    **hooks: Any,
) -> F:
    """Create a new function with optional middleware around *definition*.

    Hooks come either from *config* or from keyword arguments
    (``on_input``, ``on_output``, ``on_error``, ``examples`` and their
    aliases), never both. With no hooks at all, *definition* itself is
    returned.

    Each call of the returned function runs, in order:

    1. ``on_input(definition, *inputs)``, whose result replaces the inputs.
    2. ``definition(*inputs)``. If it raises, the result of
       ``on_error(definition, error, *inputs)`` is returned as is and
       ``on_output`` is skipped; without ``on_error`` the error is re-raised.
    3. ``on_output(definition, output, *inputs)``, whose result is returned.

    Errors raised by ``on_input`` or ``on_output`` are never passed to
    ``on_error``. Coroutine functions and objects with ``async def __call__``
    get a coroutine wrapper that awaits the base call and any awaitable hook
    result. When a plain function returns an awaitable, the wrapper returns
    a coroutine that runs the error or output stage once it completes.

    Before returning, every example is run through the new function once,
    in order. Awaitable results are run to completion, on a worker thread
    when an event loop is already running.

    Raises:
        ExampleMismatchException: If an example returns a different value.
        MiddlewareConfigException: If the configuration is invalid.
    """
    if config is not None and hooks:
        raise MiddlewareConfigException(
            "Pass hooks either as a config object or as keyword arguments, not both",
            code="MIDDLEWARE_CONFIG",
        )
    settings = MiddlewareConfig.from_value(config if config is not None else hooks)
    if settings.is_empty:
        return definition

    if _is_async(definition):
        wrapper = _build_async_wrapper(definition, settings)
    else:
        wrapper = _build_sync_wrapper(definition, settings)

    for inputs, expected in settings.examples:
        actual = wrapper(*inputs)
        if inspect.isawaitable(actual):
            actual = _run_to_completion(_resolve(actual))
        _check_example(definition, inputs, expected, actual)

    return wrapper  # type: ignore[return-value]


def middleware(
    config: MiddlewareConfig | Mapping[str, Any] | None = None,
    /,
    **hooks: Any,
) -> Callable[[F], F]:
    """Decorator form of :func:`create_function_with_middleware`.

    Usage:
        @middleware(on_output=lambda definition, out, *inputs: out * 2)
        def add(a, b):
            return a + b
    """

    def decorator(definition: F) -> F:
        return create_function_with_middleware(definition, config, **hooks)

    return decorator


def _is_async(definition: Callable[..., Any]) -> bool:
    if inspect.iscoroutinefunction(definition):
        return True
    # Callable objects declaring ``async def __call__``.
    return not inspect.isroutine(definition) and inspect.iscoroutinefunction(
        getattr(type(definition), "__call__", None)
    )


def _build_sync_wrapper(definition: Callable[..., Any], settings: MiddlewareConfig) -> Callable[..., Any]:
    on_input = settings.on_input
    on_output = settings.on_output
    on_error = settings.on_error

    @functools.wraps(definition)
    def wrapper(*inputs: Any) -> Any:
        if on_input is not None:
            inputs = tuple(on_input(definition, *inputs))

        try:
            output = definition(*inputs)
        except Exception as exc:
            if on_error is None:
                raise
            return on_error(definition, exc, *inputs)

        # A plain function handing back an awaitable finishes its stages
        # once the awaitable completes.
        if inspect.isawaitable(output):
            return _settle(definition, output, inputs, on_output, on_error)

        if on_output is not None:
            return on_output(definition, output, *inputs)
        return output

    return wrapper


def _build_async_wrapper(definition: Callable[..., Any], settings: MiddlewareConfig) -> Callable[..., Any]:
    on_input = settings.on_input
    on_output = settings.on_output
    on_error = settings.on_error

    @functools.wraps(definition)
    async def wrapper(*inputs: Any) -> Any:
        if on_input is not None:
            inputs = tuple(await _resolve(on_input(definition, *inputs)))

        try:
            pending = definition(*inputs)
        except Exception as exc:
            if on_error is None:
                raise
            return await _resolve(on_error(definition, exc, *inputs))

        return await _settle(definition, pending, inputs, on_output, on_error)

    return wrapper


async def _settle(
    definition: Callable[..., Any],
    pending: Any,
    inputs: tuple[Any, ...],
    on_output: Callable[..., Any] | None,
    on_error: Callable[..., Any] | None,
) -> Any:
    """Await the base result, then run the error or output stage."""
    try:
        output = await _resolve(pending)
    except Exception as exc:
        if on_error is None:
            raise
        return await _resolve(on_error(definition, exc, *inputs))

    if on_output is not None:
        return await _resolve(on_output(definition, output, *inputs))
    return output


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _run_to_completion(coro: Coroutine[Any, Any, Any]) -> Any:
    """Run *coro* on a fresh event loop and return its result.

    Inside a running loop the coroutine runs on a worker thread with its
    own loop, blocking the caller until it finishes.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="fnware-examples") as pool:
        return pool.submit(asyncio.run, coro).result()


def _check_example(
    definition: Callable[..., Any],
    inputs: tuple[Any, ...],
    expected: Any,
    actual: Any,
) -> None:
    # Strict: 3.0 or True does not satisfy an expected 3.
    if type(actual) is type(expected) and actual == expected:
        return
    name = _function_name(definition)
    rendered = ", ".join(repr(value) for value in inputs)
    raise ExampleMismatchException(
        f"Expected {name}({rendered}) to return {expected!r}, but got {actual!r}.",
        code="EXAMPLE_MISMATCH",
        context={
            "function": name,
            "inputs": inputs,
            "expected": expected,
            "actual": actual,
        },
    )


def _function_name(definition: Callable[..., Any]) -> str:
    return getattr(definition, "__name__", None) or type(definition).__name__
