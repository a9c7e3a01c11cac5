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
"""Validation hooks — reject or coerce inputs before the call."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import TypeAdapter, ValidationError

from fnware.kernel.exceptions import InputValidationException


def validate_inputs(
    predicate: Callable[..., bool],
    message: str = "Validation failed",
) -> Callable[..., tuple[Any, ...]]:
    """Return an ``on_input`` hook that checks the inputs with a predicate.

    The predicate receives the same positional inputs as the decorated
    function. If it returns False, an InputValidationException is raised.

    Args:
        predicate: Function that returns True if valid.
        message: Error message on failure.
    """

    def on_input(definition: Callable[..., Any], *inputs: Any) -> tuple[Any, ...]:
        if not predicate(*inputs):
            raise InputValidationException(message, code="VALIDATION_ERROR", context={"inputs": inputs})
        return inputs

    return on_input


def coerce_inputs(*types: Any) -> Callable[..., tuple[Any, ...]]:
    """Return an ``on_input`` hook that validates each input against a type.

    Any type pydantic understands works, including ``BaseModel`` subclasses,
    which turn dict inputs into model instances. The hook expects exactly one
    input per type.

    Raises:
        InputValidationException: On an arity mismatch or a validation
            failure, with pydantic's error details in ``context``.
    """
    adapters = [TypeAdapter(t) for t in types]

    def on_input(definition: Callable[..., Any], *inputs: Any) -> tuple[Any, ...]:
        if len(inputs) != len(adapters):
            raise InputValidationException(
                f"Expected {len(adapters)} inputs, got {len(inputs)}",
                code="VALIDATION_ERROR",
                context={"inputs": inputs},
            )
        coerced = []
        for position, (adapter, value) in enumerate(zip(adapters, inputs)):
            try:
                coerced.append(adapter.validate_python(value))
            except ValidationError as exc:
                errors = exc.errors()
                detail = "; ".join(e["msg"] for e in errors)
                raise InputValidationException(
                    f"Validation failed for input {position}: {detail}",
                    code="VALIDATION_ERROR",
                    context={"position": position, "errors": errors},
                ) from exc
        return tuple(coerced)

    return on_input
