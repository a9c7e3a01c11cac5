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
"""Middleware core types — the hook signatures and the MiddlewareConfig record."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from fnware.kernel.exceptions import MiddlewareConfigException

# on_input(definition, *inputs) -> inputs
InputHook = Callable[..., Sequence[Any]]
# on_output(definition, output, *inputs) -> output
OutputHook = Callable[..., Any]
# on_error(definition, error, *inputs) -> output
ErrorHook = Callable[..., Any]
# (inputs, expected_output)
Example = tuple[tuple[Any, ...], Any]


class MiddlewareConfig(BaseModel):
    """The optional hooks interposed around a decorated function.

    Every field is independent and optional. Hooks are kept by reference;
    the record never copies or inspects them beyond checking they are
    callable.

    Attributes:
        on_input: Replaces the positional inputs before the call.
        on_output: Replaces the output of a successful call.
        on_error: Produces the output when the call raises.
        examples: ``(inputs, expected_output)`` pairs checked once, when
            the function is decorated.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    on_input: InputHook | None = Field(
        default=None,
        validation_alias=AliasChoices("on_input", "handle_input", "onInput", "handleInput"),
    )
    on_output: OutputHook | None = Field(
        default=None,
        validation_alias=AliasChoices("on_output", "handle_output", "onOutput", "handleOutput"),
    )
    on_error: ErrorHook | None = Field(
        default=None,
        validation_alias=AliasChoices("on_error", "handle_error", "onError", "handleError"),
    )
    examples: tuple[Example, ...] = Field(
        default=(),
        validation_alias=AliasChoices("examples", "assertions"),
    )

    @property
    def is_empty(self) -> bool:
        """True when no hook is set and there are no examples."""
        return (
            self.on_input is None
            and self.on_output is None
            and self.on_error is None
            and not self.examples
        )

    @classmethod
    def from_value(cls, value: MiddlewareConfig | Mapping[str, Any] | None) -> MiddlewareConfig:
        """Normalize ``None``, a mapping of hook keys, or a config instance.

        Raises:
            MiddlewareConfigException: If the value is not a supported type or
                fails validation, with the pydantic errors in ``context``.
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise MiddlewareConfigException(
                f"Unsupported middleware configuration type: {type(value).__name__}",
                code="MIDDLEWARE_CONFIG",
            )
        try:
            return cls.model_validate(dict(value))
        except ValidationError as exc:
            errors = exc.errors()
            detail = "; ".join(
                f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}" for e in errors
            )
            raise MiddlewareConfigException(
                f"Invalid middleware configuration: {detail}",
                code="MIDDLEWARE_CONFIG",
                context={"errors": errors},
            ) from exc
