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
"""Tests for create_function_with_middleware and @middleware."""

from __future__ import annotations

import pytest

from fnware.kernel.exceptions import ExampleMismatchException, MiddlewareConfigException
from fnware.middleware import MiddlewareConfig, create_function_with_middleware, middleware


def add(a: int, b: int) -> int:
    return a + b


def faulty(*_: object) -> str:
    raise RuntimeError("test error")


class TestPassthrough:
    def test_no_config_returns_original(self) -> None:
        assert create_function_with_middleware(add) is add

    def test_empty_mapping_returns_original(self) -> None:
        assert create_function_with_middleware(add, {}) is add

    def test_empty_config_returns_original(self) -> None:
        assert create_function_with_middleware(add, MiddlewareConfig()) is add

    def test_empty_examples_returns_original(self) -> None:
        assert create_function_with_middleware(add, {"examples": []}) is add

    def test_errors_propagate_unchanged(self) -> None:
        wrapped = create_function_with_middleware(faulty)

        with pytest.raises(RuntimeError, match="test error"):
            wrapped()


class TestInputStage:
    def test_inputs_are_replaced(self) -> None:
        wrapped = create_function_with_middleware(
            add, on_input=lambda definition, a, b: [a * 2, b * 2]
        )

        assert wrapped(2, 3) == 10

    def test_fixed_inputs_ignore_arguments(self) -> None:
        wrapped = create_function_with_middleware(add, on_input=lambda definition, *_: (1, 1))

        assert wrapped(100, 200) == add(1, 1)

    def test_hook_receives_definition_and_inputs(self) -> None:
        calls: list[tuple] = []

        def on_input(definition, *inputs):
            calls.append((definition, inputs))
            return inputs

        create_function_with_middleware(add, on_input=on_input)(4, 5)

        assert calls == [(add, (4, 5))]

    def test_input_hook_error_bypasses_on_error(self) -> None:
        recovered: list[Exception] = []

        def on_input(definition, *inputs):
            raise ValueError("bad input")

        def on_error(definition, error, *inputs):
            recovered.append(error)
            return "handled"

        wrapped = create_function_with_middleware(add, on_input=on_input, on_error=on_error)

        with pytest.raises(ValueError, match="bad input"):
            wrapped(1, 2)
        assert recovered == []


class TestOutputStage:
    def test_output_is_transformed(self) -> None:
        wrapped = create_function_with_middleware(
            add, on_output=lambda definition, out, a, b: out * 2
        )

        assert wrapped(2, 3) == 10

    def test_output_hook_sees_transformed_inputs(self) -> None:
        seen: list[tuple] = []

        def on_output(definition, output, *inputs):
            seen.append(inputs)
            return output

        wrapped = create_function_with_middleware(
            add,
            on_input=lambda definition, a, b: (a + 1, b + 1),
            on_output=on_output,
        )

        assert wrapped(1, 1) == 4
        assert seen == [(2, 2)]

    def test_output_hook_error_bypasses_on_error(self) -> None:
        def on_output(definition, output, *inputs):
            raise KeyError("output")

        wrapped = create_function_with_middleware(
            add, on_output=on_output, on_error=lambda definition, error, *inputs: "handled"
        )

        with pytest.raises(KeyError):
            wrapped(1, 2)


class TestErrorStage:
    def test_error_is_recovered(self) -> None:
        wrapped = create_function_with_middleware(
            faulty, on_error=lambda definition, error, *inputs: "error handled"
        )

        assert wrapped() == "error handled"
        assert wrapped("anything") == "error handled"

    def test_error_hook_receives_error_and_transformed_inputs(self) -> None:
        captured: list[tuple] = []

        def on_error(definition, error, *inputs):
            captured.append((definition, error, inputs))
            return None

        wrapped = create_function_with_middleware(
            faulty,
            on_input=lambda definition, x: (x.upper(),),
            on_error=on_error,
        )
        wrapped("abc")

        definition, error, inputs = captured[0]
        assert definition is faulty
        assert isinstance(error, RuntimeError)
        assert inputs == ("ABC",)

    def test_error_propagates_without_on_error(self) -> None:
        raised = RuntimeError("boom")

        def explode(x):
            raise raised

        wrapped = create_function_with_middleware(explode, on_output=lambda d, out, *i: out)

        with pytest.raises(RuntimeError) as exc_info:
            wrapped(1)
        assert exc_info.value is raised

    def test_on_output_skipped_for_recovered_value(self) -> None:
        output_calls: list[object] = []

        def on_output(definition, output, *inputs):
            output_calls.append(output)
            return output

        wrapped = create_function_with_middleware(
            faulty,
            on_output=on_output,
            on_error=lambda definition, error, *inputs: "handled",
        )

        assert wrapped() == "handled"
        assert output_calls == []

    def test_error_hook_may_reraise(self) -> None:
        def on_error(definition, error, *inputs):
            raise error

        wrapped = create_function_with_middleware(faulty, on_error=on_error)

        with pytest.raises(RuntimeError, match="test error"):
            wrapped()


class TestExamples:
    def test_passing_examples_return_function(self) -> None:
        wrapped = create_function_with_middleware(add, {"examples": [[[1, 2], 3], [[3, 4], 7]]})

        assert wrapped(10, 5) == 15

    def test_assertions_alias(self) -> None:
        wrapped = create_function_with_middleware(add, {"assertions": [((1, 2), 3)]})

        assert wrapped(1, 1) == 2

    def test_mismatch_raises_with_expected_and_actual(self) -> None:
        with pytest.raises(ExampleMismatchException) as exc_info:
            create_function_with_middleware(add, {"examples": [[[1, 2], 3], [[3, 4], 8]]})

        assert str(exc_info.value) == "Expected add(3, 4) to return 8, but got 7."
        assert exc_info.value.code == "EXAMPLE_MISMATCH"
        assert exc_info.value.context == {
            "function": "add",
            "inputs": (3, 4),
            "expected": 8,
            "actual": 7,
        }

    def test_examples_run_through_hooks(self) -> None:
        wrapped = create_function_with_middleware(
            add,
            on_output=lambda definition, out, *inputs: out * 10,
            examples=[((1, 2), 30)],
        )

        assert wrapped(1, 1) == 20

    def test_stops_at_first_mismatch(self) -> None:
        seen: list[tuple] = []

        def spy(a, b):
            seen.append((a, b))
            return a + b

        with pytest.raises(ExampleMismatchException):
            create_function_with_middleware(
                spy, examples=[((1, 1), 2), ((2, 2), 5), ((3, 3), 6)]
            )

        assert seen == [(1, 1), (2, 2)]

    def test_examples_run_once(self) -> None:
        calls: list[tuple] = []

        def spy(a, b):
            calls.append((a, b))
            return a + b

        wrapped = create_function_with_middleware(spy, examples=[((1, 2), 3)])
        wrapped(5, 5)
        wrapped(6, 6)

        assert calls == [(1, 2), (5, 5), (6, 6)]

    def test_equality_is_strict_about_type(self) -> None:
        with pytest.raises(ExampleMismatchException, match="to return 3, but got 3.0"):
            create_function_with_middleware(lambda a, b: float(a + b), examples=[((1, 2), 3)])

    def test_error_during_example_propagates(self) -> None:
        with pytest.raises(RuntimeError, match="test error"):
            create_function_with_middleware(faulty, examples=[((), "x")])

    def test_recovered_error_can_satisfy_example(self) -> None:
        wrapped = create_function_with_middleware(
            faulty,
            on_error=lambda definition, error, *inputs: "handled",
            examples=[(("anything",), "handled")],
        )

        assert wrapped() == "handled"


class TestConfigArguments:
    def test_config_object(self) -> None:
        config = MiddlewareConfig(on_output=lambda definition, out, *inputs: -out)

        assert create_function_with_middleware(add, config)(1, 2) == -3

    def test_camel_case_keys(self) -> None:
        wrapped = create_function_with_middleware(
            add, {"handleOutput": lambda definition, out, *inputs: out + 1}
        )

        assert wrapped(1, 2) == 4

    def test_config_and_keywords_are_exclusive(self) -> None:
        with pytest.raises(MiddlewareConfigException, match="not both"):
            create_function_with_middleware(
                add, {"on_output": lambda *a: 0}, on_input=lambda d, *i: i
            )

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(MiddlewareConfigException):
            create_function_with_middleware(add, on_retry=lambda *a: None)

    def test_preserves_metadata(self) -> None:
        wrapped = create_function_with_middleware(add, on_output=lambda d, out, *i: out)

        assert wrapped.__name__ == "add"
        assert wrapped.__wrapped__ is add


class TestMiddlewareDecorator:
    def test_decorator_form(self) -> None:
        @middleware(on_output=lambda definition, out, *inputs: out * 2, examples=[((1, 2), 6)])
        def plus(a: int, b: int) -> int:
            return a + b

        assert plus(2, 3) == 10

    def test_decorator_without_hooks_is_identity(self) -> None:
        def plain(x):
            return x

        assert middleware()(plain) is plain

    def test_decorator_mismatch_fails_at_definition(self) -> None:
        with pytest.raises(ExampleMismatchException, match=r"Expected plus\(1, 2\)"):

            @middleware(examples=[((1, 2), 4)])
            def plus(a: int, b: int) -> int:
                return a + b


class TestStatelessness:
    def test_calls_are_independent(self) -> None:
        wrapped = create_function_with_middleware(
            add, on_output=lambda definition, out, *inputs: out * 2
        )

        assert [wrapped(1, 1), wrapped(1, 1), wrapped(2, 2)] == [4, 4, 8]
