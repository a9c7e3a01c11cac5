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
"""fnware Hooks — ready-made hooks for logging, validation, fallback and circuit breaking."""

from fnware.hooks.circuit_breaker import CircuitBreaker, CircuitState
from fnware.hooks.fallback import fallback_to, fallback_value
from fnware.hooks.logging_hooks import log_errors, log_inputs, log_outputs
from fnware.hooks.validation import coerce_inputs, validate_inputs

__all__ = [
    "CircuitBreaker",
    "CircuitState",
    "coerce_inputs",
    "fallback_to",
    "fallback_value",
    "log_errors",
    "log_inputs",
    "log_outputs",
    "validate_inputs",
]
