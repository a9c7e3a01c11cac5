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
"""fnware — wrap functions with input, output and error hooks plus inline examples."""

from fnware.kernel.exceptions import (
    ExampleMismatchException,
    FnwareException,
    MiddlewareConfigException,
)
from fnware.middleware import MiddlewareConfig, create_function_with_middleware, middleware

__version__ = "0.1.0"

__all__ = [
    "ExampleMismatchException",
    "FnwareException",
    "MiddlewareConfig",
    "MiddlewareConfigException",
    "create_function_with_middleware",
    "middleware",
]
