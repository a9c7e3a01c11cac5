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
"""structlog setup for applications using the logging hooks."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

_RENDERERS = ("console", "json")


class StructlogAdapter:
    """Configures structlog on top of stdlib logging.

    The decorator never logs on its own; this adapter only matters to
    applications that attach the hooks from ``fnware.hooks``, which log
    through :func:`get_logger`.
    """

    def __init__(self) -> None:
        self._root_level: str = "INFO"
        self._format: str = "console"

    def configure(self, level: str = "INFO", fmt: str = "console") -> None:
        """Install the structlog processor chain and the root log level.

        Args:
            level: Root log level name.
            fmt: ``"console"`` or ``"json"``.

        Raises:
            ValueError: If *fmt* names an unknown renderer.
        """
        fmt = str(fmt).lower()
        if fmt not in _RENDERERS:
            raise ValueError(f"Unknown log format {fmt!r}, expected one of {', '.join(_RENDERERS)}")
        self._root_level = str(level).upper()
        self._format = fmt

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.UnicodeDecoder(),
                self._renderer(),
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=getattr(logging, self._root_level, logging.INFO),
            force=True,
        )

    def get_logger(self, name: str) -> Any:
        """Get a structlog BoundLogger by name."""
        return structlog.get_logger(name)

    def _renderer(self) -> structlog.types.Processor:
        if self._format == "json":
            return structlog.processors.JSONRenderer()
        return structlog.dev.ConsoleRenderer()


_default_adapter = StructlogAdapter()


def configure_logging(level: str = "INFO", fmt: str = "console") -> StructlogAdapter:
    """Configure structlog once for the whole process and return the adapter."""
    _default_adapter.configure(level=level, fmt=fmt)
    return _default_adapter


def get_logger(name: str) -> Any:
    return _default_adapter.get_logger(name)
