"""User-visible, non-fatal diagnostics reported while resolving a toolchain invocation."""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class DiagnosticKind(Enum):
    INVALID_RTLIB_NAME = "invalid runtime library name in argument '{}'"
    INVALID_STDLIB_NAME = "invalid library name in argument '{}'"
    INVALID_LINKER_NAME = "invalid linker name in argument '{}'"
    INVALID_SAVE_STATS = "invalid value '{}' in '-save-stats='"


class Diagnostics:
    """Collects diagnostics for one invocation, reporting each distinct one once."""

    def __init__(self) -> None:
        self._messages: list[str] = []

    def report(self, kind: DiagnosticKind, argument: str) -> None:
        message = kind.value.format(argument)
        if message in self._messages:
            return
        self._messages.append(message)
        logger.warning(message)

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)
