"""Multilib variants of the Orihime runtime library tree and their selection."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Callable, Mapping

logger = logging.getLogger(__name__)

FilePathsCallback = Callable[["Multilib"], "tuple[str, ...]"]


@dataclass(frozen=True)
class Multilib:
    """A library-tree variant.

    `flags` holds `+name` (must be enabled) and `-name` (must be disabled)
    requirements. Lower `priority` wins when several variants match.
    """

    suffix: str = ""
    flags: tuple[str, ...] = ()
    priority: int = 0

    def flag(self, flag: str) -> Multilib:
        if flag[:1] not in ("+", "-") or len(flag) < 2:
            raise ValueError(f"Multilib flag `{flag}` must start with `+` or `-`")
        return replace(self, flags=(*self.flags, flag))

    @property
    def gcc_suffix(self) -> str:
        return f"/{self.suffix}" if self.suffix else ""

    def is_default(self) -> bool:
        return not self.suffix and not self.flags

    def matches(self, flags: Mapping[str, bool]) -> bool:
        for flag in self.flags:
            name, enabled = flag[1:], flag[0] == "+"
            if name in flags and flags[name] != enabled:
                return False
        return True


DEFAULT_MULTILIB = Multilib(priority=1)


@dataclass(frozen=True)
class MultilibSet:
    multilibs: tuple[Multilib, ...]
    file_paths_callback: FilePathsCallback | None = None

    def __post_init__(self) -> None:
        defaults = [m for m in self.multilibs if m.is_default()]
        if len(defaults) != 1:
            raise ValueError(f"A multilib set needs exactly one default variant, got {len(defaults)}")

    @property
    def default(self) -> Multilib:
        return next(m for m in self.multilibs if m.is_default())

    def filter_out(self, predicate: Callable[[Multilib], bool]) -> MultilibSet:
        kept = tuple(m for m in self.multilibs if m.is_default() or not predicate(m))
        return replace(self, multilibs=kept)

    def with_file_paths_callback(self, callback: FilePathsCallback) -> MultilibSet:
        return replace(self, file_paths_callback=callback)

    def select(self, flags: Mapping[str, bool]) -> Multilib:
        candidates = sorted(
            (m for m in self.multilibs if m.matches(flags)),
            key=lambda m: m.priority,
        )
        if not candidates:
            logger.debug("No multilib matches %s; using the default variant", dict(flags))
            return self.default
        if len(candidates) > 1 and candidates[0].priority == candidates[1].priority:
            logger.debug(
                "Multilibs `%s` and `%s` share priority %d; using the default variant",
                candidates[0].suffix,
                candidates[1].suffix,
                candidates[0].priority,
            )
            return self.default
        return candidates[0]

    def file_paths(self, multilib: Multilib) -> tuple[str, ...]:
        if self.file_paths_callback is None:
            return ()
        return tuple(self.file_paths_callback(multilib))


def orihime_multilibs() -> MultilibSet:
    return MultilibSet(
        (
            DEFAULT_MULTILIB,
            # Use the noexcept variant with -fno-exceptions to avoid the extra overhead.
            Multilib("noexcept", priority=0).flag("-fexceptions").flag("+fno-exceptions"),
        )
    )


def cxx_stdlib_file_paths(cxx_stdlib_path: str | None) -> FilePathsCallback:
    def file_paths(multilib: Multilib) -> tuple[str, ...]:
        if cxx_stdlib_path is None:
            return ()
        return (f"{cxx_stdlib_path}{multilib.gcc_suffix}",)

    return file_paths


def select_multilib(
    multilibs: MultilibSet,
    flags: Mapping[str, bool],
    exists: Callable[[str], bool] = os.path.exists,
) -> tuple[Multilib, tuple[str, ...]]:
    """Drop variants whose library paths are missing, then pick one for `flags`.

    Returns the selected variant and the file paths it contributes; the
    default variant contributes none.
    """

    def missing(multilib: Multilib) -> bool:
        return all(not exists(path) for path in multilibs.file_paths(multilib))

    available = multilibs.filter_out(missing)
    selected = available.select(flags)
    if selected.is_default():
        return selected, ()
    return selected, available.file_paths(selected)