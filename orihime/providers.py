"""Provider data structures for Orihime backend rules."""

from __future__ import annotations

from dataclasses import dataclass

from pants.engine.fs import Digest


@dataclass(frozen=True)
class OrihimeCompileArgs:
    """Target-specific compiler arguments: triple, codegen defaults and header search paths."""

    argv: tuple[str, ...]
    system_includes: tuple[str, ...]
    extern_c_includes: tuple[str, ...]
    diagnostics: tuple[str, ...]


@dataclass(frozen=True)
class LinkedOrihimeBinary:
    """Linked Orihime executable output."""

    digest: Digest
    output_path: str
    argv: tuple[str, ...]
    diagnostics: tuple[str, ...]
