"""System and C++ standard library header search paths for Orihime."""

from __future__ import annotations

import os
from dataclasses import dataclass

from orihime.flags import FeatureFlags
from orihime.policy import CXXStdlibType


@dataclass(frozen=True)
class SystemIncludes:
    system: tuple[str, ...] = ()
    extern_c: tuple[str, ...] = ()

    def cc1_args(self) -> list[str]:
        args: list[str] = []
        for include in self.system:
            args.extend(["-internal-isystem", include])
        for include in self.extern_c:
            args.extend(["-internal-externc-isystem", include])
        return args


def _development_include_dir(sysroot: str, *parts: str) -> str:
    return os.path.join(sysroot or "/", "resource", "development", "include", *parts)


def resolve_system_includes(
    sysroot: str,
    resource_dir: str,
    flags: FeatureFlags,
    c_include_dirs: str = "",
) -> SystemIncludes:
    """Resolve the C system header directories.

    `c_include_dirs` is a colon-separated override for the libc headers;
    absolute entries are rebased onto the sysroot.
    """
    if flags.nostdinc:
        return SystemIncludes()

    system: list[str] = []
    if not flags.nobuiltininc:
        system.append(os.path.join(resource_dir, "include"))

    if flags.nostdlibinc:
        return SystemIncludes(system=tuple(system))

    if c_include_dirs:
        extern_c = tuple(
            f"{sysroot if os.path.isabs(directory) else ''}{directory}"
            for directory in c_include_dirs.split(":")
            if directory
        )
    else:
        extern_c = (_development_include_dir(sysroot),)

    return SystemIncludes(system=tuple(system), extern_c=extern_c)


def resolve_cxx_stdlib_includes(
    sysroot: str,
    stdlib: CXXStdlibType,
    flags: FeatureFlags,
) -> tuple[str, ...]:
    if flags.nostdlibinc or flags.nostdincxx:
        return ()

    if stdlib is CXXStdlibType.LIBCXX:
        return (_development_include_dir(sysroot, "libcxx"),)

    raise AssertionError(f"invalid stdlib name: {stdlib.value}")
