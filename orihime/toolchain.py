"""The Orihime toolchain instance: search paths, multilib choice and linker lookup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Callable

from orihime.diagnostics import DiagnosticKind, Diagnostics
from orihime.flags import FeatureFlags
from orihime.includes import SystemIncludes, resolve_cxx_stdlib_includes, resolve_system_includes
from orihime.multilib import DEFAULT_MULTILIB, Multilib, cxx_stdlib_file_paths, orihime_multilibs, select_multilib
from orihime.policy import ORIHIME, PlatformPolicy

logger = logging.getLogger(__name__)

Probe = Callable[[str], bool]


@dataclass(frozen=True)
class OrihimeToolchain:
    """Per-session Orihime toolchain.

    The multilib variant is chosen from the flags seen at construction time
    and reused by every later invocation, even ones passing different flags.
    """

    triple: str
    sysroot: str
    resource_dir: str
    linker: str
    c_include_dirs: str
    cxx_driver: bool
    driver_args: tuple[str, ...]
    program_paths: tuple[str, ...]
    file_paths: tuple[str, ...]
    driver_dir: str = ""
    cxx_stdlib_path: str | None = None
    selected_multilib: Multilib = DEFAULT_MULTILIB
    policy: PlatformPolicy = ORIHIME

    @classmethod
    def create(
        cls,
        *,
        sysroot: str = "",
        resource_dir: str = "",
        installed_dir: str = "",
        driver_dir: str = "",
        triple: str = "x86_64-unknown-orihime",
        linker: str = "",
        c_include_dirs: str = "",
        cxx_driver: bool = False,
        driver_args: tuple[str, ...] = (),
        exists: Probe = os.path.exists,
    ) -> OrihimeToolchain:
        driver_dir = driver_dir or installed_dir
        program_paths = tuple(p for p in (installed_dir, driver_dir) if p)
        if installed_dir == driver_dir:
            program_paths = program_paths[:1]

        file_paths: list[str] = []
        if sysroot:
            file_paths.append(os.path.join(sysroot, "resource", "development", "library"))

        cxx_stdlib_path = None
        if driver_dir:
            candidate = os.path.join(driver_dir, "..", "lib", triple, "c++")
            if exists(candidate):
                cxx_stdlib_path = candidate

        multilibs = orihime_multilibs()
        if cxx_driver:
            multilibs = multilibs.with_file_paths_callback(cxx_stdlib_file_paths(cxx_stdlib_path))

        flags = FeatureFlags.from_args(driver_args)
        selected, multilib_paths = select_multilib(multilibs, flags.multilib_flags(), exists)
        logger.debug("Selected multilib `%s` for %s", selected.suffix or ".", triple)

        return cls(
            triple=triple,
            sysroot=sysroot,
            resource_dir=resource_dir,
            linker=linker,
            c_include_dirs=c_include_dirs,
            cxx_driver=cxx_driver,
            driver_args=tuple(driver_args),
            driver_dir=driver_dir,
            program_paths=program_paths,
            file_paths=(*multilib_paths, *file_paths),
            cxx_stdlib_path=cxx_stdlib_path,
            selected_multilib=selected,
        )

    def program_path(self, name: str, exists: Probe = os.path.exists) -> str:
        for directory in self.program_paths:
            candidate = os.path.join(directory, name)
            if exists(candidate):
                return candidate
        return name

    def linker_path(
        self,
        flags: FeatureFlags,
        diagnostics: Diagnostics,
        exists: Probe = os.path.exists,
    ) -> str:
        use_linker = flags.use_ld if flags.use_ld is not None else self.linker

        if os.path.isabs(use_linker):
            if exists(use_linker):
                return use_linker
        elif not use_linker or use_linker == "ld":
            return self.program_path(self.policy.default_linker, exists)
        else:
            name = f"ld.{use_linker}"
            linker_path = self.program_path(name, exists)
            if linker_path != name or flags.use_ld is None:
                return linker_path

        if flags.use_ld is not None:
            diagnostics.report(DiagnosticKind.INVALID_LINKER_NAME, f"-fuse-ld={flags.use_ld}")
        return self.program_path(self.policy.default_linker, exists)

    def lto_plugin_path(self) -> str:
        return os.path.join(self.driver_dir, "..", "lib", "LLVMgold.so")

    def file_path_lib_args(self) -> list[str]:
        return [f"-L{path}" for path in self.file_paths if path]

    def system_includes(self, flags: FeatureFlags) -> SystemIncludes:
        return resolve_system_includes(self.sysroot, self.resource_dir, flags, self.c_include_dirs)

    def cxx_stdlib_include_args(self, flags: FeatureFlags, diagnostics: Diagnostics) -> list[str]:
        if flags.nostdlibinc or flags.nostdincxx:
            return []
        stdlib = self.policy.cxx_stdlib_type(flags, diagnostics)
        args: list[str] = []
        for include in resolve_cxx_stdlib_includes(self.sysroot, stdlib, flags):
            args.extend(["-internal-isystem", include])
        return args

    def target_cc1_args(self, flags: FeatureFlags) -> list[str]:
        return self.policy.target_cc1_args(flags)
