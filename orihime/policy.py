"""Fixed platform answers for the Orihime target."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from orihime.diagnostics import DiagnosticKind, Diagnostics
from orihime.flags import FeatureFlags


class RuntimeLibType(Enum):
    COMPILER_RT = "compiler-rt"
    LIBGCC = "libgcc"


class CXXStdlibType(Enum):
    LIBCXX = "libc++"
    LIBSTDCXX = "libstdc++"


@dataclass(frozen=True)
class PlatformPolicy:
    """Platform descriptor answering every fixed toolchain query."""

    name: str
    runtime_archive: str
    default_runtime_lib: RuntimeLibType
    default_cxx_stdlib: CXXStdlibType
    default_linker: str
    pie_default: bool
    pic_default: bool
    pic_default_forced: bool
    stack_protector_level: int
    unwind_tables_default: bool
    math_errno_default: bool
    relax_relocations: bool
    integrated_assembler: bool
    debugger_tuning: str
    supported_sanitizers: frozenset[str] = frozenset()
    default_sanitizers: frozenset[str] = frozenset()

    def runtime_lib_type(self, flags: FeatureFlags, diagnostics: Diagnostics) -> RuntimeLibType:
        if flags.rtlib is not None and flags.rtlib != self.default_runtime_lib.value:
            diagnostics.report(DiagnosticKind.INVALID_RTLIB_NAME, f"-rtlib={flags.rtlib}")
        return self.default_runtime_lib

    def cxx_stdlib_type(self, flags: FeatureFlags, diagnostics: Diagnostics) -> CXXStdlibType:
        if flags.stdlib is not None and flags.stdlib != self.default_cxx_stdlib.value:
            diagnostics.report(DiagnosticKind.INVALID_STDLIB_NAME, f"-stdlib={flags.stdlib}")
        return self.default_cxx_stdlib

    def target_cc1_args(self, flags: FeatureFlags) -> list[str]:
        args = []
        if not flags.use_init_array:
            args.append("-fno-use-init-array")
        # no float support yet
        args.append("-no-implicit-float")
        return args

    def cxx_stdlib_lib_args(self, flags: FeatureFlags, diagnostics: Diagnostics) -> list[str]:
        stdlib = self.cxx_stdlib_type(flags, diagnostics)
        if stdlib is CXXStdlibType.LIBCXX:
            return ["-lc++"]
        raise AssertionError(f"invalid stdlib name: {stdlib.value}")


ORIHIME = PlatformPolicy(
    name="orihime",
    runtime_archive="osrt",
    default_runtime_lib=RuntimeLibType.COMPILER_RT,
    default_cxx_stdlib=CXXStdlibType.LIBCXX,
    default_linker="lld",
    pie_default=True,
    pic_default=False,
    pic_default_forced=False,
    stack_protector_level=0,
    unwind_tables_default=True,
    math_errno_default=False,
    relax_relocations=True,
    integrated_assembler=True,
    debugger_tuning="gdb",
)
