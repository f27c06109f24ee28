"""Subsystem options for the Orihime toolchain backend."""

from __future__ import annotations

from pants.option.option_types import BoolOption, StrListOption, StrOption
from pants.option.subsystem import Subsystem


class OrihimeSubsystem(Subsystem):
    options_scope = "orihime"
    help = "Toolchain configuration for the Orihime target backend."

    sysroot = StrOption(default="", help="Root directory of the Orihime target filesystem layout.")
    resource_dir = StrOption(default="", help="Compiler resource directory holding builtin headers.")
    installed_dir = StrOption(default="", help="Directory of the installed compiler binaries; searched for tools.")
    driver_dir = StrOption(
        default="",
        help="Directory of the driver binary. Defaults to `installed_dir`; also searched for tools.",
    )
    target_triple = StrOption(default="x86_64-unknown-orihime", help="Target triple passed to the compiler.")
    linker = StrOption(
        default="lld",
        help="Linker to use: an absolute path, or a name `X` resolved as `ld.X` in the tool directories.",
    )
    c_include_dirs = StrOption(
        default="",
        help=(
            "Colon-separated libc header directories overriding `<sysroot>/resource/development/include`. "
            "Absolute entries are rebased onto the sysroot."
        ),
    )
    cxx_driver = BoolOption(default=False, help="Run the driver in C++ mode.")
    args = StrListOption(
        default=[],
        help="Session-wide driver arguments. These also drive multilib selection when the toolchain is built.",
    )
