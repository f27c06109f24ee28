"""Construction of the Orihime link command."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Sequence

from orihime.diagnostics import DiagnosticKind, Diagnostics
from orihime.flags import FeatureFlags, LtoMode
from orihime.toolchain import OrihimeToolchain, Probe

_FAST_LINKER = "ld.lld"


@dataclass(frozen=True)
class LinkCommand:
    """A link invocation ready to hand to a process executor. No shell is involved."""

    executable: str
    arguments: tuple[str, ...]
    inputs: tuple[str, ...]
    output: str

    def argv(self) -> tuple[str, ...]:
        return (self.executable, *self.arguments)


def _is_fast_linker(path: str) -> bool:
    filename = os.path.basename(path)
    stem = os.path.splitext(filename)[0]
    return _FAST_LINKER in (filename.lower(), stem.lower())


def _stats_file(
    save_stats: str,
    output: str,
    first_input: str,
    diagnostics: Diagnostics,
) -> str | None:
    if save_stats == "obj":
        directory = os.path.dirname(output)
    elif save_stats == "cwd":
        directory = ""
    else:
        diagnostics.report(DiagnosticKind.INVALID_SAVE_STATS, save_stats)
        return None
    base = os.path.splitext(os.path.basename(first_input))[0]
    return os.path.join(directory, f"{base}.stats")


def lto_args(
    flags: FeatureFlags,
    output: str,
    first_input: str,
    diagnostics: Diagnostics,
    plugin: str | None = None,
) -> list[str]:
    """Pass driver-level code generation flags down to the LTO plugin.

    Linkers other than ld.lld load the plugin explicitly, ahead of any
    `-plugin-opt`.
    """
    args: list[str] = []
    if plugin:
        args.extend(["-plugin", plugin])
    if flags.cpu:
        args.append(f"-plugin-opt=mcpu={flags.cpu}")
    if flags.opt_level:
        args.append(f"-plugin-opt=O{flags.opt_level}")
    if flags.split_dwarf:
        args.append(f"-plugin-opt=dwo_dir={output}_dwo")
    if flags.lto is LtoMode.THIN:
        args.append("-plugin-opt=thinlto")
    if flags.lto_jobs:
        args.append(f"-plugin-opt=jobs={flags.lto_jobs}")
    if flags.debugger_tuning:
        args.append(f"-plugin-opt=-debugger-tune={flags.debugger_tuning}")
    if flags.save_stats:
        stats_file = _stats_file(flags.save_stats, output, first_input, diagnostics)
        if stats_file:
            args.append(f"-plugin-opt=stats-file={stats_file}")
    return args


def build_link_command(
    toolchain: OrihimeToolchain,
    inputs: Sequence[str],
    output: str,
    flags: FeatureFlags,
    diagnostics: Diagnostics,
    exists: Probe = os.path.exists,
) -> LinkCommand:
    args: list[str] = []

    executable = toolchain.linker_path(flags, diagnostics, exists)
    fast_linker = _is_fast_linker(executable)
    if fast_linker:
        args.extend(["-z", "separate-loadable-segments"])

    if toolchain.sysroot:
        args.append(f"--sysroot={toolchain.sysroot}")

    if flags.strip:
        args.append("-s")

    if flags.relocatable:
        args.append("-r")
    else:
        args.extend(["--build-id", "--hash-style=gnu"])

    args.append("--eh-frame-hdr")

    # No shared library support.
    args.append("-Bstatic")

    args.extend(["-o", output])
    args.extend(inputs)

    # -r implies -nostdlib and -nostartfiles.
    if not (flags.nostdlib or flags.nostartfiles or flags.relocatable):
        args.append(f"-l{toolchain.policy.runtime_archive}")

    args.extend(f"-L{path}" for path in flags.library_paths)
    for symbol in flags.undefined_symbols:
        args.extend(["-u", symbol])

    args.extend(toolchain.file_path_lib_args())

    if flags.using_lto:
        assert inputs, "Must have at least one input."
        plugin = None if fast_linker else toolchain.lto_plugin_path()
        args.extend(lto_args(flags, output, inputs[0], diagnostics, plugin))

    return LinkCommand(
        executable=executable,
        arguments=tuple(args),
        inputs=tuple(inputs),
        output=output,
    )
