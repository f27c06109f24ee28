"""Feature flags derived from a driver-style argument vector."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class LtoMode(Enum):
    NONE = "none"
    FULL = "full"
    THIN = "thin"


_BOOLEAN_FLAGS = {
    "-s": "strip",
    "-r": "relocatable",
    "-nostdlib": "nostdlib",
    "-nostartfiles": "nostartfiles",
    "-nostdinc": "nostdinc",
    "-nobuiltininc": "nobuiltininc",
    "-nostdlibinc": "nostdlibinc",
    "-nostdinc++": "nostdincxx",
    "-gsplit-dwarf": "split_dwarf",
}

_PAIRED_FLAGS = {
    "-fexceptions": ("exceptions", True),
    "-fno-exceptions": ("exceptions", False),
    "-fuse-init-array": ("use_init_array", True),
    "-fno-use-init-array": ("use_init_array", False),
}

_VALUE_FLAGS = {
    "-rtlib=": "rtlib",
    "--rtlib=": "rtlib",
    "-stdlib=": "stdlib",
    "--stdlib=": "stdlib",
    "-fuse-ld=": "use_ld",
    "-mcpu=": "cpu",
    "-flto-jobs=": "lto_jobs",
    "-save-stats=": "save_stats",
}

# Driver options spelled with a leading `-u` that are not `-u<symbol>`.
_U_PREFIXED_FLAGS = frozenset(["-undef"])
_U_PREFIXED_SEPARATE_FLAGS = frozenset(["-undefined", "-umbrella", "-unexported_symbols_list"])
_U_PREFIXED_JOINED = ("-unwindlib=", "-undefined")

_DEBUGGER_TUNING = {
    "-ggdb": "gdb",
    "-glldb": "lldb",
    "-gsce": "sce",
}


@dataclass(frozen=True)
class FeatureFlags:
    """Driver flags relevant to multilib selection, includes and linking."""

    exceptions: bool = True
    strip: bool = False
    relocatable: bool = False
    nostdlib: bool = False
    nostartfiles: bool = False
    nostdinc: bool = False
    nobuiltininc: bool = False
    nostdlibinc: bool = False
    nostdincxx: bool = False
    use_init_array: bool = False
    rtlib: str | None = None
    stdlib: str | None = None
    use_ld: str | None = None
    lto: LtoMode = LtoMode.NONE
    library_paths: tuple[str, ...] = ()
    undefined_symbols: tuple[str, ...] = ()
    opt_level: str | None = None
    cpu: str | None = None
    lto_jobs: str | None = None
    debugger_tuning: str | None = None
    split_dwarf: bool = False
    save_stats: str | None = None

    @classmethod
    def from_args(cls, args: Iterable[str]) -> FeatureFlags:
        values: dict[str, object] = {}
        library_paths: list[str] = []
        undefined_symbols: list[str] = []

        tokens = list(args)
        index = 0
        while index < len(tokens):
            arg = tokens[index]
            index += 1

            if arg in _BOOLEAN_FLAGS:
                values[_BOOLEAN_FLAGS[arg]] = True
                continue

            if arg in _PAIRED_FLAGS:
                field, enabled = _PAIRED_FLAGS[arg]
                values[field] = enabled
                continue

            if arg in _U_PREFIXED_FLAGS:
                continue
            if arg in _U_PREFIXED_SEPARATE_FLAGS:
                index += 1
                continue
            if arg.startswith(_U_PREFIXED_JOINED):
                continue

            if arg in ("-L", "-u"):
                if index >= len(tokens):
                    raise ValueError(f"Argument to `{arg}` is missing (expected 1 value)")
                target = library_paths if arg == "-L" else undefined_symbols
                target.append(tokens[index])
                index += 1
                continue
            if arg.startswith("-L"):
                library_paths.append(arg[2:])
                continue
            if arg.startswith("-u"):
                undefined_symbols.append(arg[2:])
                continue

            if arg in ("-flto", "-flto=full"):
                values["lto"] = LtoMode.FULL
                continue
            if arg == "-flto=thin":
                values["lto"] = LtoMode.THIN
                continue
            if arg == "-fno-lto":
                values["lto"] = LtoMode.NONE
                continue
            if arg.startswith("-flto="):
                raise ValueError(f"Unsupported argument `{arg[len('-flto='):]}` to option `-flto=`")

            if arg == "-save-stats":
                values["save_stats"] = "cwd"
                continue

            prefix = next((p for p in _VALUE_FLAGS if arg.startswith(p)), None)
            if prefix is not None:
                values[_VALUE_FLAGS[prefix]] = arg[len(prefix):]
                continue

            if arg in _DEBUGGER_TUNING:
                values["debugger_tuning"] = _DEBUGGER_TUNING[arg]
                continue

            if arg in ("-O4", "-Ofast"):
                values["opt_level"] = "3"
                continue
            if arg.startswith("-O"):
                level = arg[2:]
                if level == "g":
                    level = "1"
                elif level in ("s", "z"):
                    level = "2"
                # A bare -O means -O1.
                values["opt_level"] = level or "1"
                continue

        return cls(
            library_paths=tuple(library_paths),
            undefined_symbols=tuple(undefined_symbols),
            **values,  # type: ignore[arg-type]
        )

    @property
    def using_lto(self) -> bool:
        return self.lto is not LtoMode.NONE

    def multilib_flags(self) -> dict[str, bool]:
        return {"fexceptions": self.exceptions}
