"""Rules for setting up the Orihime toolchain and linking Orihime binaries."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from pants.build_graph.address import Address
from pants.engine.internals.graph import hydrate_sources, resolve_target
from pants.engine.internals.selectors import Get
from pants.engine.process import Process, ProcessResult
from pants.engine.rules import collect_rules, implicitly, rule
from pants.engine.target import HydrateSourcesRequest, WrappedTargetRequest

from orihime.diagnostics import Diagnostics
from orihime.flags import FeatureFlags
from orihime.linker import build_link_command
from orihime.providers import LinkedOrihimeBinary, OrihimeCompileArgs
from orihime.subsystem import OrihimeSubsystem
from orihime.target_types import (
    OrihimeBinary,
    OrihimeDriverFlagsField,
    OrihimeObjectSourcesField,
    OrihimeOutputNameField,
)
from orihime.toolchain import OrihimeToolchain

logger = logging.getLogger(__name__)


def _dedupe(items: tuple[str, ...] | list[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return tuple(out)


@dataclass(frozen=True)
class OrihimeCompileArgsRequest:
    driver_flags: tuple[str, ...] = ()
    cxx: bool = False


@dataclass(frozen=True)
class LinkOrihimeBinaryRequest:
    address: Address


def _target_output_dir(kind: str, address: Address, target_name: str | None = None) -> str:
    spec_path = address.spec_path if address.spec_path else "_root_"
    resolved_target_name = target_name or address.target_name or "_unnamed_"
    return f"__pants_orihime__/{kind}/{spec_path}/{resolved_target_name}"


def _tool_process_env(toolchain: OrihimeToolchain) -> dict[str, str]:
    path_parts: list[str] = list(toolchain.program_paths)
    existing_path = os.environ.get("PATH")
    if existing_path:
        path_parts.append(existing_path)

    env: dict[str, str] = {}
    if path_parts:
        env["PATH"] = ":".join(_dedupe(path_parts))
    return env


def _flags_for(toolchain: OrihimeToolchain, driver_flags: tuple[str, ...], description: str) -> FeatureFlags:
    try:
        return FeatureFlags.from_args((*toolchain.driver_args, *driver_flags))
    except ValueError as e:
        raise ValueError(f"{description} has invalid driver flags: {e}") from e


@rule(desc="Set up Orihime toolchain")
async def orihime_toolchain(orihime: OrihimeSubsystem) -> OrihimeToolchain:
    return OrihimeToolchain.create(
        sysroot=orihime.sysroot,
        resource_dir=orihime.resource_dir,
        installed_dir=orihime.installed_dir,
        driver_dir=orihime.driver_dir,
        triple=orihime.target_triple,
        linker=orihime.linker,
        c_include_dirs=orihime.c_include_dirs,
        cxx_driver=orihime.cxx_driver,
        driver_args=tuple(orihime.args),
    )


@rule(desc="Resolve Orihime compile arguments")
async def orihime_compile_args(
    request: OrihimeCompileArgsRequest,
    toolchain: OrihimeToolchain,
) -> OrihimeCompileArgs:
    flags = _flags_for(toolchain, request.driver_flags, "Orihime compile request")
    diagnostics = Diagnostics()

    includes = toolchain.system_includes(flags)
    argv = ["-triple", toolchain.triple, *toolchain.target_cc1_args(flags), *includes.cc1_args()]
    if request.cxx:
        argv.extend(toolchain.cxx_stdlib_include_args(flags, diagnostics))

    return OrihimeCompileArgs(
        argv=tuple(argv),
        system_includes=includes.system,
        extern_c_includes=includes.extern_c,
        diagnostics=diagnostics.messages,
    )


@rule(desc="Link Orihime binary")
async def link_orihime_binary(
    request: LinkOrihimeBinaryRequest,
    toolchain: OrihimeToolchain,
) -> LinkedOrihimeBinary:
    wrapped = await resolve_target(
        WrappedTargetRequest(request.address, description_of_origin=f"the target `{request.address}`"),
        **implicitly(),
    )
    target = wrapped.target
    if target.alias != OrihimeBinary.alias:
        raise ValueError(f"Expected `{OrihimeBinary.alias}` target, got `{target.alias}` at {target.address}")

    hydrated = await hydrate_sources(
        HydrateSourcesRequest(target[OrihimeObjectSourcesField]),
        **implicitly(),
    )
    inputs = tuple(sorted(hydrated.snapshot.files))
    if not inputs:
        raise ValueError(f"{target.address} has no object files in `sources` globs")

    driver_flags = tuple(target[OrihimeDriverFlagsField].value or ())
    flags = _flags_for(toolchain, driver_flags, str(target.address))
    diagnostics = Diagnostics()
    toolchain.policy.runtime_lib_type(flags, diagnostics)

    output_name = target[OrihimeOutputNameField].value or target.address.target_name
    output_path = f"{_target_output_dir('binary', target.address)}/{output_name}"

    command = build_link_command(toolchain, inputs, output_path, flags, diagnostics)
    logger.debug("Linking %s: %s", target.address, " ".join(command.argv()))

    process = Process(
        argv=command.argv(),
        env=_tool_process_env(toolchain),
        input_digest=hydrated.snapshot.digest,
        output_files=(command.output,),
        description=f"Link Orihime binary {target.address}",
    )
    result = await Get(ProcessResult, Process, process)

    return LinkedOrihimeBinary(
        digest=result.output_digest,
        output_path=output_path,
        argv=command.argv(),
        diagnostics=diagnostics.messages,
    )


def rules() -> list:
    return [
        *collect_rules(),
    ]
