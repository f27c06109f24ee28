"""Shared pytest fixtures for Orihime backend tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from pants.engine.fs import Digest, DigestContents
from pants.engine.rules import QueryRule
from pants.testutil.rule_runner import RuleRunner

from orihime import rules as orihime_rules
from orihime.providers import LinkedOrihimeBinary, OrihimeCompileArgs
from orihime.rules import LinkOrihimeBinaryRequest, OrihimeCompileArgsRequest
from orihime.target_types import OrihimeBinary
from orihime.toolchain import OrihimeToolchain


class FakeFilesystem:
    """In-memory existence probe for multilib and tool lookups."""

    def __init__(self, *paths: str) -> None:
        self.paths = set(paths)
        self.probed: list[str] = []

    def __call__(self, path: str) -> bool:
        self.probed.append(path)
        return path in self.paths


@pytest.fixture
def fake_fs() -> Callable[..., FakeFilesystem]:
    return FakeFilesystem


@pytest.fixture
def toolchain() -> OrihimeToolchain:
    """Toolchain matching the reference end-to-end scenario."""
    return OrihimeToolchain.create(
        sysroot="/opt/target",
        resource_dir="/opt/target/lib/clang/1",
        installed_dir="/opt/target/bin",
        linker="/opt/target/bin/ld",
        exists=FakeFilesystem("/opt/target/bin/ld"),
    )


@pytest.fixture
def mock_linker(tmp_path: Path) -> str:
    """Create an executable `ld.lld` stand-in that records its arguments into the output file."""
    linker = tmp_path / "bin" / "ld.lld"
    linker.parent.mkdir(parents=True, exist_ok=True)
    linker.write_text(
        """#!/bin/bash
set -euo pipefail

out=""
prev=""
for arg in "$@"; do
  if [[ "$prev" == "-o" ]]; then
    out="$arg"
  fi
  prev="$arg"
done

if [[ -z "$out" ]]; then
  echo "no output file given" >&2
  exit 1
fi

mkdir -p "$(dirname "$out")"
printf "%s\\n" "$@" > "$out"
"""
    )
    linker.chmod(0o755)
    return str(linker)


def create_orihime_rule_runner() -> RuleRunner:
    """Create a RuleRunner instance configured for Orihime backend testing."""
    return RuleRunner(
        target_types=[OrihimeBinary],
        rules=[
            *orihime_rules.rules(),
            QueryRule(OrihimeToolchain, ()),
            QueryRule(OrihimeCompileArgs, (OrihimeCompileArgsRequest,)),
            QueryRule(LinkedOrihimeBinary, (LinkOrihimeBinaryRequest,)),
            QueryRule(DigestContents, (Digest,)),
        ],
    )


@pytest.fixture
def orihime_rule_runner() -> RuleRunner:
    return create_orihime_rule_runner()
