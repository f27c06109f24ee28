"""Unit tests for system include path resolution."""

from __future__ import annotations

import pytest

from orihime.flags import FeatureFlags
from orihime.includes import SystemIncludes, resolve_cxx_stdlib_includes, resolve_system_includes
from orihime.policy import CXXStdlibType

SYSROOT = "/opt/target"
RESOURCE_DIR = "/opt/target/lib/clang/1"


class TestResolveSystemIncludes:
    """Tests for resolve_system_includes."""

    def test_defaults(self) -> None:
        """Test the builtin and libc include directories with no suppression flags."""
        includes = resolve_system_includes(SYSROOT, RESOURCE_DIR, FeatureFlags())
        assert includes.system == ("/opt/target/lib/clang/1/include",)
        assert includes.extern_c == ("/opt/target/resource/development/include",)

    def test_empty_sysroot_uses_root(self) -> None:
        """Test that an empty sysroot resolves libc headers from /."""
        includes = resolve_system_includes("", RESOURCE_DIR, FeatureFlags())
        assert includes.extern_c == ("/resource/development/include",)

    def test_nostdinc_returns_nothing(self) -> None:
        """Test that -nostdinc suppresses every system include."""
        assert resolve_system_includes(SYSROOT, RESOURCE_DIR, FeatureFlags(nostdinc=True)) == SystemIncludes()

    def test_nobuiltininc_drops_resource_dir(self) -> None:
        """Test that -nobuiltininc drops only the resource directory."""
        includes = resolve_system_includes(SYSROOT, RESOURCE_DIR, FeatureFlags(nobuiltininc=True))
        assert includes.system == ()
        assert includes.extern_c == ("/opt/target/resource/development/include",)

    def test_nostdlibinc_keeps_builtins(self) -> None:
        """Test that -nostdlibinc drops only the libc headers."""
        includes = resolve_system_includes(SYSROOT, RESOURCE_DIR, FeatureFlags(nostdlibinc=True))
        assert includes.system == ("/opt/target/lib/clang/1/include",)
        assert includes.extern_c == ()

    def test_c_include_dirs_override(self) -> None:
        """Test that only absolute override entries are rebased onto the sysroot."""
        includes = resolve_system_includes(SYSROOT, RESOURCE_DIR, FeatureFlags(), c_include_dirs="/usr/include:local/include")
        assert includes.extern_c == ("/opt/target/usr/include", "local/include")

    def test_c_include_dirs_skips_empty_entries(self) -> None:
        """Test that empty override entries are ignored."""
        includes = resolve_system_includes(SYSROOT, RESOURCE_DIR, FeatureFlags(), c_include_dirs="/a::/b")
        assert includes.extern_c == ("/opt/target/a", "/opt/target/b")

    def test_cc1_args(self) -> None:
        """Test rendering of system and extern-C includes as compiler arguments."""
        includes = SystemIncludes(system=("/r/include",), extern_c=("/s/include",))
        assert includes.cc1_args() == [
            "-internal-isystem",
            "/r/include",
            "-internal-externc-isystem",
            "/s/include",
        ]


class TestResolveCXXStdlibIncludes:
    """Tests for resolve_cxx_stdlib_includes."""

    def test_libcxx(self) -> None:
        """Test the libc++ header directory under the sysroot."""
        assert resolve_cxx_stdlib_includes(SYSROOT, CXXStdlibType.LIBCXX, FeatureFlags()) == (
            "/opt/target/resource/development/include/libcxx",
        )

    def test_libcxx_without_sysroot(self) -> None:
        """Test the libc++ header directory with an empty sysroot."""
        assert resolve_cxx_stdlib_includes("", CXXStdlibType.LIBCXX, FeatureFlags()) == (
            "/resource/development/include/libcxx",
        )

    @pytest.mark.parametrize("flags", [FeatureFlags(nostdlibinc=True), FeatureFlags(nostdincxx=True)])
    def test_suppressed(self, flags: FeatureFlags) -> None:
        """Test that -nostdlibinc and -nostdinc++ suppress the C++ headers."""
        assert resolve_cxx_stdlib_includes(SYSROOT, CXXStdlibType.LIBCXX, flags) == ()

    def test_libstdcxx_is_unreachable(self) -> None:
        """Test that any other standard library is a contract failure."""
        with pytest.raises(AssertionError, match="invalid stdlib name"):
            resolve_cxx_stdlib_includes(SYSROOT, CXXStdlibType.LIBSTDCXX, FeatureFlags())
