"""Hatch build hook for compiling the native morfeusz shim library."""

import os
import platform
import shutil
import subprocess
import sys
from pathlib import Path

from hatchling.builders.hooks.plugin.interface import BuildHookInterface


class ShimBuildHook(BuildHookInterface):
    """Build hook that compiles the C shim over Morfeusz 2 before packaging."""

    PLUGIN_NAME = "morfeusz-shim"

    def initialize(self, version: str, build_data: dict) -> None:
        """Compile the shim into the package directory."""
        package_root = Path(self.root)

        # Sync VERSION to _version.py (for builds from sdist)
        self._sync_version(package_root)

        if self.target_name == "sdist":
            # Don't build for sdist - just include source
            return

        lib_name = self._get_lib_name()
        target_lib = package_root / "morfeusz" / lib_name

        # Check if library already exists (pre-built in CI)
        if target_lib.exists():
            self._log(f"Using existing {lib_name}")
            self._mark_platform_specific(build_data, target_lib)
            return

        source = package_root / "native" / "morfeusz_shim.cc"
        try:
            self._run_build(source, target_lib)
        except (RuntimeError, subprocess.CalledProcessError) as exc:
            if os.environ.get("MORFEUSZ_REQUIRE_NATIVE") == "1":
                raise
            # The package still installs; get_lib() explains how to point
            # MORFEUSZ_LIBRARY at a shim built elsewhere.
            self._log(f"WARNING: native shim not built ({exc})")
            return

        self._log(f"Built {lib_name} into morfeusz/")
        self._mark_platform_specific(build_data, target_lib)

    def _mark_platform_specific(self, build_data: dict, target_lib: Path) -> None:
        build_data["pure_python"] = False
        build_data["infer_tag"] = True
        build_data.setdefault("artifacts", []).append(f"morfeusz/{target_lib.name}")

    def _get_lib_name(self) -> str:
        """Get platform-specific library name."""
        system = platform.system()
        if system == "Darwin":
            return "libmorfeusz_shim.dylib"
        elif system == "Windows":
            return "morfeusz_shim.dll"
        else:
            return "libmorfeusz_shim.so"

    def _find_compiler(self) -> str | None:
        env_cxx = os.environ.get("CXX")
        if env_cxx and shutil.which(env_cxx):
            return env_cxx
        for candidate in ("c++", "g++", "clang++"):
            if shutil.which(candidate):
                return candidate
        return None

    def _run_build(self, source: Path, target: Path) -> None:
        """Run the compiler."""
        if not source.exists():
            raise RuntimeError(f"Shim source not found: {source}")

        compiler = self._find_compiler()
        if compiler is None:
            raise RuntimeError("C++ compiler not found. Install g++ or clang++, or set CXX.")

        cmd = [compiler, "-shared", "-fPIC", "-O2", "-std=c++11", f"-I{source.parent}"]
        # MORFEUSZ_PREFIX points at a Morfeusz 2 install outside the default paths
        prefix = os.environ.get("MORFEUSZ_PREFIX")
        if prefix:
            cmd += [f"-I{Path(prefix) / 'include'}", f"-L{Path(prefix) / 'lib'}"]
        cmd += [str(source), "-o", str(target), "-lmorfeusz2"]
        if platform.system() == "Darwin":
            cmd.insert(1, "-dynamiclib")

        self._log("Compiling " + " ".join(cmd))
        subprocess.run(cmd, check=True)

        # Strip binaries
        if shutil.which("strip") and target.exists():
            # macOS strip needs -x for dylibs
            is_macos = platform.system() == "Darwin"
            strip_cmd = ["strip", "-x", str(target)] if is_macos else ["strip", str(target)]
            subprocess.run(strip_cmd, check=False)

    def _sync_version(self, package_root: Path) -> None:
        """Sync VERSION file to _version.py."""
        version_file = package_root / "VERSION"
        if not version_file.exists():
            raise RuntimeError(
                "Cannot determine package version: no VERSION file found. "
                "Ensure the repo root contains a VERSION file or build from an sdist."
            )
        version = version_file.read_text().strip()

        version_py = package_root / "morfeusz" / "_version.py"
        content = f'"""Version from VERSION file."""\n__version__ = "{version}"\n'
        if version_py.exists() and version_py.read_text() == content:
            return
        version_py.write_text(content)
        self._log(f"Synced version {version} to _version.py")

    def _log(self, msg: str) -> None:
        """Log build progress."""
        print(f"[shim-build] {msg}", file=sys.stderr)
