"""
Shared pytest fixtures for c_api_probe tests.

Two kinds of probes:
  - Real ones backed by gcc (tests skip when gcc is not installed).
  - Fake ones whose "compiler" and "program" are Python callables, used to
    drive every error path without a toolchain.

Requirements for the real ones:
  - gcc must be available and able to produce runnable binaries.
"""
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

from c_api_probe import CommandOutput, Probe
from c_api_probe.commands import make_compile_command, make_run_command

TESTS_DIR = Path(__file__).resolve().parent


def _gcc_available() -> bool:
    """Check if gcc is in PATH."""
    return shutil.which("gcc") is not None


def _gcc_runs_binaries() -> bool:
    """Compile and run a trivial program once."""
    if not _gcc_available():
        return False

    with tempfile.TemporaryDirectory() as tmpdir:
        test_c = Path(tmpdir) / "test.c"
        test_out = Path(tmpdir) / "test_out"
        test_c.write_text("int main(void) { return 0; }\n")
        try:
            subprocess.run(
                ["gcc", str(test_c), "-o", str(test_out)],
                check=True,
                capture_output=True,
                timeout=30,
            )
            subprocess.run([str(test_out)], check=True, capture_output=True, timeout=10)
        except (OSError, subprocess.SubprocessError):
            return False
    return True


@pytest.fixture(scope="session")
def gcc_ok():
    """Skip tests if gcc is not available or its output cannot be run."""
    if not _gcc_available():
        pytest.skip("gcc not available - install gcc to run these tests")
    if not _gcc_runs_binaries():
        pytest.skip("gcc cannot build runnable binaries on this host")


@pytest.fixture
def work_dir(tmp_path) -> Path:
    d = tmp_path / "work"
    d.mkdir()
    return d


@pytest.fixture
def gcc_probe(gcc_ok, work_dir) -> Probe:
    """Plain gcc probe with no extra headers."""
    return Probe([], work_dir, make_compile_command("gcc"), make_run_command())


@pytest.fixture
def types_probe(gcc_ok, work_dir) -> Probe:
    """gcc probe that includes the test headers from this directory."""
    return Probe(
        ['"test_types.h"', '"test_constants.h"'],
        work_dir,
        make_compile_command("gcc", include_dirs=[TESTS_DIR]),
        make_run_command(),
    )


# ── Fake toolchain ───────────────────────────────────────────────────────────

class FakeToolchain:
    """
    Stand-in compiler and runner.

    ``compile_to`` records the source text and, when ``compile_status`` is
    zero, "produces" an executable by writing the source next to it.
    ``run`` hands that source to ``program`` which returns a CommandOutput.
    """

    def __init__(
        self,
        program: Optional[Callable[[str], CommandOutput]] = None,
        compile_status: int = 0,
    ):
        self.program = program or (lambda source: CommandOutput(returncode=0))
        self.compile_status = compile_status
        self.sources: List[str] = []
        self.compiled: Dict[Path, str] = {}
        self.ran: List[Path] = []
        self.compile_exc: Optional[BaseException] = None
        self.run_exc: Optional[BaseException] = None

    def compile_to(self, source_path: Path, exe_path: Path) -> CommandOutput:
        if self.compile_exc is not None:
            raise self.compile_exc
        source = source_path.read_text(encoding="utf-8")
        self.sources.append(source)
        if self.compile_status == 0:
            exe_path.write_text(source, encoding="utf-8")
            self.compiled[exe_path] = source
            return CommandOutput(returncode=0)
        return CommandOutput(returncode=self.compile_status, stderr=b"error: nope")

    def run(self, exe_path: Path) -> CommandOutput:
        if self.run_exc is not None:
            raise self.run_exc
        self.ran.append(exe_path)
        return self.program(exe_path.read_text(encoding="utf-8"))

    def probe(self, work_dir: Path, headers=()) -> Probe:
        return Probe(headers, work_dir, self.compile_to, self.run)


def printing(text: str, returncode: int = 0) -> Callable[[str], CommandOutput]:
    """Program that always prints *text*."""
    return lambda source: CommandOutput(returncode=returncode, stdout=text.encode())


@pytest.fixture
def fake_toolchain():
    return FakeToolchain


@pytest.fixture
def printing_program():
    return printing
