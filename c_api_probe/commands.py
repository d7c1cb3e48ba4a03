"""
Default command strategies — a system C compiler and direct execution.

Equivalent shell, per invocation::

    $CC $CFLAGS -I<dir>... <source> -o <exe>
    <exe>

Both capture stdout/stderr as bytes and return a CommandOutput. A command
that cannot be started raises OSError (or TimeoutExpired when a timeout
is configured); the pipeline reports either as ProbeIOError.
"""
import logging
import subprocess
from pathlib import Path
from typing import Iterable, List, Optional

from c_api_probe.core.pipeline import CompileCommand, RunCommand
from c_api_probe.io.schema import CommandOutput

logger = logging.getLogger(__name__)


def compile_argv(
    compiler: str,
    source_path: Path,
    exe_path: Path,
    cflags: Iterable[str] = (),
    include_dirs: Iterable[str] = (),
) -> List[str]:
    """Argument vector for one compile; no shell involved."""
    argv = [compiler]
    argv.extend(cflags)
    argv.extend(f"-I{d}" for d in include_dirs)
    argv.extend([str(source_path), "-o", str(exe_path)])
    return argv


def make_compile_command(
    compiler: str = "gcc",
    cflags: Iterable[str] = (),
    include_dirs: Iterable[str] = (),
    timeout: Optional[float] = None,
) -> CompileCommand:
    """Compile strategy invoking *compiler* on the source file."""
    cflags = list(cflags)
    include_dirs = [str(d) for d in include_dirs]

    def compile_to(source_path: Path, exe_path: Path) -> CommandOutput:
        argv = compile_argv(compiler, source_path, exe_path, cflags, include_dirs)
        logger.debug("compile: %s", " ".join(argv))
        result = subprocess.run(
            argv, stdin=subprocess.DEVNULL, capture_output=True, timeout=timeout
        )
        return CommandOutput.from_completed(result)

    return compile_to


def make_run_command(timeout: Optional[float] = None) -> RunCommand:
    """Run strategy executing the produced binary directly."""

    def run(exe_path: Path) -> CommandOutput:
        result = subprocess.run(
            [str(exe_path)], stdin=subprocess.DEVNULL, capture_output=True, timeout=timeout
        )
        return CommandOutput.from_completed(result)

    return run
