"""
Pipeline — write → compile → [run] → clean up, for one probe invocation.

Entry points:
  check_compile  steps write/compile/cleanup only; returns the compile output.
  check_run      full pipeline; returns a CompileRunOutput.

Every failure to write, launch, or remove is raised as ProbeIOError and
aborts the invocation. A non-zero exit status is *not* an error here;
it is recorded in the returned outputs and judged by the decoder.
"""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Union

from c_api_probe.core.scratch import ScratchPaths, random_source_and_exe_paths
from c_api_probe.errors import ProbeIOError
from c_api_probe.io.schema import CommandOutput, CompileRunOutput

logger = logging.getLogger(__name__)

StrategyResult = Union[CommandOutput, subprocess.CompletedProcess]
CompileCommand = Callable[[Path, Path], StrategyResult]
RunCommand = Callable[[Path], StrategyResult]

# Launch failures a strategy may raise (not found, EACCES, timeout, ...).
LAUNCH_ERRORS = (OSError, subprocess.SubprocessError)


def _normalize(result: StrategyResult) -> CommandOutput:
    if isinstance(result, CommandOutput):
        return result
    if isinstance(result, subprocess.CompletedProcess):
        return CommandOutput.from_completed(result)
    raise TypeError(
        f"command strategy returned {type(result).__name__}, "
        "expected CommandOutput or subprocess.CompletedProcess"
    )


def _write_source(path: Path, source: Union[str, bytes]) -> None:
    data = source.encode("utf-8") if isinstance(source, str) else source
    try:
        with open(path, "xb") as f:
            f.write(data)
    except OSError as e:
        raise ProbeIOError(e, f"writing {path}") from e


def _remove(path: Path, missing_ok: bool = False) -> None:
    try:
        path.unlink()
    except FileNotFoundError as e:
        if not missing_ok:
            raise ProbeIOError(e, f"removing {path}") from e
    except OSError as e:
        raise ProbeIOError(e, f"removing {path}") from e


def _discard(path: Path) -> None:
    """Best-effort removal on a path that is already failing."""
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not remove scratch file %s: %s", path, e)


def _compile(
    paths: ScratchPaths,
    compile_to: CompileCommand,
    source: Union[str, bytes],
) -> CommandOutput:
    """Steps 1-3: write, compile, remove the source.

    Once the source is written, any failure removes both scratch files
    before the exception leaves this function.
    """
    _write_source(paths.source, source)
    logger.debug("[%x] compiling %s -> %s", paths.suffix, paths.source, paths.exe)
    done = False
    try:
        try:
            compile_output = _normalize(compile_to(paths.source, paths.exe))
        except LAUNCH_ERRORS as e:
            raise ProbeIOError(e, "launching the compiler") from e
        _remove(paths.source)
        done = True
    finally:
        if not done:
            _discard(paths.source)
            _discard(paths.exe)
    logger.debug("[%x] compile exited with %d", paths.suffix, compile_output.returncode)
    return compile_output


def check_compile(
    work_dir: Path,
    compile_to: CompileCommand,
    source: Union[str, bytes],
) -> CommandOutput:
    """Write *source* to a scratch file and try to compile it.

    Any executable produced is removed again; a missing one is fine.
    """
    paths = random_source_and_exe_paths(work_dir)
    compile_output = _compile(paths, compile_to, source)
    _remove(paths.exe, missing_ok=True)
    return compile_output


def check_run(
    work_dir: Path,
    compile_to: CompileCommand,
    run: RunCommand,
    source: Union[str, bytes],
) -> CompileRunOutput:
    """Write *source*, compile it, and run it if compilation succeeded."""
    paths = random_source_and_exe_paths(work_dir)
    compile_output = _compile(paths, compile_to, source)

    if not compile_output.success:
        # Usually nothing was produced; a half-written binary still goes.
        _remove(paths.exe, missing_ok=True)
        return CompileRunOutput(compile_output=compile_output, run_output=None)

    logger.debug("[%x] running %s", paths.suffix, paths.exe)
    done = False
    try:
        try:
            run_output = _normalize(run(paths.exe))
        except LAUNCH_ERRORS as e:
            raise ProbeIOError(e, f"running {paths.exe}") from e
        _remove(paths.exe)
        done = True
    finally:
        if not done:
            _discard(paths.exe)
    logger.debug("[%x] run exited with %d", paths.suffix, run_output.returncode)

    return CompileRunOutput(compile_output=compile_output, run_output=run_output)
