"""
Errors — construction failures and probe failures.

Two independent hierarchies:

  NewProbeError   raised by ``Probe(...)`` when the work directory is unusable.
  ProbeError      raised by probe invocations; the subclass names the phase
                  that failed and carries only that phase's diagnostics.

A CompileError is often an expected answer ("this construct does not
exist on this toolchain"), not a tooling malfunction. Nothing here is
retried: probe inputs are deterministic.
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from c_api_probe.io.schema import CommandOutput


# ── Construction ─────────────────────────────────────────────────────────────

class NewProbeError(Exception):
    """Probe construction failed."""


class WorkDirMetadataInaccessible(NewProbeError):
    """Metadata for the work directory could not be read (missing, EACCES, ...)."""

    def __init__(self, error: OSError):
        self.error = error
        super().__init__(f"could not query metadata of work directory: {error}")


class WorkDirNotADirectory(NewProbeError):
    """The work directory path exists but is not a directory."""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(f"{str(self.path)!r} is not a directory")


# ── Invocation ───────────────────────────────────────────────────────────────

class ProbeError(Exception):
    """Base class for every failure of a probe invocation."""


class ProbeIOError(ProbeError):
    """Scratch file write/removal failed, or a command could not be launched."""

    def __init__(self, cause: BaseException, action: Optional[str] = None):
        self.cause = cause
        self.action = action
        prefix = f"I/O error while {action}" if action else "I/O error"
        super().__init__(f"{prefix}: {cause}")


class CompileError(ProbeError):
    """The compiler ran and reported failure."""

    def __init__(self, compile_output: "CommandOutput"):
        self.compile_output = compile_output
        super().__init__(
            f"compilation error with output: {compile_output.describe()}"
        )


class RunError(ProbeError):
    """The probe program compiled but exited unsuccessfully.

    The compile output is kept as well, to help debugging.
    """

    def __init__(self, compile_output: "CommandOutput", run_output: "CommandOutput"):
        self.compile_output = compile_output
        self.run_output = run_output
        super().__init__(
            f"test program error with output: {run_output.describe()}"
        )


class DecodeError(ProbeError):
    """The probe program succeeded but printed something unparseable."""

    def __init__(self, message: str, text: Optional[str] = None):
        self.message = message
        self.text = text
        detail = f" (got {text!r})" if text is not None else ""
        super().__init__(f"{message}{detail}")
