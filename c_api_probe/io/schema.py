"""
Schema — Pydantic models for the outcome of external commands.

Two records:
  1. CommandOutput    — one completed process: exit status + captured bytes.
  2. CompileRunOutput — compile phase plus the (optional) run phase.

A process that could not be launched at all never becomes a
CommandOutput; the strategy raises OSError instead and the pipeline
reports it as ProbeIOError.
"""
from __future__ import annotations

import subprocess
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from c_api_probe.errors import CompileError, RunError


# ── Single command ───────────────────────────────────────────────────────────

class CommandOutput(BaseModel):
    """Captured result of one finished external process."""

    model_config = ConfigDict(frozen=True)

    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @classmethod
    def from_completed(cls, completed: subprocess.CompletedProcess) -> "CommandOutput":
        """Build from ``subprocess.run(..., capture_output=True)``.

        Text-mode results are re-encoded as UTF-8 so the record always
        holds bytes.
        """
        return cls(
            returncode=completed.returncode,
            stdout=_as_bytes(completed.stdout),
            stderr=_as_bytes(completed.stderr),
        )

    def describe(self) -> str:
        """Human-readable one-liner: status, stdout and stderr (lossy UTF-8)."""
        return (
            f"{{ status: {self.returncode}, "
            f"stdout: {self.stdout.decode('utf-8', errors='replace')}, "
            f"stderr: {self.stderr.decode('utf-8', errors='replace')} }}"
        )


def _as_bytes(data) -> bytes:
    if data is None:
        return b""
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


# ── Compile + run ────────────────────────────────────────────────────────────

class CompileRunOutput(BaseModel):
    """Outputs of both compilation and running.

    ``run_output`` is None exactly when compilation failed: a program that
    did not compile is never run.
    """

    model_config = ConfigDict(frozen=True)

    compile_output: CommandOutput
    run_output: Optional[CommandOutput] = None

    @model_validator(mode="after")
    def check_run_iff_compiled(self) -> "CompileRunOutput":
        if self.compile_output.success and self.run_output is None:
            raise ValueError("compilation succeeded but run_output is missing")
        if not self.compile_output.success and self.run_output is not None:
            raise ValueError("compilation failed but run_output is present")
        return self

    def successful_run_output(self) -> str:
        """Return the probe program's standard output as text.

        Raises CompileError when there was no run phase and RunError when
        the program exited unsuccessfully. Invalid UTF-8 is replaced, not
        rejected; garbage shows up later as a DecodeError.
        """
        if self.run_output is None:
            raise CompileError(self.compile_output)
        if not self.run_output.success:
            raise RunError(self.compile_output, self.run_output)
        return self.run_output.stdout.decode("utf-8", errors="replace")

    def describe(self) -> str:
        run = self.run_output.describe() if self.run_output is not None else "None"
        return (
            f"CompileRunOutput{{ compile output: {self.compile_output.describe()} "
            f"run output: {run} }}"
        )
