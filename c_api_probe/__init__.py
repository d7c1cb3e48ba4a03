"""
c_api_probe — build-time probing of a C library's ABI.

Writes tiny C programs, compiles them with an external compiler, runs
them, and parses what they print: type sizes and alignments, signedness,
macro definitions, integer constants, and fixed-width integer
equivalents.

Usage::

    from c_api_probe import Probe

    probe = Probe.default()
    probe.size_of("long")            # 8 on LP64
    probe.is_defined_macro("__STDC__")  # True
"""

__version__ = "0.3.0"
PACKAGE_NAME = "c_api_probe"

from c_api_probe.core.integers import NativeInteger
from c_api_probe.errors import (
    CompileError,
    DecodeError,
    NewProbeError,
    ProbeError,
    ProbeIOError,
    RunError,
    WorkDirMetadataInaccessible,
    WorkDirNotADirectory,
)
from c_api_probe.io.schema import CommandOutput, CompileRunOutput
from c_api_probe.probe import Probe

__all__ = [
    "CommandOutput",
    "CompileError",
    "CompileRunOutput",
    "DecodeError",
    "NativeInteger",
    "NewProbeError",
    "Probe",
    "ProbeError",
    "ProbeIOError",
    "RunError",
    "WorkDirMetadataInaccessible",
    "WorkDirNotADirectory",
]
