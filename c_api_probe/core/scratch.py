"""
Scratch names — per-invocation source/executable paths in a shared work dir.

Each invocation draws a fresh 64-bit random suffix and uses it for both
files, so concurrent probes (threads, or a parallel build running several
processes) don't clobber each other. There is no lock and no existence
check: a 64-bit collision between live invocations is improbable enough
to accept, and skipping the lock keeps latency low on every platform.
"""
import os
import secrets
from dataclasses import dataclass
from pathlib import Path

SUFFIX_BITS = 64

# Native executable suffix for the build host.
EXE_SUFFIX = ".exe" if os.name == "nt" else ""


@dataclass(frozen=True)
class ScratchPaths:
    """Source and executable paths sharing one random suffix."""

    suffix: int
    source: Path
    exe: Path


def random_source_and_exe_paths(work_dir: Path) -> ScratchPaths:
    suffix = secrets.randbits(SUFFIX_BITS)
    work_dir = Path(work_dir)
    return ScratchPaths(
        suffix=suffix,
        source=work_dir / f"source-{suffix}.c",
        exe=work_dir / f"exe-{suffix}{EXE_SUFFIX}",
    )
