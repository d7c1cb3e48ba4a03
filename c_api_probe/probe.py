"""
Probe — compile and run small C programs to learn facts about a C API.

A Probe holds *how* to build and run programs (headers, work directory,
compile and run strategies) and nothing mutable, so one instance can be
shared by many threads. Every query writes its own randomly named scratch
files and removes them afterwards.

Usage::

    probe = Probe(
        ['"mylib.h"'],
        Path("/tmp"),
        make_compile_command("cc", include_dirs=["include"]),
        make_run_command(),
    )
    probe.size_of("mylib_handle")            # -> 8
    probe.equivalent_integer("mylib_flags")  # -> NativeInteger.UINT32
"""
from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar, Union

from c_api_probe.commands import make_compile_command, make_run_command
from c_api_probe.config import ProbeSettings
from c_api_probe.core import pipeline
from c_api_probe.core.decode import decode_output, parse_bool, parse_int, parse_unsigned
from c_api_probe.core.integers import NativeInteger, resolve_native_integer
from c_api_probe.core.pipeline import CompileCommand, RunCommand
from c_api_probe.core.source import main_source_template
from c_api_probe.errors import WorkDirMetadataInaccessible, WorkDirNotADirectory
from c_api_probe.io.schema import CommandOutput, CompileRunOutput

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _check_work_dir(work_dir: Path) -> None:
    try:
        st = os.stat(work_dir)
    except OSError as e:
        raise WorkDirMetadataInaccessible(e) from e
    if not stat.S_ISDIR(st.st_mode):
        raise WorkDirNotADirectory(work_dir)


class Probe:
    """How to compile and run probe programs, plus the queries built on it.

    Parameters
    ----------
    headers : sequence of str
        Included in every program, in order. Each carries its own ``<>``
        or ``""`` delimiters, e.g. ``"<stdint.h>"`` or ``'"mylib.h"'``.
    work_dir : Path
        Directory where scratch sources and executables are created. It
        must exist and be a directory; this is checked here, once.
        Permissions are not checked: an unwritable directory shows up as
        ProbeIOError on first use.
    compile_to : callable(source_path, exe_path)
        Produce a runnable program at *exe_path* from *source_path*.
    run : callable(exe_path)
        Run the program and capture its status and output.

    Both callables return CommandOutput (or subprocess.CompletedProcess)
    and raise OSError when the command cannot be launched.
    """

    __slots__ = ("_headers", "_work_dir", "_compile_to", "_run")

    def __init__(
        self,
        headers: Iterable[str],
        work_dir: Union[str, Path],
        compile_to: CompileCommand,
        run: RunCommand,
    ):
        work_dir = Path(work_dir)
        _check_work_dir(work_dir)
        self._headers: Tuple[str, ...] = tuple(headers)
        self._work_dir = work_dir
        self._compile_to = compile_to
        self._run = run

    @classmethod
    def default(cls, settings: Optional[ProbeSettings] = None) -> "Probe":
        """Probe using the system compiler from settings (gcc, OS temp dir).

        Raises NewProbeError if the configured work directory is unusable.
        """
        if settings is None:
            settings = ProbeSettings()
        return cls(
            settings.HEADERS,
            settings.work_dir,
            make_compile_command(
                settings.CC,
                cflags=settings.CFLAGS,
                include_dirs=settings.INCLUDE_DIRS,
                timeout=settings.TIMEOUT,
            ),
            make_run_command(timeout=settings.TIMEOUT),
        )

    @property
    def headers(self) -> Tuple[str, ...]:
        return self._headers

    @property
    def work_dir(self) -> Path:
        return self._work_dir

    def __repr__(self) -> str:
        return f"Probe(work_dir={str(self._work_dir)!r}, headers={list(self._headers)!r})"

    # ── Pipeline entry points ────────────────────────────────────────────

    def check_compile(self, source: Union[str, bytes]) -> CommandOutput:
        """Write *source* to a file and try to compile it.

        Mostly useful for reusing the compile strategy directly, and for
        testing the probe itself.
        """
        return pipeline.check_compile(self._work_dir, self._compile_to, source)

    def check_run(self, source: Union[str, bytes]) -> CompileRunOutput:
        """Write *source* to a file, compile it, and run it if that worked."""
        return pipeline.check_run(self._work_dir, self._compile_to, self._run, source)

    def main_source(self, headers: Sequence[str], main_body: str) -> str:
        """Full program: this probe's headers, then *headers*, then main."""
        return main_source_template(self._headers, headers, main_body)

    def _run_to_get_value(
        self,
        headers: List[str],
        main_body: str,
        parser: Callable[[str], T],
    ) -> T:
        source = self.main_source(headers, main_body)
        return decode_output(self.check_run(source), parser)

    # ── Derived probes ───────────────────────────────────────────────────

    def size_of(self, type_: str) -> int:
        """Size of a C type, in bytes."""
        body = (
            f'printf("%zu\\n", sizeof({type_}));\n'
            "return 0;"
        )
        return self._run_to_get_value(["<stdio.h>"], body, parse_unsigned)

    def align_of(self, type_: str) -> int:
        """Alignment of a C type, in bytes.

        Needs C11 ``<stdalign.h>``/``alignof`` support from the compiler;
        nothing checks that up front.
        """
        body = (
            f'printf("%zu\\n", alignof({type_}));\n'
            "return 0;"
        )
        return self._run_to_get_value(["<stdio.h>", "<stdalign.h>"], body, parse_unsigned)

    def is_defined_macro(self, token: str) -> bool:
        """Whether *token* is defined as a macro.

        Handy both for ``#ifdef``-style configuration macros and for finding
        out whether a function or constant is really a macro on this
        version of the library.
        """
        body = (
            f"#ifdef {token}\n"
            'printf("true");\n'
            "#else\n"
            'printf("false");\n'
            "#endif\n"
            "return 0;"
        )
        return self._run_to_get_value(["<stdio.h>"], body, parse_bool)

    def is_signed(self, type_: str) -> bool:
        """Whether an integer type is signed."""
        body = (
            f"if ((({type_})-1) < 0) {{\n"
            'printf("true");\n'
            "} else {\n"
            'printf("false");\n'
            "}\n"
            "return 0;"
        )
        return self._run_to_get_value(["<stdio.h>"], body, parse_bool)

    def signed_integer_constant(self, name: str) -> int:
        """Value of an integer constant or macro, read as signed."""
        body = (
            f'printf("%lld\\n", (long long)({name}));\n'
            "return 0;"
        )
        return self._run_to_get_value(["<stdio.h>"], body, parse_int)

    def unsigned_integer_constant(self, name: str) -> int:
        """Value of an integer constant or macro, read as unsigned."""
        body = (
            f'printf("%llu\\n", (unsigned long long)({name}));\n'
            "return 0;"
        )
        return self._run_to_get_value(["<stdio.h>"], body, parse_unsigned)

    def equivalent_integer(self, type_: str) -> Optional[NativeInteger]:
        """Fixed-width integer binary-compatible with a C integer type.

        Returns None when the type's size is not 1, 2, 4 or 8 bytes.
        Errors from the size or signedness probes propagate unchanged.
        """
        size = self.size_of(type_)
        signed = self.is_signed(type_)
        native = resolve_native_integer(size, signed)
        if native is None:
            logger.info(
                "No fixed-width equivalent for %s (%d bytes, %s)",
                type_, size, "signed" if signed else "unsigned",
            )
        return native
