"""
Decoder — probe program stdout → typed value.

The result protocol is plain text: a decimal integer for sizes,
alignments and constants, the literal ``true``/``false`` for booleans.
Surrounding whitespace is ignored. Anything else is a DecodeError, never
a bare ValueError.
"""
import re
from typing import Callable, TypeVar

from c_api_probe.errors import DecodeError
from c_api_probe.io.schema import CompileRunOutput

T = TypeVar("T")

_SIGNED_RE = re.compile(r"^[+-]?[0-9]+$")
_UNSIGNED_RE = re.compile(r"^\+?[0-9]+$")

_BOOLS = {"true": True, "false": False}


def parse_int(text: str) -> int:
    """Parse a signed decimal integer."""
    stripped = text.strip()
    if not _SIGNED_RE.match(stripped):
        raise DecodeError("expected a decimal integer from probe program", text)
    return int(stripped)


def parse_unsigned(text: str) -> int:
    """Parse a non-negative decimal integer."""
    stripped = text.strip()
    if not _UNSIGNED_RE.match(stripped):
        raise DecodeError(
            "expected an unsigned decimal integer from probe program", text
        )
    return int(stripped)


def parse_bool(text: str) -> bool:
    """Parse the literal ``true`` or ``false``."""
    stripped = text.strip()
    try:
        return _BOOLS[stripped]
    except KeyError:
        raise DecodeError(
            'expected "true" or "false" from probe program', text
        ) from None


def decode_output(outcome: CompileRunOutput, parser: Callable[[str], T]) -> T:
    """Take the successful run's stdout and parse it.

    CompileError / RunError propagate from ``successful_run_output``.
    """
    return parser(outcome.successful_run_output())
