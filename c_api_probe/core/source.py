"""
Source synthesis — render a complete C translation unit around a main body.

The body is pasted verbatim. Callers are the derived probes in
``c_api_probe.probe``, which build well-formed snippets; this is a
template, not a validation layer.
"""
from typing import Iterable, List


def include_lines(headers: Iterable[str]) -> List[str]:
    """``#include`` directives; each header carries its own <> or "" delimiters."""
    return [f"#include {header}" for header in headers]


def main_source_template(
    probe_headers: Iterable[str],
    call_headers: Iterable[str],
    main_body: str,
) -> str:
    """
    Build the probe program.

    Probe-level headers come first, then the headers this particular call
    needs, then a ``main`` wrapping *main_body*. The body is expected to
    print its answer and ``return`` an exit code.
    """
    lines = include_lines(probe_headers)
    lines.extend(include_lines(call_headers))
    lines.append("")
    lines.append("int main(int argc, char **argv) {")
    lines.append(main_body)
    lines.append("}")
    return "\n".join(lines) + "\n"
