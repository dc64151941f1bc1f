"""GitHub Actions sink — log groups and step outputs."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, TextIO

from versioncheck.scanner.models import ScanResult


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@contextmanager
def group(title: str, stream: Optional[TextIO] = None) -> Iterator[None]:
    """Fold everything printed inside the block into a collapsible log group."""
    out = stream or sys.stdout
    print(f"::group::{title}", file=out, flush=True)
    try:
        yield
    finally:
        print("::endgroup::", file=out, flush=True)


def set_output(
    name: str,
    value: Any,
    *,
    output_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Set one step output.

    Appends ``name=value`` to the ``$GITHUB_OUTPUT`` file when one is given,
    otherwise falls back to the legacy ``::set-output`` workflow command.
    """
    text = _stringify(value)
    if output_file:
        with open(Path(output_file), "a", encoding="utf-8") as f:
            f.write(f"{name}={text}\n")
    else:
        print(f"::set-output name={name}::{text}", file=stream or sys.stdout, flush=True)


def set_outputs(
    result: ScanResult,
    *,
    output_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> Dict[str, Any]:
    """Set every output of *result*; returns what was written."""
    outputs = result.to_outputs()
    with group("Outputs", stream=stream):
        for name, value in outputs.items():
            set_output(name, value, output_file=output_file, stream=stream)
            print(f"{name}: {_stringify(value)}", file=stream or sys.stdout)
    return outputs
