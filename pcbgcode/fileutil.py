"""File helpers."""

from __future__ import annotations

from pathlib import Path

from pcbgcode.library import GcodeError


def filecopy(from_name: str | Path, to_name: str | Path) -> None:
    """Copy a text file line by line; every line ends with a newline."""
    try:
        lines = Path(from_name).read_text().splitlines()
    except OSError as exc:
        raise GcodeError(f"Could not open {from_name} for copying to {to_name}") from exc
    try:
        Path(to_name).write_text("".join(f"{line}\n" for line in lines))
    except OSError as exc:
        raise GcodeError(f"Could not write the contents of {from_name} to {to_name}") from exc