"""A small persistent ``name=value`` parameter store."""

from __future__ import annotations

import time
from pathlib import Path

from pcbgcode.strings import _strtod, lookup

NAME_FIELD = 0
VALUE_FIELD = 1
SEPARATOR = "="
STORAGE_FILE_NAME = "storage.nv"


class NonVolatileStore:
    """Parameters kept one per line as ``name=value`` in a text file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        if not self.path.exists():
            self.path.write_text(f"created{SEPARATOR}{time.asctime()}\n")

    def _read(self, strict: bool = False) -> list[str]:
        try:
            return self.path.read_text().splitlines()
        except OSError:
            if strict:
                raise
            return []

    def _lookup(self, name: str, default: str, strict: bool) -> str:
        value = lookup(self._read(strict), name, VALUE_FIELD, SEPARATOR)
        return value if value else default

    def get(self, name: str, default: str = "") -> str:
        """Value stored under ``name``, or ``default`` when absent or empty."""
        return self._lookup(name, default, strict=False)

    def set(self, name: str, value: str) -> None:
        """Store ``value`` under ``name``, replacing any existing value."""
        params = self._read()
        record = f"{name}{SEPARATOR}{value}"
        if lookup(params, name, VALUE_FIELD, SEPARATOR) == "":
            params.append(record)
        else:
            for index, line in enumerate(params):
                if line.split(SEPARATOR)[NAME_FIELD] == name:
                    params[index] = record
                    break
        self.path.write_text("".join(f"{line}\n" for line in params))

    def get_real(self, name: str) -> float:
        """Numeric value stored under ``name``; raises OSError if unreadable."""
        return _strtod(self._lookup(name, "0.000", strict=True))

    def set_real(self, name: str, value: float) -> None:
        """Store a number with ``%f`` formatting."""
        self.set(name, "%f" % value)