"""Blocking filesystem access for artifact readers.

All disk reads made by the tracker and the deployment-record reader go
through a ``FileReader``. Reads return a ``ReadOutcome`` instead of raising,
so callers decide per call site whether a failure means "skip" or "absent".
"""

import json
from pathlib import Path
from typing import Any, Iterator, List

from .types import ReadOutcome


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


class FileReader:
    """Synchronous reader over the local filesystem."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def iter_files(self, root: Path) -> Iterator[Path]:
        """
        Recursively yield files under a directory in sorted order.

        Directories that cannot be listed are skipped.

        Args:
            root: Directory to walk

        Yields:
            Paths of regular files
        """
        try:
            entries = sorted(root.iterdir())
        except OSError:
            return

        for entry in entries:
            if entry.is_dir():
                yield from self.iter_files(entry)
            elif entry.is_file():
                yield entry

    def list_files(self, directory: Path, suffix: str) -> List[Path]:
        """Return files directly inside ``directory`` ending with ``suffix``, sorted."""
        try:
            return sorted(
                p for p in directory.iterdir() if p.is_file() and p.name.endswith(suffix)
            )
        except OSError:
            return []

    def read_text(self, path: Path) -> ReadOutcome[str]:
        try:
            with open(path, encoding="utf-8") as f:
                return ReadOutcome.success(f.read())
        except (OSError, ValueError) as e:
            return ReadOutcome.failure(e)

    def read_json(self, path: Path) -> ReadOutcome[Any]:
        # NaN and Infinity are rejected; JSON.parse in the webapp would fail on them
        try:
            with open(path, encoding="utf-8") as f:
                return ReadOutcome.success(json.load(f, parse_constant=_reject_constant))
        except (OSError, ValueError) as e:
            return ReadOutcome.failure(e)
