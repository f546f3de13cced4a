"""Input discovery implementing the scanner port."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from woff2_batch.application.options import DEFAULT_EXTENSIONS
from woff2_batch.errors import PreconditionError


class DirectoryScanner:
    """List font files in a single directory by extension."""

    def __init__(self, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> None:
        self.extensions = frozenset(ext.lower() for ext in extensions)

    def matches(self, name: str) -> bool:
        """Return whether ``name`` has an allowed extension (case-insensitive)."""
        return Path(name).suffix.lower() in self.extensions

    def scan(self, directory: Path) -> list[str]:
        """Return sorted names of matching regular files in ``directory``.

        Parameters
        ----------
        directory : Path
            Directory to list. Subdirectories are not descended into.

        Returns
        -------
        list[str]
            Matching file names; empty when nothing qualifies.

        Raises
        ------
        PreconditionError
            If ``directory`` does not exist or is not a directory.
        """
        if not directory.is_dir():
            raise PreconditionError(f"Input directory '{directory}' not found.")
        try:
            entries = list(directory.iterdir())
        except OSError as exc:
            raise PreconditionError(
                f"Unable to list input directory '{directory}': {exc}"
            ) from exc
        return sorted(
            entry.name
            for entry in entries
            if entry.is_file() and self.matches(entry.name)
        )
