"""Persisted ignore patterns.

The configuration is a plain text file with one pattern per line; blank lines and
lines starting with ``#`` are skipped. Its location is ``$DIRSTRUCT_CONFIG`` when set
and ``~/.config/dirstruct/ignores.txt`` otherwise. Traversals only ever read a
snapshot of it, taken once at the start of an invocation.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from dirstruct.types import PathType

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DIRSTRUCT_CONFIG"


def default_config_path() -> Path:
    """Location of the configuration file for the current environment."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "dirstruct" / "ignores.txt"


class ConfigStore:
    """Read and edit the persisted ignore pattern list.

    Attributes:
        path (Path): The configuration file. It need not exist; a missing file is an
            empty configuration.

    Example:
        >>> store = ConfigStore("/tmp/ignores.txt")  # doctest: +SKIP
        >>> store.add("venv_old")  # doctest: +SKIP
        True
        >>> store.load()  # doctest: +SKIP
        ['venv_old']
    """

    def __init__(self, path: Optional[PathType] = None) -> None:
        self.path = Path(path) if path is not None else default_config_path()

    def load(self) -> List[str]:
        """Return the configured patterns in file order.

        Raises:
            OSError: If the file exists but cannot be read.
        """
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        patterns = []
        for line in content.splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                patterns.append(line)
        return patterns

    def _save(self, patterns: List[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("".join(f"{pattern}\n" for pattern in patterns), encoding="utf-8")
        logger.debug("Wrote %d pattern(s) to %s", len(patterns), self.path)

    def add(self, pattern: str) -> bool:
        """Append a pattern.

        Returns:
            bool: False if the pattern was already present (the file is left untouched).

        Raises:
            ValueError: If the pattern is blank or starts with ``#``.
        """
        pattern = pattern.strip()
        if not pattern or pattern.startswith("#"):
            raise ValueError(f"Cannot store pattern '{pattern}': patterns must be non-empty and not start with '#'")
        patterns = self.load()
        if pattern in patterns:
            return False
        patterns.append(pattern)
        self._save(patterns)
        return True

    def remove(self, pattern: str) -> bool:
        """Remove every occurrence of a pattern.

        Returns:
            bool: False if the pattern was not configured.
        """
        pattern = pattern.strip()
        patterns = self.load()
        remaining = [p for p in patterns if p != pattern]
        if len(remaining) == len(patterns):
            return False
        self._save(remaining)
        return True

    def clear(self) -> bool:
        """Delete the configuration file.

        Returns:
            bool: False if there was no file to delete.
        """
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        return True
