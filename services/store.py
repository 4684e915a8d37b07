"""
JSON document store for the bot's persistent state.

Exactly three documents exist: repeating broadcasts, per-trainee fail
counters and the command usage log. Every read and write goes through
an allow-list of their resolved paths, so a caller can never reach a file
outside the data directory.

Writes replace the whole document using the temp-file-and-rename pattern.
"""

from __future__ import annotations

import json
import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Any

from utils.errors import StorageAccessError
from utils.logging import get_logger

logger = get_logger(__name__)


class Resource(str, Enum):
    """Logical documents the store is allowed to touch."""

    REPEATS = "repeats"
    FAIL_COUNTS = "fail_counts"
    COMMAND_LOGS = "command_logs"

    @property
    def filename(self) -> str:
        return _FILENAMES[self]


_FILENAMES = {
    Resource.REPEATS: "repeats.json",
    Resource.FAIL_COUNTS: "failCounts.json",
    Resource.COMMAND_LOGS: "commandLogs.json",
}


class JsonStore:
    """Load and save the allow-listed JSON documents in one data directory."""

    def __init__(self, data_dir: Path | str = ".") -> None:
        self.data_dir = Path(data_dir).resolve()
        self._allowed: dict[Path, Resource] = {
            self.data_dir / resource.filename: resource for resource in Resource
        }

    def path_for(self, resource: Resource | str) -> Path:
        """Resolve a resource to its on-disk path or raise StorageAccessError."""
        if isinstance(resource, Resource):
            return self.data_dir / resource.filename

        if isinstance(resource, str):
            try:
                return self.data_dir / Resource(resource).filename
            except ValueError:
                pass

            candidate = Path(resource)
            if not candidate.is_absolute():
                candidate = self.data_dir / candidate
            candidate = candidate.resolve()
            if candidate in self._allowed:
                return candidate

        logger.warning("Rejected store access to %r", resource)
        raise StorageAccessError(resource)

    def load(self, resource: Resource | str, default: Any) -> Any:
        """Return the parsed document, or ``default`` when missing or unreadable."""
        path = self.path_for(resource)
        if not path.exists():
            return default
        try:
            with path.open(encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, ValueError) as e:
            logger.warning(
                "Could not read %s (%s); starting from default", path.name, e
            )
            return default

    def save(self, resource: Resource | str, document: Any) -> None:
        """Serialize ``document`` and atomically replace the resource file."""
        path = self.path_for(resource)
        content = json.dumps(document, indent=2, ensure_ascii=False)

        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            temp_path.replace(path)
        except Exception:
            logger.exception("Failed to write %s", path.name)
            temp_path.unlink(missing_ok=True)
            raise

        logger.debug("Saved %s", path.name)
