"""Implementation of (Game)Repository storing one JSON file per key (the local-storage flavour of persistence)"""

import re
from pathlib import Path

from src.core.exceptions import RepositoryError
from src.core.models import GameModel

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class JSONFileGameRepository:
    """Snapshots stored as '<key>.json' files in a directory."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def read(self, key: str) -> GameModel | None:
        """Get the snapshot stored under key, if a file exists."""
        path = self._path(key)
        if not path.exists():
            return None
        return GameModel.model_validate_json(path.read_text(encoding="utf-8"))

    def write(self, key: str, game: GameModel) -> None:
        """Write to a temporary file first, so a failed write never leaves half a snapshot behind."""
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(game.model_dump_json(indent=2), encoding="utf-8")
        tmp_path.replace(path)

    def delete(self, key: str) -> None:
        """Remove the snapshot file (no-op when absent)."""
        self._path(key).unlink(missing_ok=True)

    def close(self) -> None:
        """Nothing is held open between calls."""

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise RepositoryError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"
