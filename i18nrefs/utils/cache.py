"""Parsed-JSON cache for a single load/validation run.

The structure check and the reference check both read every locale file.
A ``JsonFileCache`` is created by the caller for one run, handed to the
loader, and dropped afterwards. Nothing here is module-level state.
"""

import json
import threading
from pathlib import Path
from typing import Any


class JsonFileCache:
    """Parsed JSON documents keyed by resolved file path.

    Safe to share between the worker threads of one validation run.
    """

    def __init__(self) -> None:
        self._documents: dict[Path, Any] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def load(self, filepath: Path | str) -> Any:
        """Return the parsed contents of a JSON file, reading it at most once.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not UTF-8.
            json.JSONDecodeError: If the file is not valid JSON.
        """
        key = Path(filepath).resolve()
        with self._lock:
            if key in self._documents:
                self.hits += 1
                return self._documents[key]

        document = json.loads(key.read_text(encoding="utf-8"))

        with self._lock:
            self.misses += 1
            self._documents.setdefault(key, document)
            return self._documents[key]

    def clear(self) -> None:
        with self._lock:
            self._documents.clear()
            self.hits = 0
            self.misses = 0

    def __contains__(self, filepath: object) -> bool:
        if not isinstance(filepath, (str, Path)):
            return False
        return Path(filepath).resolve() in self._documents

    def __len__(self) -> int:
        return len(self._documents)
