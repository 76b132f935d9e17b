"""Storage for registered push notification tokens.

Stores follow an explicit lifecycle: open() loads persisted state, read() and
append() work on the loaded list, flush() persists it, close() flushes and
releases it. Tokens are kept in registration order and de-duplicated on
insert.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class TokenStore(Protocol):
    def open(self) -> None: ...

    def read(self) -> list[str]: ...

    def append(self, token: str) -> bool: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...


class InMemoryTokenStore:
    """Token store without persistence."""

    def __init__(self, tokens: list[str] | None = None):
        self._tokens: list[str] = []
        self._lock = threading.Lock()
        for token in tokens or []:
            self.append(token)

    def open(self) -> None:
        pass

    def read(self) -> list[str]:
        with self._lock:
            return list(self._tokens)

    def append(self, token: str) -> bool:
        """Register a token; returns False if it was already present."""
        with self._lock:
            if token in self._tokens:
                return False
            self._tokens.append(token)
            return True

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


class JsonFileTokenStore(InMemoryTokenStore):
    """Token store persisted as a JSON array in a file."""

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self._dirty = False

    def open(self) -> None:
        if not self.path.exists():
            logger.info(f"Token file {self.path} not found, starting empty")
            return

        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise ValueError(f"Token file {self.path} must contain a JSON array")

        with self._lock:
            self._tokens = []
            for token in data:
                if isinstance(token, str) and token not in self._tokens:
                    self._tokens.append(token)
        logger.info(f"Loaded {len(self._tokens)} push tokens from {self.path}")

    def append(self, token: str) -> bool:
        added = super().append(token)
        if added:
            self._dirty = True
        return added

    def flush(self) -> None:
        """Write the token list to disk if it changed since the last flush."""
        with self._lock:
            if not self._dirty:
                return
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(self._tokens, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
            self._dirty = False

    def close(self) -> None:
        self.flush()
