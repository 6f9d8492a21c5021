from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

Document = Any


class KeyValueStore(ABC):
    """Whole-document storage keyed by logical record name."""

    @abstractmethod
    def read(self, key: str) -> Optional[Document]:
        ...

    @abstractmethod
    def write(self, key: str, document: Document) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a record; removing an absent key is a no-op."""


class MemoryStore(KeyValueStore):
    def __init__(self) -> None:
        self._docs: Dict[str, Document] = {}

    def read(self, key: str) -> Optional[Document]:
        doc = self._docs.get(key)
        return copy.deepcopy(doc) if doc is not None else None

    def write(self, key: str, document: Document) -> None:
        self._docs[key] = copy.deepcopy(document)

    def remove(self, key: str) -> None:
        self._docs.pop(key, None)


class JsonFileStore(KeyValueStore):
    """One ``<key>.json`` file per record inside ``root``."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def read(self, key: str) -> Optional[Document]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Unreadable record %s (%s); treating as absent", key, e)
            return None

    def write(self, key: str, document: Document) -> None:
        # Write next to the target and swap it in so readers never see half a document
        fd, tmp = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.root)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path(key))
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass
