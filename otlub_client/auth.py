from __future__ import annotations

import logging
import os
import sys
import threading
from typing import Protocol

from msal_extensions import CrossPlatLock, FilePersistence
from msal_extensions.persistence import PersistenceNotFound

logger = logging.getLogger(__name__)


class KeyValuePersistence(Protocol):
    def save(self, content: str) -> None: ...

    def load(self) -> str: ...

    def get_location(self) -> str: ...


def build_persistence(path: str) -> KeyValuePersistence:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    if sys.platform.startswith("win"):
        from msal_extensions import FilePersistenceWithDataProtection

        return FilePersistenceWithDataProtection(path)
    return FilePersistence(path)


class TokenStore:
    def __init__(self, persistence: KeyValuePersistence):
        self._persistence = persistence
        self._lock = threading.Lock()
        self._lock_path = persistence.get_location() + ".lockfile"

    @classmethod
    def at_path(cls, path: str) -> "TokenStore":
        return cls(build_persistence(path))

    @property
    def location(self) -> str:
        return self._persistence.get_location()

    def save(self, token: str) -> None:
        token = token.strip()
        if not token:
            raise ValueError("Refusing to store an empty token")
        with self._lock, CrossPlatLock(self._lock_path):
            self._persistence.save(token)
        logger.debug("Stored auth token at %s", self.location)

    def get(self) -> str | None:
        with self._lock, CrossPlatLock(self._lock_path):
            try:
                content = self._persistence.load()
            except PersistenceNotFound:
                return None
        return content.strip() or None

    def clear(self) -> None:
        with self._lock, CrossPlatLock(self._lock_path):
            self._persistence.save("")
        logger.debug("Cleared auth token at %s", self.location)

    def is_authenticated(self) -> bool:
        return self.get() is not None
