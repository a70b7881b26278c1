"""Credential store: one opaque API credential under a fixed key.

The store is a capability passed into the orchestrator and session. Nothing
else reads or writes the credential.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Protocol, runtime_checkable

from backend.app.config.settings import get_settings

logger = logging.getLogger(__name__)

DEFAULT_CREDENTIAL_KEY = "gemini_api_key"


@runtime_checkable
class CredentialStore(Protocol):
    def get(self) -> str: ...

    def set(self, value: str) -> None: ...

    def remove(self) -> None: ...


class MemoryCredentialStore:
    def __init__(self, value: str = "") -> None:
        self._value = value or ""

    def get(self) -> str:
        return self._value

    def set(self, value: str) -> None:
        self._value = value or ""

    def remove(self) -> None:
        self._value = ""


class JsonFileCredentialStore:
    """Durable key-value file; other keys in the file are preserved."""

    def __init__(self, path: str | Path, key: str = DEFAULT_CREDENTIAL_KEY) -> None:
        self.path = Path(path).expanduser()
        self.key = key

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except ValueError:
            logger.warning("[CRED] store unreadable; treating as empty", extra={"path": str(self.path)})
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        os.chmod(tmp, 0o600)
        os.replace(tmp, self.path)

    def get(self) -> str:
        return self._load().get(self.key, "")

    def set(self, value: str) -> None:
        if not value:
            self.remove()
            return
        data = self._load()
        data[self.key] = value
        self._write(data)

    def remove(self) -> None:
        data = self._load()
        if self.key not in data:
            return
        del data[self.key]
        self._write(data)


def create_credential_store(path: Optional[str] = None, key: Optional[str] = None) -> CredentialStore:
    s = get_settings()
    return JsonFileCredentialStore(path or s.credential_store_path, key or s.credential_key)


__all__ = [
    "CredentialStore",
    "MemoryCredentialStore",
    "JsonFileCredentialStore",
    "create_credential_store",
    "DEFAULT_CREDENTIAL_KEY",
]
