from backend.app.credentials.store import (
    DEFAULT_CREDENTIAL_KEY,
    CredentialStore,
    JsonFileCredentialStore,
    MemoryCredentialStore,
    create_credential_store,
)

__all__ = [
    "CredentialStore",
    "MemoryCredentialStore",
    "JsonFileCredentialStore",
    "create_credential_store",
    "DEFAULT_CREDENTIAL_KEY",
]
