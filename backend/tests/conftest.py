import sys
from pathlib import Path

import pytest

# Ensure backend package is importable for tests
BACKEND_ROOT = Path(__file__).resolve().parents[1]
REPO_ROOT = BACKEND_ROOT.parent
for path in (BACKEND_ROOT, REPO_ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))


@pytest.fixture
def memory_store():
    from backend.app.credentials import MemoryCredentialStore

    return MemoryCredentialStore()
