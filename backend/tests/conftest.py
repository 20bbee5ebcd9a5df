"""Root conftest — shared test configuration and sample documents."""

import os

import pytest

# Ensure tests never touch a real database or the working-directory data.json
os.environ.setdefault("STORAGE_BACKEND", "json_file")
os.environ.setdefault("DATA_FILE_PATH", "test-data.json")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)


@pytest.fixture
def sample_document() -> dict:
    """Persisted document in the data.json wire format."""
    return {
        "departments": [
            {
                "id": 1,
                "name": "HR",
                "sections": [
                    {
                        "id": 1,
                        "name": "Payroll",
                        "banner": [
                            {"bannerid": 1, "type": "hero", "name": "Hero", "content": "<img src=a>"},
                            {"bannerid": 2, "type": "side", "content": "<img src=b>"},
                        ],
                    },
                    {"id": 2, "name": "Benefits", "banner": []},
                ],
            },
            {"id": 2, "name": "IT", "sections": []},
        ],
    }
