import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture(autouse=True)
def _fresh_config():
    """Drop any configuration a test (or a CLI --config run) installed."""
    from gedcom_relation.config import reset_config

    reset_config()
    yield
    reset_config()


# Sequence starts used by the schema owner's own example documents
@pytest.fixture
def reference_schema():
    return {
        "person_id_start": 1,
        "family_id_start": 10000001,
        "child_id_start": 20000001,
    }
