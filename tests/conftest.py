from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.api.deps import get_rules
from src.api.main import app
from src.rules.loader import load_rules
from src.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent
RULES_PATH = PROJECT_ROOT / "rules.yaml"


@pytest.fixture(scope="session")
def rules() -> Rules:
    """The real project rules, loaded independently of the working directory."""
    if not RULES_PATH.exists():
        raise FileNotFoundError(f"Rules not found at {RULES_PATH}")
    return load_rules(RULES_PATH)


@pytest.fixture
def client(rules: Rules) -> Iterator[TestClient]:
    """API client with rules injected from the project rules file."""
    app.dependency_overrides[get_rules] = lambda: rules
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
