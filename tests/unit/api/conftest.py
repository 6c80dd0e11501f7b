"""API test fixtures: an app whose workspace wraps the shared test inventory."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from api.dependencies import Workspace, get_workspace, reset_workspace
from api.main import create_app
from lodging.inventory import Inventory


@pytest.fixture
def workspace(inventory: Inventory) -> Workspace:
    return Workspace(inventory=inventory)


@pytest.fixture
def client(workspace: Workspace) -> Iterator[TestClient]:
    """Test client with the workspace dependency overridden."""
    app = create_app()
    app.dependency_overrides[get_workspace] = lambda: workspace
    yield TestClient(app)
    app.dependency_overrides.clear()
    reset_workspace()
