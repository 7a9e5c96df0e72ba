"""Shared fixtures: canonical intents, plans and an API client."""

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.version_store import reset_version_store
from uiplan.planner import plan_from_intent

COMPLEX_INTENT = (
    "Create a dashboard with a sidebar on the left, a navbar at the top, "
    "and two cards side by side: one with a chart and one with a table."
)
EDIT_INTENT = "Remove the sidebar and add a settings modal with two inputs."
MINIMAL_INTENT = 'Only one card titled "Profile". Nothing else.'


@pytest.fixture
def complex_plan():
    result = plan_from_intent(COMPLEX_INTENT)
    assert result.error is None
    return result.plan


@pytest.fixture
def edited_plan(complex_plan):
    result = plan_from_intent(EDIT_INTENT, complex_plan)
    assert result.error is None
    return result.plan


@pytest.fixture
def client() -> TestClient:
    reset_version_store()
    yield TestClient(app)
    reset_version_store()
