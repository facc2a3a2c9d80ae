import pytest
from fastapi.testclient import TestClient

from scavenger.app import create_app
from scavenger.config import Settings
from scavenger.questions import Question

QUESTIONS = [
    Question(1, "Where is the Eiffel Tower?", "paris", "It's also called the city of lights."),
    Question(2, "What has keys but no locks?", "Piano", "Look under the lid."),
    Question(3, "Say anything to continue", "whatever", "Free pass", auto_accept=True),
]


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'hunt.db'}",
        questions_file=str(tmp_path / "missing.json"),
        db_connect_retries=1,
    )


@pytest.fixture
def app(settings):
    return create_app(settings, questions=QUESTIONS)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def store(app, client):
    return app.state.store


@pytest.fixture
def team(client):
    resp = client.post("/login", json={"teamName": "Alpha"})
    assert resp.status_code == 200
    return resp.json()
