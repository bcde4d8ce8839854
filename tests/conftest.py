import copy

import pytest

from portfolio import create_app
from portfolio.config import DEFAULT_CONFIG

VOCAB = ["headphones", "music", "wireless", "keyboard", "chair", "lamp"]


class FakeInference:
    """Stands in for the Hugging Face gateway; no network."""

    def __init__(self, configured=True, fail=False):
        self.configured = configured
        self.fail = fail
        self.calls = []

    def _check(self, name):
        self.calls.append(name)
        if self.fail:
            from portfolio.utils import InferenceError
            raise InferenceError(f"{name} unavailable")

    def get_embeddings(self, text):
        self._check("get_embeddings")
        lowered = text.lower()
        return [float(lowered.count(word)) for word in VOCAB]

    def summarize_text(self, text):
        self._check("summarize_text")
        return "Seasoned engineer with backend experience."

    def classify_text(self, text, labels):
        self._check("classify_text")
        scores = {
            "work experience": 0.8,
            "education": 0.2,
            "technical skills": 0.7,
            "programming": 0.9,
            "leadership": 0.1,
            "teamwork": 0.5,
        }
        return {label: scores.get(label, 0.0) for label in labels}

    def analyze_sentiment(self, text):
        self._check("analyze_sentiment")
        return [{"label": "POSITIVE", "score": 0.98}]


@pytest.fixture
def config():
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    cfg["log_level"] = "WARNING"
    cfg["auth"]["jwt_secret"] = "test-secret"
    cfg["contact"]["delay"] = 0
    cfg["cpp_tools"]["compile_delay"] = 0
    cfg["analytics"]["seed"] = 42
    return cfg


@pytest.fixture
def inference():
    return FakeInference()


@pytest.fixture
def make_app(config):
    def _make(inference=None, **overrides):
        cfg = copy.deepcopy(config)
        for section, values in overrides.items():
            cfg[section].update(values)
        app = create_app(cfg, inference=inference if inference is not None else FakeInference())
        app.config["TESTING"] = True
        return app
    return _make


@pytest.fixture
def app(make_app, inference):
    return make_app(inference=inference)


@pytest.fixture
def client(app):
    return app.test_client()


def sign_up(client, email="ada@example.com", password="s3cret-pass", name="Ada"):
    resp = client.post("/api/auth", json={
        "action": "signup", "name": name, "email": email, "password": password,
    })
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()["token"]


@pytest.fixture
def auth_headers(client):
    token = sign_up(client)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register():
    return sign_up


@pytest.fixture
def failing_inference():
    return FakeInference(fail=True)
