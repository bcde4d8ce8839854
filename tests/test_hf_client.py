from types import SimpleNamespace

import numpy as np
import pytest

from portfolio.config import DEFAULT_CONFIG
from portfolio.utils import HuggingFaceClient, InferenceError


class FakeHub:
    def __init__(self, features=None, fail=False):
        self.features = features
        self.fail = fail
        self.kwargs = {}

    def feature_extraction(self, text, model=None):
        if self.fail:
            raise RuntimeError("503 Service Unavailable")
        self.kwargs["feature_extraction"] = {"model": model}
        return self.features

    def summarization(self, text, model=None):
        return SimpleNamespace(summary_text="A short summary.")

    def zero_shot_classification(self, text, labels, multi_label=False, model=None):
        self.kwargs["zero_shot_classification"] = {"multi_label": multi_label, "model": model}
        return [SimpleNamespace(label="education", score=0.9), SimpleNamespace(label="projects", score=0.2)]

    def text_classification(self, text, model=None):
        return [SimpleNamespace(label="POSITIVE", score=0.75)]


def _client(hub):
    client = HuggingFaceClient.from_config({"huggingface": {**DEFAULT_CONFIG["huggingface"], "api_key": "hf_test"}})
    client._client = hub
    return client


def test_from_config_picks_models():
    client = HuggingFaceClient.from_config(DEFAULT_CONFIG)
    assert not client.configured
    assert client.models["embedding_model"] == "sentence-transformers/all-MiniLM-L6-v2"
    assert "api_key" not in client.models


def test_unconfigured_client_raises():
    with pytest.raises(InferenceError):
        HuggingFaceClient().get_embeddings("hello")


def test_embeddings_one_dimensional():
    hub = FakeHub(np.array([0.1, 0.2, 0.3], dtype=np.float32))
    vector = _client(hub).get_embeddings("hello")
    assert vector == pytest.approx([0.1, 0.2, 0.3])
    assert hub.kwargs["feature_extraction"]["model"] == "sentence-transformers/all-MiniLM-L6-v2"


def test_token_embeddings_are_mean_pooled():
    assert _client(FakeHub([[1.0, 2.0], [3.0, 4.0]])).get_embeddings("hi") == [2.0, 3.0]
    assert _client(FakeHub([[[1.0, 2.0], [3.0, 4.0]]])).get_embeddings("hi") == [2.0, 3.0]


def test_hub_errors_become_inference_errors():
    with pytest.raises(InferenceError, match="Failed to extract features"):
        _client(FakeHub(fail=True)).get_embeddings("hello")


def test_classify_text_scores_every_label():
    hub = FakeHub()
    scores = _client(hub).classify_text("resume", ["education", "projects", "certifications"])
    assert scores == {"education": 0.9, "projects": 0.2, "certifications": 0.0}
    assert hub.kwargs["zero_shot_classification"]["multi_label"] is True


def test_summary_and_sentiment():
    client = _client(FakeHub())
    assert client.summarize_text("long text") == "A short summary."
    assert client.analyze_sentiment("great") == [{"label": "POSITIVE", "score": 0.75}]
