"""
Hugging Face inference client for the portfolio demos
Wraps huggingface_hub.InferenceClient for embeddings, summarization,
zero-shot classification and sentiment analysis.
"""
from typing import Any, Dict, List, Optional

import numpy as np

from ..config import logger

# Hosted models only accept so much input text
MAX_INPUT_CHARS = 3000


class InferenceError(Exception):
    """Raised when a hosted inference call fails."""


class HuggingFaceClient:
    """Thin gateway over the hosted inference API."""

    def __init__(self, api_key: str = "", timeout: float = 30, models: Optional[Dict[str, str]] = None):
        self.api_key = (api_key or "").strip()
        self.timeout = timeout
        self.models = models or {}
        self._client = None

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "HuggingFaceClient":
        hf = config.get("huggingface", {})
        models = {key: value for key, value in hf.items() if key.endswith("_model")}
        return cls(api_key=hf.get("api_key", ""), timeout=hf.get("timeout", 30), models=models)

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _get_client(self):
        """Create the InferenceClient on first use."""
        if not self.configured:
            raise InferenceError("Hugging Face API key is not configured")
        if self._client is None:
            from huggingface_hub import InferenceClient
            self._client = InferenceClient(api_key=self.api_key, timeout=self.timeout)
        return self._client

    def get_embeddings(self, text: str) -> List[float]:
        """
        Get a sentence embedding for text.

        Token-level outputs are mean-pooled into a single vector.

        Returns:
            1-D list of floats
        """
        try:
            response = self._get_client().feature_extraction(
                text[:MAX_INPUT_CHARS], model=self.models.get("embedding_model")
            )
            vector = np.asarray(response, dtype=float)
            while vector.ndim > 2:
                vector = vector[0]
            if vector.ndim == 2:
                vector = vector.mean(axis=0)
            return vector.tolist()
        except InferenceError:
            raise
        except Exception as e:
            logger.error(f"Feature extraction error: {e}")
            raise InferenceError("Failed to extract features") from e

    def summarize_text(self, text: str) -> str:
        try:
            response = self._get_client().summarization(
                text[:MAX_INPUT_CHARS], model=self.models.get("summary_model")
            )
            return response.summary_text
        except InferenceError:
            raise
        except Exception as e:
            logger.error(f"Summarization error: {e}")
            raise InferenceError("Failed to summarize text") from e

    def classify_text(self, text: str, labels: List[str]) -> Dict[str, float]:
        """
        Zero-shot classify text against candidate labels.

        Each label is scored independently.

        Returns:
            dict mapping label -> score (0-1)
        """
        try:
            response = self._get_client().zero_shot_classification(
                text[:MAX_INPUT_CHARS],
                labels,
                multi_label=True,
                model=self.models.get("classifier_model"),
            )
            scores = {item.label: float(item.score) for item in response}
            return {label: scores.get(label, 0.0) for label in labels}
        except InferenceError:
            raise
        except Exception as e:
            logger.error(f"Classification error: {e}")
            raise InferenceError("Failed to classify text") from e

    def analyze_sentiment(self, text: str) -> List[Dict[str, Any]]:
        try:
            response = self._get_client().text_classification(
                text[:MAX_INPUT_CHARS], model=self.models.get("sentiment_model")
            )
            return [{"label": item.label, "score": float(item.score)} for item in response]
        except InferenceError:
            raise
        except Exception as e:
            logger.error(f"Sentiment analysis error: {e}")
            raise InferenceError("Failed to analyze sentiment") from e
