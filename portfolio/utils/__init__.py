from .hf_client import HuggingFaceClient, InferenceError

__all__ = ["HuggingFaceClient", "InferenceError"]
