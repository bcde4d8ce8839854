"""
Portfolio demos backend: JSON route handlers for the e-commerce, task
manager, resume analyzer, admin dashboard and C++ tools demos.
"""
from .app import create_app

__version__ = "0.1.0"

__all__ = ["create_app"]
