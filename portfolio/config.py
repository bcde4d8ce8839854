"""
Configuration for the portfolio demos backend
"""
import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv
from rich.console import Console

# Paths
PACKAGE_ROOT = Path(__file__).resolve().parent
PROJECT_ROOT = PACKAGE_ROOT.parent

DEMOS = [
    "ai-powered-ecommerce",
    "saas-task-manager",
    "ai-resume-analyzer",
    "admin-dashboard",
    "cpp-dev-tools",
]

# Default Configuration
DEFAULT_CONFIG = {
    "log_level": "INFO",
    "state_file": None,  # None keeps users and carts in memory only
    "cors_origins": "*",
    "auth": {
        "jwt_secret": "default-secret-change-in-production",
        "token_days": 7,
        "cookie_name": "auth-token",
        "secure_cookies": False,
    },
    "huggingface": {
        "api_key": "",
        "timeout": 30,
        "embedding_model": "sentence-transformers/all-MiniLM-L6-v2",
        "summary_model": "facebook/bart-large-cnn",
        "classifier_model": "facebook/bart-large-mnli",
        "sentiment_model": "distilbert-base-uncased-finetuned-sst-2-english",
    },
    "contact": {
        "webhook_url": "",
        "delay": 0.5,
        "timeout": 10,
    },
    "cpp_tools": {
        "compile_delay": 0.5,
    },
    "analytics": {
        "seed": None,
    },
}

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "HUGGINGFACE_API_KEY": ("huggingface", "api_key"),
    "JWT_SECRET": ("auth", "jwt_secret"),
    "CONTACT_WEBHOOK_URL": ("contact", "webhook_url"),
    "PORTFOLIO_STATE_FILE": (None, "state_file"),
    "PORTFOLIO_LOG_LEVEL": (None, "log_level"),
    "PORTFOLIO_CORS_ORIGINS": (None, "cors_origins"),
}

# Resume analyzer weights
RESUME_WEIGHTS = {
    "keyword_density": 0.25,
    "action_verbs": 0.20,
    "quantifiable_results": 0.25,
    "formatting": 0.15,
    "contact_summary": 0.15
}

# Industry keywords for resume scoring
TECH_KEYWORDS = [
    "python", "javascript", "react", "node", "sql", "aws", "docker", "kubernetes",
    "machine learning", "ai", "api", "rest", "graphql", "typescript", "git",
    "agile", "scrum", "ci/cd", "devops", "cloud", "microservices", "database",
    "testing", "security", "linux", "java", "c++", "golang", "rust", "scala"
]

# Action verbs for resume scoring
ACTION_VERBS = [
    "developed", "implemented", "designed", "built", "created", "led", "managed",
    "improved", "optimized", "reduced", "increased", "launched", "deployed",
    "architected", "engineered", "automated", "streamlined", "collaborated",
    "delivered", "achieved", "spearheaded", "mentored", "established", "resolved"
]

# Section headers an ATS is expected to recognize
RESUME_SECTIONS = [
    "experience",
    "education",
    "skills",
    "projects",
    "summary",
    "objective",
    "work history",
    "employment",
    "qualifications",
]

# Global Objects
console = Console()


class ConfigError(Exception):
    """Raised when a config file cannot be loaded."""


def setup_logging(level: str = "INFO"):
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    )
    return logging.getLogger("portfolio")


logger = logging.getLogger("portfolio")


def ensure_dir(path: Union[str, Path]):
    """Ensure a directory exists."""
    Path(path).mkdir(parents=True, exist_ok=True)


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]):
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Build the runtime configuration.

    Defaults are overlaid with an optional JSON file, then with environment
    variables (a local .env file is honored).

    Args:
        config_path: Optional path to a JSON config file

    Returns:
        Nested config dict
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        path = Path(config_path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                _merge(config, json.load(f))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Failed to load config {path}: {e}") from e

    load_dotenv()
    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if not value:
            continue
        if section is None:
            config[key] = value
        else:
            config[section][key] = value

    return config
