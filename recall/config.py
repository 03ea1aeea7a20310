"""
Environment-driven settings.

Reads RECALL_* variables (optionally from a .env file) and builds the
validated ParameterSet / SessionConfig. Unset variables fall back to the
model defaults; malformed values fail validation exactly as direct
construction would.
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

from recall.fsrs.schemas import ParameterSet, SessionConfig

load_dotenv()


PARAMETER_ENV_VARS = {
    "target_retention": "RECALL_TARGET_RETENTION",
    "maximum_interval": "RECALL_MAXIMUM_INTERVAL",
    "enable_fuzz": "RECALL_ENABLE_FUZZ",
    "weights": "RECALL_WEIGHTS",
}

SESSION_ENV_VARS = {
    "new_cards_per_day": "RECALL_NEW_CARDS_PER_DAY",
    "max_reviews_per_day": "RECALL_MAX_REVIEWS_PER_DAY",
    "learning_steps": "RECALL_LEARNING_STEPS",
    "relearning_steps": "RECALL_RELEARNING_STEPS",
    "graduating_interval": "RECALL_GRADUATING_INTERVAL",
    "easy_interval": "RECALL_EASY_INTERVAL",
}

LIST_FIELDS = {"weights", "learning_steps", "relearning_steps"}


def _split_list(raw: str) -> list[str]:
    """'1, 10' -> ['1', '10']; pydantic coerces the items."""
    return [item.strip() for item in raw.split(",") if item.strip()]


def _read_env(env_vars: dict[str, str], environ: Optional[dict[str, str]] = None) -> dict:
    environ = os.environ if environ is None else environ
    values = {}
    for field_name, env_name in env_vars.items():
        raw = environ.get(env_name)
        if raw is None or raw.strip() == "":
            continue
        values[field_name] = _split_list(raw) if field_name in LIST_FIELDS else raw.strip()
    return values


def load_parameter_set(environ: Optional[dict[str, str]] = None) -> ParameterSet:
    """
    Build the ParameterSet from RECALL_* environment variables.

    Args:
        environ: Mapping to read instead of os.environ (for testing)

    Raises:
        pydantic.ValidationError: on malformed values (e.g. wrong weight count)
    """
    return ParameterSet(**_read_env(PARAMETER_ENV_VARS, environ))


def load_session_config(environ: Optional[dict[str, str]] = None) -> SessionConfig:
    """
    Build the SessionConfig from RECALL_* environment variables.

    Args:
        environ: Mapping to read instead of os.environ (for testing)

    Raises:
        pydantic.ValidationError: on malformed values
    """
    return SessionConfig(**_read_env(SESSION_ENV_VARS, environ))
