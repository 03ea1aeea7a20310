"""Tests for settings models and environment loading."""

import pytest
from pydantic import ValidationError

from recall.config import load_parameter_set, load_session_config
from recall.fsrs import DEFAULT_WEIGHTS, ParameterSet, SessionConfig


def test_parameter_defaults():
    parameters = ParameterSet()
    assert parameters.target_retention == 0.9
    assert parameters.maximum_interval == 36500
    assert parameters.enable_fuzz is True
    assert parameters.w == DEFAULT_WEIGHTS
    assert len(parameters.weights) == 19


def test_session_defaults():
    config = SessionConfig()
    assert config.new_cards_per_day == 20
    assert config.max_reviews_per_day == 200
    assert config.learning_steps == (1.0, 10.0)
    assert config.relearning_steps == (10.0,)
    assert config.graduating_interval == 1.0
    assert config.easy_interval == 4.0


@pytest.mark.parametrize("retention", [0.0, 1.0, 1.5, -0.1])
def test_target_retention_bounds(retention):
    with pytest.raises(ValidationError):
        ParameterSet(target_retention=retention)


def test_weight_count_enforced():
    with pytest.raises(ValidationError):
        ParameterSet(weights=DEFAULT_WEIGHTS[:17])


def test_weights_must_be_finite():
    with pytest.raises(ValidationError):
        ParameterSet(weights=DEFAULT_WEIGHTS[:18] + (float("nan"),))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"learning_steps": ()},
        {"relearning_steps": (0.0,)},
        {"learning_steps": (1.0, -5.0)},
        {"new_cards_per_day": -1},
        {"graduating_interval": 0.0},
    ],
)
def test_session_config_validation(kwargs):
    with pytest.raises(ValidationError):
        SessionConfig(**kwargs)


def test_settings_are_frozen():
    parameters = ParameterSet()
    with pytest.raises(ValidationError):
        parameters.target_retention = 0.8


def test_load_from_environment():
    environ = {
        "RECALL_TARGET_RETENTION": "0.85",
        "RECALL_MAXIMUM_INTERVAL": "365",
        "RECALL_ENABLE_FUZZ": "false",
        "RECALL_NEW_CARDS_PER_DAY": "5",
        "RECALL_LEARNING_STEPS": "1, 5, 15",
        "RECALL_RELEARNING_STEPS": "",
    }
    parameters = load_parameter_set(environ)
    config = load_session_config(environ)

    assert parameters.target_retention == 0.85
    assert parameters.maximum_interval == 365
    assert parameters.enable_fuzz is False
    assert parameters.weights == DEFAULT_WEIGHTS
    assert config.new_cards_per_day == 5
    assert config.learning_steps == (1.0, 5.0, 15.0)
    assert config.relearning_steps == (10.0,)


def test_load_weights_from_environment():
    weights = ",".join(str(w * 2) for w in DEFAULT_WEIGHTS)
    parameters = load_parameter_set({"RECALL_WEIGHTS": weights})
    assert parameters.weights == pytest.approx(tuple(w * 2 for w in DEFAULT_WEIGHTS))


def test_load_rejects_bad_environment():
    with pytest.raises(ValidationError):
        load_parameter_set({"RECALL_WEIGHTS": "1,2,3"})
    with pytest.raises(ValidationError):
        load_session_config({"RECALL_MAX_REVIEWS_PER_DAY": "lots"})


def test_empty_environment_uses_defaults():
    assert load_parameter_set({}) == ParameterSet()
    assert load_session_config({}) == SessionConfig()
