"""Tests for configuration loading."""

from pathlib import Path

import pytest

from shape_to_query.config import CompilerConfig


def test_from_env_reads_prefixed_variables():
    config = CompilerConfig.from_env(
        {
            "SHAPE_TO_QUERY_SHAPES": "shapes/person.ttl",
            "SHAPE_TO_QUERY_FORM": "CONSTRUCT",
            "SHAPE_TO_QUERY_FOCUS_NODE": "http://example.org/John",
            "SHAPE_TO_QUERY_CHECK_SHAPES": "true",
            "SHAPE_TO_QUERY_LOG_LEVEL": "debug",
        }
    )

    assert config.shapes_path == Path("shapes/person.ttl")
    assert config.query_form == "construct"
    assert config.focus_node == "http://example.org/John"
    assert config.check_shapes is True
    assert config.log_level == "DEBUG"
    assert config.subject_variable == "node"


def test_defaults_when_environment_is_empty():
    config = CompilerConfig.from_env({})

    assert config.shapes_path is None
    assert config.query_form == "select"
    assert config.object_variable_prefix == ""
    assert config.check_shapes is False


def test_unknown_query_form_is_rejected():
    with pytest.raises(ValueError):
        CompilerConfig(query_form="ask")


def test_ensure_output_dirs_creates_parent(tmp_path):
    config = CompilerConfig(output_path=tmp_path / "nested" / "query.rq")

    config.ensure_output_dirs()

    assert (tmp_path / "nested").is_dir()
