"""
test_yaml_handler.py - Tests for YAML handling utilities
"""

import io

import pytest
import yaml

from qlinit.utils.yaml_handler import dump_yaml, load_yaml


def test_load_yaml():
    """Test loading a config file document."""
    yaml_content = """
name: my config
disable-default-queries: true
queries:
  - uses: ./foo
  - uses: security-extended
paths-ignore:
  - tests
"""

    result = load_yaml(yaml_content)

    assert result == {
        "name": "my config",
        "disable-default-queries": True,
        "queries": [{"uses": "./foo"}, {"uses": "security-extended"}],
        "paths-ignore": ["tests"],
    }


def test_load_empty_yaml():
    """Test that empty documents load as None."""
    assert load_yaml("") is None
    assert load_yaml("# only a comment\n") is None


def test_load_yaml_rejects_unsafe_tags():
    """Test that arbitrary Python objects cannot be constructed."""
    with pytest.raises(yaml.YAMLError):
        load_yaml("!!python/object/apply:os.system ['echo hi']")


def test_load_invalid_yaml():
    with pytest.raises(yaml.YAMLError):
        load_yaml("name: [unclosed")


def test_dump_yaml_keeps_key_order():
    """Test dumping keeps insertion order in block style."""
    data = {"languages": ["javascript"], "queries": {"javascript": ["a.ql"]}, "paths": []}

    result = dump_yaml(data)

    assert result == "languages:\n- javascript\nqueries:\n  javascript:\n  - a.ql\npaths: []\n"
    assert load_yaml(result) == data


def test_dump_yaml_to_stream():
    stream = io.StringIO()

    assert dump_yaml({"name": "test"}, stream) is None
    assert stream.getvalue() == "name: test\n"
