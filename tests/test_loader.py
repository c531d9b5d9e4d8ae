"""
Tests for the config loader.

Loading is the one place where bad input raises: malformed documents
and structural errors become ConfigurationError; analyzer warnings
become UserWarning.
"""

import json
import textwrap

import pytest

from aqe.examples import build_discovery_questionnaire
from aqe.loader import ConfigurationError, check_config, load_config, parse_config
from aqe.serialization import config_to_dict, config_to_json, config_to_yaml

VALID_YAML = textwrap.dedent("""
    id: mini
    title: Mini
    sections:
      - id: s1
        title: Only
        questions:
          - id: Q1
            type: boolean
            required: true
          - id: Q2
            type: text
            conditional_logic:
              - depends_on: Q1
                condition: equals
                value: true
""")

CYCLIC_YAML = textwrap.dedent("""
    id: cyclic
    title: Cyclic
    sections:
      - id: s1
        title: Only
        questions:
          - id: Q1
            type: text
            conditional_logic:
              - {depends_on: Q2, condition: equals, value: x}
          - id: Q2
            type: text
            conditional_logic:
              - {depends_on: Q1, condition: equals, value: y}
""")


class TestParseConfig:

    def test_valid_yaml(self):
        config = parse_config(VALID_YAML)
        assert config.id == "mini"
        assert [q.id for q in config.all_questions()] == ["Q1", "Q2"]

    def test_valid_json(self):
        text = config_to_json(build_discovery_questionnaire())
        config = parse_config(text, fmt="json")
        assert config_to_dict(config) == config_to_dict(build_discovery_questionnaire())

    def test_cycle_rejected(self):
        with pytest.warns(UserWarning):
            with pytest.raises(ConfigurationError) as excinfo:
                parse_config(CYCLIC_YAML)
        assert excinfo.value.report is not None
        assert excinfo.value.report.has_cycles

    def test_cycle_tolerated_when_not_strict(self):
        with pytest.warns(UserWarning):
            config = parse_config(CYCLIC_YAML, strict=False)
        assert config.id == "cyclic"

    def test_malformed_yaml(self):
        with pytest.raises(ConfigurationError, match="Failed to parse yaml"):
            parse_config("id: [unclosed")

    def test_top_level_must_be_mapping(self):
        with pytest.raises(ConfigurationError, match="mapping"):
            parse_config("- just\n- a list\n")

    def test_missing_id(self):
        with pytest.raises(ConfigurationError, match="Invalid questionnaire config"):
            parse_config(json.dumps({"title": "no id"}), fmt="json")

    def test_unknown_question_type(self):
        bad = {"id": "x", "sections": [{"id": "s", "questions": [{"id": "Q", "type": "slider"}]}]}
        with pytest.raises(ConfigurationError):
            parse_config(json.dumps(bad), fmt="json")

    def test_unsupported_format(self):
        with pytest.raises(ConfigurationError, match="Unsupported config format"):
            parse_config("{}", fmt="toml")


class TestLoadConfig:

    def test_load_yaml_file(self, tmp_path):
        path = tmp_path / "discovery.yaml"
        path.write_text(config_to_yaml(build_discovery_questionnaire()), encoding="utf-8")
        config = load_config(path)
        assert config.id == "discovery_v1"

    def test_load_json_file(self, tmp_path):
        path = tmp_path / "discovery.json"
        path.write_text(config_to_json(build_discovery_questionnaire()), encoding="utf-8")
        assert load_config(str(path)).title == "Recovery Assessment"

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "discovery.txt"
        path.write_text("id: x", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Unsupported config file type"):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Cannot read"):
            load_config(tmp_path / "absent.yaml")


def test_check_config_warns_on_forward_reference():
    config = parse_config(VALID_YAML)
    config.sections[0].questions.reverse()
    with pytest.warns(UserWarning, match="later question"):
        report = check_config(config)
    assert report.is_valid
