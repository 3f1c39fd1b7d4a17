"""
Tests for configuration loading.

============================================================
PURPOSE
============================================================
- JSON and YAML files map onto the same structure
- Presence enables a collector, null disables it
- Invalid files and structures raise ConfigurationError

============================================================
"""

import json

import pytest

from core.exceptions import ConfigurationError
from core.models import MemberCountSpec, MetricKind, ProjectCountSpec
from orchestrator import load_config, parse_config, read_config_file


# ============================================================
# FIXTURES
# ============================================================

YAML_CONFIG = """
default_labels:
  team: platform
  tier: 1
groups:
  - id: "G1"
    project_count:
      include_subgroups: true
  - id: 42
    member_count: {}
  - id: "G3"
"""

JSON_CONFIG = {
    "default_labels": {"team": "platform", "tier": 1},
    "groups": [
        {"id": "G1", "project_count": {"include_subgroups": True}},
        {"id": 42, "member_count": {}},
        {"id": "G3"},
    ],
}


@pytest.fixture
def yaml_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(YAML_CONFIG)
    return path


@pytest.fixture
def json_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(JSON_CONFIG))
    return path


# ============================================================
# FILE FORMATS
# ============================================================

class TestFileFormats:
    """Tests for supported file formats."""
    
    def test_yaml(self, yaml_file):
        """Test YAML config loading."""
        config = load_config(yaml_file)
        
        assert config.default_labels == {"team": "platform", "tier": "1"}
        assert config.group_ids == ["G1", "42", "G3"]
    
    def test_json_matches_yaml(self, yaml_file, json_file):
        """Test JSON and YAML produce the same configuration."""
        assert load_config(json_file) == load_config(yaml_file)
    
    def test_yml_suffix(self, tmp_path):
        """Test .yml is accepted."""
        path = tmp_path / "config.yml"
        path.write_text("groups: []\n")
        
        assert load_config(path).groups == ()
    
    def test_unsupported_suffix(self, tmp_path):
        """Test unknown extensions are rejected."""
        path = tmp_path / "config.toml"
        path.write_text("groups = []\n")
        
        with pytest.raises(ConfigurationError) as exc_info:
            read_config_file(path)
        
        assert "Unsupported config file format" in exc_info.value.message
    
    def test_missing_file(self, tmp_path):
        """Test a missing file is a read failure."""
        with pytest.raises(ConfigurationError) as exc_info:
            read_config_file(tmp_path / "absent.yaml")
        
        assert exc_info.value.message.startswith("Failed to read config file")
    
    def test_malformed_json(self, tmp_path):
        """Test malformed JSON is a parse failure."""
        path = tmp_path / "config.json"
        path.write_text("{not json")
        
        with pytest.raises(ConfigurationError) as exc_info:
            read_config_file(path)
        
        assert exc_info.value.message.startswith("Failed to parse config file")
    
    def test_malformed_yaml(self, tmp_path):
        """Test malformed YAML is a parse failure."""
        path = tmp_path / "config.yaml"
        path.write_text("groups: [unclosed\n")
        
        with pytest.raises(ConfigurationError):
            read_config_file(path)
    
    def test_empty_file(self, tmp_path):
        """Test an empty YAML file is an empty configuration."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        
        config = load_config(path)
        
        assert config.groups == ()
        assert config.default_labels == {}
    
    def test_non_mapping_root(self, tmp_path):
        """Test a list root is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        
        with pytest.raises(ConfigurationError):
            read_config_file(path)


# ============================================================
# GROUP MAPPING
# ============================================================

class TestGroupMapping:
    """Tests for group entry mapping."""
    
    def test_enabled_kinds(self, yaml_file):
        """Test presence enables collectors."""
        g1, g2, g3 = load_config(yaml_file).groups
        
        assert g1.project_count == ProjectCountSpec(include_subgroups=True)
        assert g1.member_count is None
        assert g2.enabled_kinds() == [MetricKind.MEMBER_COUNT]
        assert g2.member_count == MemberCountSpec()
        assert g3.is_noop
    
    def test_null_spec_disables(self):
        """Test an explicit null is treated as absent."""
        config = parse_config({"groups": [{"id": "G1", "project_count": None, "member_count": None}]})
        
        assert config.groups[0].is_noop
    
    def test_include_subgroups_defaults_false(self):
        """Test an empty project_count mapping counts direct projects."""
        config = parse_config({"groups": [{"id": "G1", "project_count": {}}]})
        
        assert config.groups[0].project_count.include_subgroups is False
    
    def test_include_subgroups_must_be_bool(self):
        """Test include_subgroups type validation."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_config({"groups": [{"id": "G1", "project_count": {"include_subgroups": "yes"}}]})
        
        assert exc_info.value.context["config_key"] == "groups[0].project_count.include_subgroups"
    
    def test_spec_must_be_mapping(self):
        """Test scalar specs are rejected."""
        with pytest.raises(ConfigurationError):
            parse_config({"groups": [{"id": "G1", "member_count": True}]})
    
    @pytest.mark.parametrize("group_id", [None, "", "   ", True, 1.5, []])
    def test_invalid_group_id(self, group_id):
        """Test group ids must be non-empty strings or integers."""
        with pytest.raises(ConfigurationError):
            parse_config({"groups": [{"id": group_id}]})
    
    def test_groups_must_be_list(self):
        """Test a mapping under groups is rejected."""
        with pytest.raises(ConfigurationError):
            parse_config({"groups": {"id": "G1"}})
    
    def test_unknown_keys_ignored(self):
        """Test unknown group keys do not fail the load."""
        config = parse_config({"groups": [{"id": "G1", "pipeline_count": {}}]})
        
        assert config.groups[0].is_noop
    
    def test_order_preserved(self):
        """Test group order follows the file."""
        config = parse_config({"groups": [{"id": "b"}, {"id": "a"}, {"id": "c"}]})
        
        assert config.group_ids == ["b", "a", "c"]


# ============================================================
# LABELS
# ============================================================

class TestDefaultLabels:
    """Tests for default label validation."""
    
    def test_scalar_values_stringified(self):
        """Test label values become strings."""
        config = parse_config({"default_labels": {"a": 1, "b": True, "c": "x"}})
        
        assert config.default_labels == {"a": "1", "b": "true", "c": "x"}
    
    @pytest.mark.parametrize("name", ["1team", "team-name", "__reserved", ""])
    def test_invalid_label_name(self, name):
        """Test label names must be valid Prometheus names."""
        with pytest.raises(ConfigurationError):
            parse_config({"default_labels": {name: "x"}})
    
    def test_non_scalar_value(self):
        """Test nested label values are rejected."""
        with pytest.raises(ConfigurationError):
            parse_config({"default_labels": {"team": {"nested": "x"}}})
    
    def test_labels_must_be_mapping(self):
        """Test a list of labels is rejected."""
        with pytest.raises(ConfigurationError):
            parse_config({"default_labels": ["team"]})
