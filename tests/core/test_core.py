"""
Tests for Core Module.

============================================================
PURPOSE
============================================================
- Label merging precedence
- Metric sample validation
- Group config spec lookup
- Exception context

============================================================
"""

import pytest

from core.constants import MEMBER_COUNT_METRIC, PROJECT_COUNT_METRIC
from core.exceptions import (
    ConfigurationError,
    MissingCredentialError,
    RetrievalError,
)
from core.labels import merge_labels
from core.models import (
    GroupConfig,
    MemberCountSpec,
    MetricKind,
    MetricSample,
    ProjectCountSpec,
)


# ============================================================
# LABEL MERGER TESTS
# ============================================================

class TestMergeLabels:
    """Tests for merge_labels."""
    
    def test_later_set_wins(self):
        """Test later input wins on key collision."""
        merged = merge_labels({"env": "prod"}, {"group_id": "42", "env": "staging"})
        
        assert merged == {"env": "staging", "group_id": "42"}
    
    def test_group_id_overrides_default(self):
        """Test a group_id default is overridden by the group label."""
        merged = merge_labels({"group_id": "default", "team": "x"}, {"group_id": "7"})
        
        assert merged == {"group_id": "7", "team": "x"}
    
    def test_empty_inputs(self):
        """Test empty and None inputs contribute nothing."""
        assert merge_labels() == {}
        assert merge_labels({}, None, {"a": "1"}) == {"a": "1"}
    
    def test_inputs_not_mutated(self):
        """Test merging never modifies its inputs."""
        defaults = {"env": "prod"}
        group = {"env": "dev"}
        
        merge_labels(defaults, group)
        
        assert defaults == {"env": "prod"}
        assert group == {"env": "dev"}


# ============================================================
# MODEL TESTS
# ============================================================

class TestMetricKind:
    """Tests for MetricKind."""
    
    def test_metric_names(self):
        """Test fixed metric names per kind."""
        assert MetricKind.PROJECT_COUNT.metric_name == PROJECT_COUNT_METRIC
        assert MetricKind.MEMBER_COUNT.metric_name == MEMBER_COUNT_METRIC
        assert PROJECT_COUNT_METRIC == "gitlab_group_project_count"
        assert MEMBER_COUNT_METRIC == "gitlab_group_members_count"
    
    def test_declaration_order(self):
        """Test project count is declared before member count."""
        assert list(MetricKind) == [MetricKind.PROJECT_COUNT, MetricKind.MEMBER_COUNT]


class TestGroupConfig:
    """Tests for GroupConfig."""
    
    def test_empty_id_rejected(self):
        """Test group id must be non-empty."""
        with pytest.raises(ValueError):
            GroupConfig(id="")
    
    def test_spec_for(self):
        """Test spec lookup by kind."""
        spec = ProjectCountSpec(include_subgroups=True)
        group = GroupConfig(id="1", project_count=spec)
        
        assert group.spec_for(MetricKind.PROJECT_COUNT) is spec
        assert group.spec_for(MetricKind.MEMBER_COUNT) is None
        assert group.enabled_kinds() == [MetricKind.PROJECT_COUNT]
    
    def test_noop_group(self):
        """Test group without specs is a no-op."""
        assert GroupConfig(id="1").is_noop
        assert not GroupConfig(id="1", member_count=MemberCountSpec()).is_noop
    
    def test_include_subgroups_defaults_false(self):
        """Test include_subgroups default."""
        assert ProjectCountSpec().include_subgroups is False


class TestMetricSample:
    """Tests for MetricSample."""
    
    def test_valid_sample(self):
        """Test sample construction and help text."""
        sample = MetricSample(PROJECT_COUNT_METRIC, 3, {"group_id": "1"})
        
        assert sample.value == 3
        assert sample.help_text == "Number of projects in the GitLab group"
        assert sample.to_dict() == {
            "name": PROJECT_COUNT_METRIC,
            "value": 3,
            "labels": {"group_id": "1"},
        }
    
    def test_zero_allowed(self):
        """Test zero is a valid count."""
        assert MetricSample(MEMBER_COUNT_METRIC, 0).value == 0
    
    @pytest.mark.parametrize("value", [-1, 1.5, "3", True])
    def test_invalid_values_rejected(self, value):
        """Test negative and non-integer values are rejected."""
        with pytest.raises(ValueError):
            MetricSample(PROJECT_COUNT_METRIC, value)


# ============================================================
# EXCEPTION TESTS
# ============================================================

class TestExceptions:
    """Tests for the exception hierarchy."""
    
    def test_missing_credential_is_configuration_error(self):
        """Test MissingCredentialError hierarchy and message."""
        error = MissingCredentialError(
            "access_token",
            flag="--token",
            env_var="GITLAB_ACCESS_TOKEN",
        )
        
        assert isinstance(error, ConfigurationError)
        assert "--token" in error.message
        assert "GITLAB_ACCESS_TOKEN" in error.message
        assert error.context["config_key"] == "access_token"
    
    def test_retrieval_error_context(self):
        """Test RetrievalError carries group and kind."""
        cause = RuntimeError("boom")
        error = RetrievalError(
            "failed",
            group_id="42",
            metric_kind="member_count",
            status_code=404,
            cause=cause,
        )
        
        assert error.context["group_id"] == "42"
        assert error.context["metric_kind"] == "member_count"
        assert error.context["status_code"] == 404
        assert error.context["cause_type"] == "RuntimeError"
        assert "group_id=42" in error.to_log_format()
        assert error.to_dict()["type"] == "RetrievalError"
