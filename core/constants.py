"""
Core Module - Constants.

============================================================
RESPONSIBILITY
============================================================
Defines all system-wide constants.

- Metric names and help texts
- Pushgateway job identifier
- Environment variable and config key names
- GitLab API defaults

============================================================
"""

# ============================================================
# SYSTEM CONSTANTS
# ============================================================

SYSTEM_NAME = "gitlab-stats"
SYSTEM_VERSION = "1.0.0"

# ============================================================
# METRICS
# ============================================================

PROJECT_COUNT_METRIC = "gitlab_group_project_count"
MEMBER_COUNT_METRIC = "gitlab_group_members_count"

METRIC_HELP = {
    PROJECT_COUNT_METRIC: "Number of projects in the GitLab group",
    MEMBER_COUNT_METRIC: "Number of members in the GitLab group",
}

GROUP_ID_LABEL = "group_id"

# Job name all samples of a run are pushed under
PUSHGATEWAY_JOB = "gitlab_scrape"

# ============================================================
# ENVIRONMENT VARIABLES
# ============================================================

ENV_ACCESS_TOKEN = "GITLAB_ACCESS_TOKEN"
ENV_PUSHGATEWAY_URL = "PUSHGATEWAY_URL"
ENV_GITLAB_URL = "GITLAB_URL"

# ============================================================
# CONFIG FILE KEYS
# ============================================================

CONFIG_KEY_ACCESS_TOKEN = "access_token"
CONFIG_KEY_PUSHGATEWAY_URL = "push_gateway_url"
CONFIG_KEY_GITLAB_URL = "gitlab_url"

# ============================================================
# GITLAB API
# ============================================================

DEFAULT_GITLAB_URL = "https://gitlab.com"
GITLAB_API_PREFIX = "/api/v4"
DEFAULT_TIMEOUT_SECONDS = 30.0

# Count queries only need the pagination headers, not the records
COUNT_QUERY_PER_PAGE = 1
