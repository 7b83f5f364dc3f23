"""Default paths, environment variable names, and constants."""

from __future__ import annotations

import platformdirs

APP_NAME = "wazuh-console"
APP_AUTHOR = "wazuh-console"

CONFIG_DIR = platformdirs.user_config_path(APP_NAME, APP_AUTHOR)
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Environment variable names
ENV_PROFILE = "WAZUH_PROFILE"
ENV_URL = "WAZUH_URL"
ENV_USERNAME = "WAZUH_USERNAME"
ENV_PASSWORD = "WAZUH_PASSWORD"
ENV_SEARCH_URL = "WAZUH_SEARCH_URL"
ENV_SEARCH_USERNAME = "WAZUH_SEARCH_USERNAME"
ENV_SEARCH_PASSWORD = "WAZUH_SEARCH_PASSWORD"

# API defaults
AUTH_PATH = "/security/user/authenticate"
DEFAULT_TIMEOUT = 10.0
ALERTS_INDEX = "wazuh-alerts-*"
VULNERABILITIES_INDEX = "wazuh-states-vulnerabilities*"

# Page sizes
AGENT_PAGE_LIMIT = 500
VULNERABILITY_PAGE_LIMIT = 500

# Console defaults
DEFAULT_LOG_INTERVAL_MINUTES = 15
DEFAULT_LOG_LIMIT = 50
DASHBOARD_LOG_LIMIT = 100
TICK_SECONDS = 0.25
NOTIFICATION_TTL_SECONDS = 5.0
DEFAULT_CONFIG_COMPONENT = "syscheck"
CONFIG_COMPONENTS = ("syscheck", "logcollector", "wmodules", "agent", "auth")
