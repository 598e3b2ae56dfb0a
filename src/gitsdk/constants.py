"""
Constants and configuration values for git-sdk-fetch.

This module contains the hardcoded repository names, URLs, process settings
and logging defaults used throughout the application.
"""

# GitHub locations
GITHUB_API_BASE = "https://api.github.com/repos"
GITHUB_BASE_URL = "https://github.com"
DEFAULT_OWNER = "git-for-windows"
DEFAULT_BRANCH = "main"
BUILD_EXTRA_REPO = "build-extra"

# Architecture -> SDK repository
ARCHITECTURE_REPOS = {
    "i686": "git-sdk-32",
    "x86_64": "git-sdk-64",
    "aarch64": "git-sdk-arm64",
}

# Flavors with special handling
MINIMAL_FLAVOR = "minimal"
FULL_FLAVOR = "full"

# The ci-artifacts release of each SDK repository carries the minimal flavor
CI_ARTIFACTS_TAG = "ci-artifacts"
CI_ARTIFACTS_ID_PREFIX = "ci-artifacts-"
TAR_GZ_EXTENSION = ".tar.gz"

# This commit was re-tagged upstream; its artifacts need a distinct id
RETAGGED_COMMIT_SHA = "e37e3f44c1934f0f263dabbf4ed50a3cfb6eaf71"
RETAGGED_ID_SUFFIX = "-2"

# Local paths
DEFAULT_CLONE_DIR = ".tmp"
PACKAGING_SCRIPT = "please.sh"
PACKAGING_COMMAND = "create-sdk-artifact"

# Git for Windows toolchain layout
AGENT_HOME_ENV_VAR = "AGENT_HOMEDIRECTORY"
GIT_FOR_WINDOWS_ROOT = "C:/Program Files/Git"
GIT_FOR_WINDOWS_BIN_DIRS = ("clangarm64", "mingw64", "mingw32", "usr")
MSYSTEM = "MINGW64"

# 56 workers: 64 was faster still, 92 starved the agent and broke checkouts
DEFAULT_CHECKOUT_WORKERS = 56

# Network settings (in seconds / bytes)
GITHUB_API_TIMEOUT = 10
DEFAULT_REQUEST_TIMEOUT = 30
DEFAULT_CHUNK_SIZE = 8192
GITHUB_API_VERSION = "2022-11-28"

# Configuration
APP_NAME = "git-sdk-fetch"
CONFIG_FILE_NAME = "config.yaml"

# Logging
LOGGER_NAME = "gitsdk"
LOG_LEVEL_ENV_VAR = "GIT_SDK_FETCH_LOG_LEVEL"
LOG_FILE_NAME = "git-sdk-fetch.log"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 3
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
INFO_LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
DEBUG_LOG_FORMAT = (
    "%(asctime)s %(levelname)s [%(module)s:%(funcName)s:%(lineno)d]: %(message)s"
)
