"""Centralized constants for the nixdoc utils package.

Single source of truth for paths and directories used across utility modules.
"""

from pathlib import Path

# ============================================================================
# OUTPUT DIRECTORIES
# ============================================================================

# Per-project directory for configuration and diagnostics
NIXDOC_DIR = Path("./.nixdoc")

# Log files
ERROR_LOG_FILE = NIXDOC_DIR / "error.log"

# Configuration file name, looked up under <root>/.nixdoc/
CONFIG_FILE_NAME = "config.json"

# Environment variable prefix for configuration overrides
ENV_PREFIX = "NIXDOC"
