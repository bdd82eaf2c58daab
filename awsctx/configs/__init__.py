"""
Configuration of auth commands for awsctx.
"""

from .configs import (
    DEFAULT_AUTH_COMMAND_KEY,
    Configs,
    get_configs_path,
)
