"""
Utility functions for awsctx.
"""

from .shell import render_script, run_script
from .completion import completion_script, SUPPORTED_SHELLS, SUBCOMMANDS
from .identity import describe_arn, get_caller_identity
