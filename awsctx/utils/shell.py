"""
Helpers for rendering and running auth scripts.
"""

import logging
import re
import subprocess

__all__ = [
    'render_script',
    'run_script',
]

logger = logging.getLogger(__name__)

_PROFILE_PLACEHOLDER = re.compile(r"\{\{\s*profile\s*\}\}")


def render_script(template: str, profile: str) -> str:
    """
    Substitute the profile name into an auth script template.

    Args:
        template: Script containing `{{profile}}` placeholders
        profile: Profile name

    Returns:
        str: The script to run
    """
    return _PROFILE_PLACEHOLDER.sub(lambda _: profile, template)


def run_script(script: str) -> int:
    """
    Run a script with `sh -c`, attached to the current terminal so that
    interactive logins work.

    Args:
        script: Shell script to run

    Returns:
        int: Exit status of the script

    Raises:
        OSError: If the shell cannot be started
    """
    logger.debug("running auth script:\n%s", script)
    result = subprocess.run(["sh", "-c", script])
    return result.returncode
