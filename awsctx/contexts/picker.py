"""
Interactive context picker backed by fzf.

When fzf is not installed the picker falls back to a numbered prompt.
"""

import logging
import shutil
import subprocess
from typing import Callable, Optional, Sequence

from ..errors import UnexpectedError

__all__ = [
    'Picker',
    'fzf_select',
]

logger = logging.getLogger(__name__)

# Receives the contexts in display order and returns the selected name, or
# None when nothing was selected.
Picker = Callable[[Sequence["Context"]], Optional[str]]

# fzf exit codes for "no match" and "interrupted"
_FZF_NO_SELECTION = (1, 130)


def _prompt_select(contexts: Sequence, prompt: str) -> Optional[str]:
    print(f"\n{prompt}:")
    for i, context in enumerate(contexts, 1):
        print(f"  {i}. {context.label}")
    try:
        choice = input(f"\nEnter choice (1-{len(contexts)}): ").strip()
    except (EOFError, KeyboardInterrupt):
        return None
    if not choice.isdigit():
        return None
    idx = int(choice) - 1
    if 0 <= idx < len(contexts):
        return contexts[idx].name
    return None


def fzf_select(contexts: Sequence, prompt: str = "Select context") -> Optional[str]:
    """
    Let the user pick one context.

    Args:
        contexts: Contexts in display order, top to bottom
        prompt: Prompt shown to the user

    Returns:
        Name of the selected context, or None if the selection was cancelled

    Raises:
        UnexpectedError: If fzf cannot be run
    """
    if not contexts:
        return None

    if shutil.which("fzf") is None:
        logger.debug("fzf not found, falling back to a numbered prompt")
        return _prompt_select(contexts, prompt)

    # fzf lists its input bottom-up
    by_label = {context.label: context.name for context in reversed(contexts)}
    try:
        process = subprocess.Popen(
            ["fzf", "--prompt", f"{prompt}: ", "--height", "30%", "--no-multi"],
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=None,  # fzf draws its UI on the terminal
            text=True,
        )
        stdout, _ = process.communicate("\n".join(by_label))
    except OSError as e:
        raise UnexpectedError("failed to run fzf") from e

    if process.returncode in _FZF_NO_SELECTION:
        return None
    if process.returncode != 0:
        raise UnexpectedError(f"fzf exited with status {process.returncode}")

    selected = stdout.rstrip("\n")
    return by_label.get(selected)
