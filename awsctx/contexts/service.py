"""
Context Service

Operations behind the awsctx commands. Each call loads the credentials file,
works on a fresh ProfileStore and writes it back when the active profile
changes. Nothing is cached between calls; the file is the source of truth.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Union

from ..configs import Configs
from ..credentials import Profile, ProfileStore, get_credentials_path
from ..errors import (
    InvalidConfigurations,
    NoAuthConfiguration,
    NoContextIsSelected,
)
from ..utils.shell import render_script, run_script
from .picker import Picker, fzf_select

__all__ = [
    'Context',
    'ContextService',
]

logger = logging.getLogger(__name__)


class Context:
    """Public view of a profile: its name and whether it is active."""

    def __init__(self, name: str, active: bool = False):
        self.name = name
        self.active = active

    @classmethod
    def from_profile(cls, profile: Profile) -> "Context":
        return cls(profile.name, profile.is_active)

    @property
    def label(self) -> str:
        """Text shown in listings and the picker."""
        return f"* {self.name}" if self.active else f"  {self.name}"

    def __str__(self) -> str:
        return self.name

    def __eq__(self, other) -> bool:
        if not isinstance(other, Context):
            return NotImplemented
        return (self.name, self.active) == (other.name, other.active)

    def __repr__(self) -> str:
        return f"Context(name={self.name!r}, active={self.active})"


class ContextService:
    """
    Switches the active AWS profile in a credentials file.
    """

    def __init__(
        self,
        configs: Optional[Configs] = None,
        credentials_path: Optional[Union[str, Path]] = None,
        runner: Callable[[str], int] = run_script,
        picker: Picker = fzf_select,
    ):
        """
        Initialize the service.

        Args:
            configs: Auth command configuration, only needed by auth/refresh
            credentials_path: Credentials file, defaults to ~/.aws/credentials
            runner: Runs a rendered auth script and returns its exit status
            picker: Lets the user pick one of the given contexts
        """
        self.configs = configs if configs is not None else Configs()
        self.credentials_path = Path(credentials_path) if credentials_path else get_credentials_path()
        self.runner = runner
        self.picker = picker

    def _load(self) -> ProfileStore:
        return ProfileStore.load(self.credentials_path)

    def list_contexts(self) -> List[Context]:
        """List all contexts sorted by name."""
        return [Context.from_profile(p) for p in self._load().list_profiles()]

    def get_active_context(self) -> Context:
        """
        Get the context mirrored into [default].

        Raises:
            NoActiveContext: If [default] is missing or matches no profile
        """
        return Context.from_profile(self._load().get_active_profile())

    def use_context(self, name: str) -> Context:
        """
        Make a profile the default one and write the credentials file.

        Raises:
            NoSuchProfile: If the profile does not exist
        """
        store = self._load()
        profile = store.set_active(name)
        store.dump(self.credentials_path)
        logger.info("%s is activated", name)
        return Context.from_profile(profile)

    def auth(self, name: str) -> Context:
        """
        Run the auth script configured for a profile, then activate it.

        The profile's own script is used if present, otherwise the `__default`
        one.

        Raises:
            NoAuthConfiguration: If neither script is configured
            InvalidConfigurations: If the script cannot be run or fails
        """
        template = self.configs.get_auth_command(name)
        if template is None:
            raise NoAuthConfiguration(name)

        message = f"failed to execute an auth script of profile ({name}), check configurations"
        script = render_script(template, name)
        try:
            status = self.runner(script)
        except OSError as e:
            raise InvalidConfigurations(message) from e
        if status != 0:
            logger.debug("auth script of %s exited with status %s", name, status)
            raise InvalidConfigurations(message)

        return self.use_context(name)

    def refresh(self) -> Context:
        """
        Re-run the auth script of the active context.

        Raises:
            NoActiveContext: If there is no active context
        """
        active = self.get_active_context()
        return self.auth(active.name)

    def use_context_interactive(self) -> Context:
        """
        Let the user pick a context and activate it.

        Raises:
            NoContextIsSelected: If the selection was cancelled
        """
        selected = self.picker(self.list_contexts())
        if selected is None:
            raise NoContextIsSelected()
        return self.use_context(selected)
