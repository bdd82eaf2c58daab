"""
AWS Credentials Store

This module parses the AWS CLI credentials file into named profiles, resolves
which profile is currently mirrored into the reserved [default] section, and
writes the file back with exactly one profile copied under [default].

The file is rewritten, not edited in place: comments and the original
section order are not preserved.
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..errors import (
    CannotReadCredentials,
    CannotWriteCredentials,
    CredentialsIsBroken,
    NoActiveContext,
    NoSuchProfile,
)

__all__ = [
    'DEFAULT_PROFILE_NAME',
    'Profile',
    'ProfileStore',
    'get_credentials_path',
    'load_credentials',
]

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_NAME = "default"

_SECTION_HEADER = re.compile(r"^\[([^\]]+)\]$")

PathLike = Union[str, Path]


def get_credentials_path() -> Path:
    """Get the path to the AWS credentials file."""
    aws_dir = Path.home() / ".aws"
    return aws_dir / "credentials"


class Profile:
    """A named set of credentials from the credentials file."""

    def __init__(self, name: str, attributes: Dict[str, str], is_active: bool = False):
        self.name = name
        self.attributes = dict(attributes)
        self.is_active = is_active

    def __eq__(self, other) -> bool:
        if not isinstance(other, Profile):
            return NotImplemented
        return (self.name, self.attributes, self.is_active) == (
            other.name, other.attributes, other.is_active
        )

    def __repr__(self) -> str:
        return f"Profile(name={self.name!r}, keys={sorted(self.attributes)!r}, is_active={self.is_active})"


def _is_ignorable(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped[0] in "#;"


def _parse_attribute(line: str, line_no: int) -> Tuple[str, str]:
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        raise CredentialsIsBroken(
            f"broken credentials at line {line_no}, expected `key=value`: {line.strip()!r}"
        )
    return key, value.strip()


def _parse_sections(text: str) -> List[Tuple[str, Dict[str, str]]]:
    """
    Split credentials text into (section name, attributes) pairs in file order.

    A section repeated later in the file is merged into its first occurrence.

    Raises:
        CredentialsIsBroken: If there is no section header or a body line is
            not a `key=value` pair
    """
    lines = text.splitlines()
    header_idxs = [idx for idx, line in enumerate(lines) if _SECTION_HEADER.match(line)]
    if not header_idxs:
        raise CredentialsIsBroken("broken credentials, no profile section found")

    for idx, line in enumerate(lines[:header_idxs[0]]):
        if not _is_ignorable(line):
            raise CredentialsIsBroken(
                f"broken credentials at line {idx + 1}, found content before the first profile"
            )

    sections: Dict[str, Dict[str, str]] = {}
    bounds = zip(header_idxs, header_idxs[1:] + [len(lines)])
    for start, end in bounds:
        name = _SECTION_HEADER.match(lines[start]).group(1)
        attributes = sections.setdefault(name, {})
        for idx in range(start + 1, end):
            if _is_ignorable(lines[idx]):
                continue
            key, value = _parse_attribute(lines[idx], idx + 1)
            attributes[key] = value

    return list(sections.items())


class ProfileStore:
    """
    In-memory model of one credentials file for a single load/modify/dump cycle.
    """

    def __init__(self, profiles: Dict[str, Dict[str, str]], active_profile_name: Optional[str] = None):
        """
        Initialize the store.

        Args:
            profiles: Mapping of profile name to its key/value pairs, without
                the reserved default section
            active_profile_name: Name of the profile mirrored into [default]
        """
        if DEFAULT_PROFILE_NAME in profiles:
            raise ValueError(f"'{DEFAULT_PROFILE_NAME}' is reserved and cannot be a profile")
        if active_profile_name is not None and active_profile_name not in profiles:
            raise ValueError(f"active profile '{active_profile_name}' is not in profiles")
        self.profiles = {name: dict(attrs) for name, attrs in profiles.items()}
        self.active_profile_name = active_profile_name

    @classmethod
    def loads(cls, text: str) -> "ProfileStore":
        """
        Parse credentials file contents.

        Args:
            text: Contents of a credentials file

        Returns:
            ProfileStore with the active profile resolved against [default]

        Raises:
            CredentialsIsBroken: If the text does not follow the credentials grammar
                or has no profile besides [default]
        """
        sections = _parse_sections(text)
        profiles = {name: attrs for name, attrs in sections if name != DEFAULT_PROFILE_NAME}
        if not profiles:
            raise CredentialsIsBroken("broken credentials, no profile other than [default] found")

        default_attributes = dict(sections).get(DEFAULT_PROFILE_NAME)
        active = None
        if default_attributes is not None:
            matches = [name for name, attrs in profiles.items() if attrs == default_attributes]
            if len(matches) > 1:
                logger.warning(
                    "profiles %s all match [default], treating '%s' as active",
                    ", ".join(matches), matches[0]
                )
            elif not matches:
                logger.debug("[default] does not match any profile, no active profile")
            active = matches[0] if matches else None

        return cls(profiles, active)

    @classmethod
    def load(cls, path: PathLike) -> "ProfileStore":
        """
        Read and parse a credentials file.

        Raises:
            CannotReadCredentials: If the file cannot be read
            CredentialsIsBroken: If the file does not follow the credentials grammar
        """
        try:
            text = Path(path).read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise CannotReadCredentials(f"failed to read credentials from {path}") from e
        logger.debug("loaded credentials from %s", path)
        return cls.loads(text)

    def _profile(self, name: str) -> Profile:
        return Profile(name, self.profiles[name], is_active=(name == self.active_profile_name))

    def get_profile(self, name: str) -> Profile:
        if name not in self.profiles:
            raise NoSuchProfile(name)
        return self._profile(name)

    def get_active_profile(self) -> Profile:
        if self.active_profile_name is None:
            raise NoActiveContext()
        return self._profile(self.active_profile_name)

    def set_active(self, name: str) -> Profile:
        """
        Mark a profile as active. Nothing is written until dump().

        Raises:
            NoSuchProfile: If the profile does not exist; the active profile
                is left unchanged
        """
        if name not in self.profiles:
            raise NoSuchProfile(name)
        self.active_profile_name = name
        return self._profile(name)

    def list_profiles(self) -> List[Profile]:
        """Return all profiles sorted by name."""
        return [self._profile(name) for name in sorted(self.profiles)]

    def dumps(self) -> str:
        """
        Serialize the store. Sections are sorted by name and keys by key so the
        output does not depend on the input order. The active profile is
        copied into a trailing [default] section.

        Raises:
            CredentialsIsBroken: If there is no profile to write, since the
                result could not be loaded again
        """
        if not self.profiles:
            raise CredentialsIsBroken("refusing to write credentials without any profile")
        blocks = []
        names = sorted(self.profiles)
        if self.active_profile_name is not None:
            names.append(self.active_profile_name)
        for idx, name in enumerate(names):
            header = DEFAULT_PROFILE_NAME if idx == len(self.profiles) else name
            attributes = self.profiles[name]
            lines = [f"[{header}]"]
            lines.extend(f"{key}={attributes[key]}" for key in sorted(attributes))
            blocks.append("\n".join(lines) + "\n")
        return "\n".join(blocks)

    def dump(self, path: PathLike) -> None:
        """
        Write the store to a credentials file, truncating it first.

        Raises:
            CredentialsIsBroken: If the store has no profile
            CannotWriteCredentials: If the file cannot be written
        """
        text = self.dumps()
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            raise CannotWriteCredentials(f"failed to write credentials to {path}") from e
        logger.debug("wrote credentials to %s (active: %s)", path, self.active_profile_name)


def load_credentials(path: Optional[PathLike] = None) -> ProfileStore:
    """
    Load the credentials file.

    Args:
        path: Path to the credentials file, defaults to ~/.aws/credentials

    Returns:
        ProfileStore for the file
    """
    return ProfileStore.load(path if path is not None else get_credentials_path())
