"""
awsctx Configurations

Auth commands are configured per profile in ~/.awsctx/configs.yaml. Each
entry is a shell script template where `{{profile}}` is replaced by the
profile name. The `__default` entry is used for profiles without their own.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

import yaml

from ..errors import InvalidConfigurations, UnexpectedError

__all__ = [
    'DEFAULT_AUTH_COMMAND_KEY',
    'Configs',
    'get_configs_path',
]

logger = logging.getLogger(__name__)

DEFAULT_AUTH_COMMAND_KEY = "__default"

CONFIGS_DESCRIPTIONS = """\
# # Configurations for awsctx
# # You can manually edit configurations according to the following usage

# # To use subcommand `auth` or `refresh`, fill the below configs for each profile.
# auth_commands:
#   # configuration for `foo` profile with aws configure
#   foo: |
#     # you can use pre-defined parameter `{{profile}}` which is replaced by key of this block
#     # In this case, `{{profile}}` is replaced by `foo`
#     aws configure --profile {{profile}}
#   # configuration for `bar` profile with [onelogin-aws-cli](https://github.com/physera/onelogin-aws-cli)
#   bar: |
#     # In this case, name of one-login configuration is same as `profile`
#     onelogin-aws-login -C {{profile}} --profile {{profile}} -u user@example.com
#   # default configuration for profiles without auth configuration
#   __default: |
#     aws configure --profile {{profile}}
"""

DEFAULT_AUTH_COMMAND = """\
echo "This is default configuration for auth commands."
echo "You can edit this configuration on ~/.awsctx/configs.yaml according to your needs."
aws configure --profile {{profile}}
"""


def get_configs_path() -> Path:
    """Get the path to the awsctx configuration file."""
    return Path.home() / ".awsctx" / "configs.yaml"


class _LiteralDumper(yaml.SafeDumper):
    """Dumps multi-line strings as `|` blocks so scripts stay readable."""


def _represent_str(dumper, data):
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_LiteralDumper.add_representer(str, _represent_str)


class Configs:
    """Auth command configuration."""

    def __init__(self, auth_commands: Optional[Dict[str, str]] = None):
        self.auth_commands = dict(auth_commands or {})

    def __eq__(self, other) -> bool:
        if not isinstance(other, Configs):
            return NotImplemented
        return self.auth_commands == other.auth_commands

    def __repr__(self) -> str:
        return f"Configs(auth_commands={self.auth_commands!r})"

    @classmethod
    def default(cls) -> "Configs":
        return cls({DEFAULT_AUTH_COMMAND_KEY: DEFAULT_AUTH_COMMAND})

    def get_auth_command(self, profile: str) -> Optional[str]:
        """
        Get the auth script template for a profile.

        Args:
            profile: Profile name

        Returns:
            The profile's template, the `__default` template, or None
        """
        if profile in self.auth_commands:
            return self.auth_commands[profile]
        return self.auth_commands.get(DEFAULT_AUTH_COMMAND_KEY)

    def to_yaml(self) -> str:
        return yaml.dump(
            {"auth_commands": self.auth_commands},
            Dumper=_LiteralDumper,
            default_flow_style=False,
            sort_keys=True,
        )

    @classmethod
    def from_dict(cls, data, path: Union[str, Path] = "~/.awsctx/configs.yaml") -> "Configs":
        """
        Build configurations from a parsed YAML document.

        Raises:
            InvalidConfigurations: If the document does not have the expected shape
        """
        message = f"failed to deserialize configurations, check your configurations ({path})"
        if not isinstance(data, dict):
            raise InvalidConfigurations(message)

        unknown = set(data) - {"auth_commands"}
        if unknown:
            logger.debug("unknown configuration keys: %s", ", ".join(sorted(map(str, unknown))))
            raise InvalidConfigurations(message)

        auth_commands = data.get("auth_commands")
        if not isinstance(auth_commands, dict):
            raise InvalidConfigurations(message)
        for profile, script in auth_commands.items():
            if not isinstance(profile, str) or not isinstance(script, str):
                logger.debug("auth command for %r is not a string", profile)
                raise InvalidConfigurations(message)

        return cls(auth_commands)

    @classmethod
    def load_configs(cls, path: Optional[Union[str, Path]] = None) -> "Configs":
        """
        Load configurations from a YAML file.

        Args:
            path: Path to the configuration file, defaults to ~/.awsctx/configs.yaml

        Returns:
            Configs loaded from the file

        Raises:
            InvalidConfigurations: If the file cannot be read or parsed
        """
        path = Path(path) if path is not None else get_configs_path()
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise InvalidConfigurations(
                f"failed to load configurations, check your configurations ({path})"
            ) from e

        return cls.from_dict(data, path)

    @classmethod
    def initialize_default_configs(cls, path: Optional[Union[str, Path]] = None) -> "Configs":
        """
        Load configurations, writing the default configuration file first if
        it does not exist yet.

        Raises:
            InvalidConfigurations: If an existing file is invalid
            UnexpectedError: If the default file cannot be created
        """
        path = Path(path) if path is not None else get_configs_path()
        if path.exists():
            return cls.load_configs(path)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(CONFIGS_DESCRIPTIONS)
                f.write(cls.default().to_yaml())
        except OSError as e:
            raise UnexpectedError(f"failed to create a configuration file: {path}") from e
        logger.info("created default configurations at %s", path)

        return cls.load_configs(path)
