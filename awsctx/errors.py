"""
Errors raised by awsctx.

Every failure surfaced to the CLI is a CTXError. The CLI prints the message
and logs the chained cause at debug level.
"""

from typing import Optional


class CTXError(Exception):
    """Base class for all awsctx errors."""

    default_message = "unexpected error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class CannotReadCredentials(CTXError):
    default_message = "failed to read credentials, check your ~/.aws/credentials file"


class CannotWriteCredentials(CTXError):
    default_message = "failed to write credentials, check permissions of your ~/.aws/credentials file"


class CredentialsIsBroken(CTXError):
    default_message = "broken credentials, check your ~/.aws/credentials file"


class NoSuchProfile(CTXError):
    def __init__(self, profile: str):
        self.profile = profile
        super().__init__(f"no such profile: {profile}, check your ~/.aws/credentials file")


class NoActiveContext(CTXError):
    default_message = "no active context"


class NoAuthConfiguration(CTXError):
    def __init__(self, profile: str):
        self.profile = profile
        super().__init__(f"no auth configuration found for the profile: {profile}")


class InvalidConfigurations(CTXError):
    default_message = "invalid configurations"


class NoContextIsSelected(CTXError):
    default_message = "no context is selected"


class UnexpectedError(CTXError):
    default_message = "unexpected error occurred, you can check detailed error by `--verbose` option"
