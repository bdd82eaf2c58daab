"""
Parsing and rewriting of the AWS CLI credentials file.
"""

from .store import (
    DEFAULT_PROFILE_NAME,
    Profile,
    ProfileStore,
    get_credentials_path,
    load_credentials,
)
