"""
Shared test fixtures and configuration.
"""

import logging
import pytest
import os
import sys

# Add the parent directory to the path so we can import the awsctx package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from awsctx.configs import Configs

CREDENTIALS_TEXT = """[bar]
aws_access_key_id=YYYYYYYYYYY
aws_secret_access_key=YYYYYYYYYYY
aws_session_token=YYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYYY

[foo]
aws_access_key_id=XXXXXXXXXXX
aws_secret_access_key=XXXXXXXXXXX
aws_session_token=XXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXX

[default]
aws_access_key_id=XXXXXXXXXXX
aws_secret_access_key=XXXXXXXXXXX
aws_session_token=XXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXX
"""

@pytest.fixture
def credentials_text():
    """Credentials where [default] mirrors [foo]."""
    return CREDENTIALS_TEXT

@pytest.fixture
def credentials_file(tmp_path, credentials_text):
    """Write the credentials text to a temporary file."""
    path = tmp_path / "credentials"
    path.write_text(credentials_text)
    return path

@pytest.fixture
def configs():
    """Auth commands: foo succeeds, bar fails, everything else uses __default."""
    return Configs({
        "foo": "echo auth {{profile}}",
        "bar": "exit 1",
        "__default": "echo default {{profile}}",
    })

@pytest.fixture
def configs_without_default():
    """Auth commands without a __default entry."""
    return Configs({
        "foo": "echo auth {{profile}}",
        "bar": "exit 1",
    })

@pytest.fixture(autouse=True)
def reset_awsctx_logger():
    """Drop handlers installed by the CLI so they do not outlive a test."""
    yield
    logger = logging.getLogger("awsctx")
    logger.handlers[:] = []
    logger.setLevel(logging.NOTSET)
