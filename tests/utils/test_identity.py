import pytest
from unittest.mock import patch, MagicMock
from botocore.exceptions import ClientError, ProfileNotFound
from awsctx.errors import InvalidConfigurations
from awsctx.utils.identity import describe_arn, get_caller_identity

SAMPLE_IDENTITY = {
    "UserId": "AIDAEXAMPLE",
    "Account": "123456789012",
    "Arn": "arn:aws:iam::123456789012:user/alice",
}

@pytest.mark.parametrize("arn, auth_method, user_identity", [
    ("arn:aws:iam::123456789012:user/alice", "api_key", "alice"),
    ("arn:aws:sts::123456789012:assumed-role/Admin/session", "role", "Admin"),
    ("arn:aws:sts::123456789012:federated-user/bob", "federated", "bob"),
    ("arn:aws:iam::123456789012:root", "root", None),
    ("", None, None),
])
def test_describe_arn(arn, auth_method, user_identity):
    """Test reading the auth method and identity from an ARN."""
    assert describe_arn(arn) == {"auth_method": auth_method, "user_identity": user_identity}

@patch('awsctx.utils.identity.boto3.Session')
def test_get_caller_identity(mock_session):
    """Test asking STS for a profile's identity."""
    mock_client = MagicMock()
    mock_client.get_caller_identity.return_value = SAMPLE_IDENTITY
    mock_session.return_value.client.return_value = mock_client

    identity = get_caller_identity("foo")

    assert identity == {
        "account": "123456789012",
        "arn": "arn:aws:iam::123456789012:user/alice",
        "user_id": "AIDAEXAMPLE",
        "auth_method": "api_key",
        "user_identity": "alice",
    }
    mock_session.assert_called_once_with(profile_name="foo")
    mock_session.return_value.client.assert_called_once_with("sts")

@patch('awsctx.utils.identity.boto3.Session')
def test_get_caller_identity_unknown_profile(mock_session):
    """Test a profile boto3 does not know."""
    mock_session.side_effect = ProfileNotFound(profile="foo")

    with pytest.raises(InvalidConfigurations) as excinfo:
        get_caller_identity("foo")
    assert "(foo)" in excinfo.value.message

@patch('awsctx.utils.identity.boto3.Session')
def test_get_caller_identity_rejected(mock_session):
    """Test credentials rejected by STS."""
    error = ClientError(
        {"Error": {"Code": "InvalidClientTokenId", "Message": "invalid token"}},
        "GetCallerIdentity",
    )
    mock_session.return_value.client.return_value.get_caller_identity.side_effect = error

    with pytest.raises(InvalidConfigurations):
        get_caller_identity()
