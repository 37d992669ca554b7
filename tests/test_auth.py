import pytest

from core.auth import auth_headers, resolve_token


@pytest.mark.parametrize("configured", [None, "", "from-config"])
def test_cli_token_always_wins(configured):
    assert resolve_token("from-cli", configured) == "from-cli"


def test_configured_token_used_without_cli_value():
    assert resolve_token(None, "from-config") == "from-config"
    assert resolve_token("", "from-config") == "from-config"


def test_no_token_means_no_authorization_header():
    token = resolve_token(None, None)
    assert token is None
    assert auth_headers(token) == {}


def test_authorization_header_uses_token_scheme():
    assert auth_headers("abc") == {"Authorization": "token abc"}
