from urllib.parse import parse_qsl, urlsplit

import pytest

from vaulton.oauth_error import OAuthError, OAuthErrorKind

REDIRECT = "https://client.example.com/cb"


def test_str_format():
    error = OAuthError(OAuthErrorKind.INVALID_REQUEST, "Invalid redirect URI")
    assert str(error) == "invalid_request: Invalid redirect URI"


@pytest.mark.parametrize("kind", list(OAuthErrorKind))
def test_str_starts_with_code(kind):
    error = OAuthError(kind, "description")
    assert str(error).startswith(kind.value + ": ")
    assert str(error).endswith("description")


def test_kind_from_string():
    error = OAuthError("invalid_scope", "Missing 'openid' scope")
    assert error.kind is OAuthErrorKind.INVALID_SCOPE


def test_unknown_kind_rejected():
    with pytest.raises(ValueError):
        OAuthError("no_such_error", "x")


def test_redirect_carries_error_and_state():
    error = OAuthError(OAuthErrorKind.INVALID_SCOPE, "Missing 'openid' scope")
    url = error.to_redirect_url(REDIRECT, "xyz")
    parts = urlsplit(url)
    assert (parts.scheme, parts.netloc, parts.path) == ("https", "client.example.com", "/cb")
    assert parse_qsl(parts.query) == [
        ("error", "invalid_scope"),
        ("error_description", "Missing 'openid' scope"),
        ("state", "xyz"),
    ]


def test_redirect_without_state():
    error = OAuthError(OAuthErrorKind.SERVER_ERROR, "Failed to store authorization request")
    query = dict(parse_qsl(urlsplit(error.to_redirect_url(REDIRECT)).query))
    assert "state" not in query
    assert query["error"] == "server_error"


def test_redirect_keeps_existing_query():
    error = OAuthError(OAuthErrorKind.ACCESS_DENIED, "denied")
    url = error.to_redirect_url(REDIRECT + "?foo=bar")
    assert parse_qsl(urlsplit(url).query)[0] == ("foo", "bar")
    assert url.startswith(REDIRECT + "?foo=bar&error=access_denied")


def test_redirect_keeps_fragment():
    error = OAuthError(OAuthErrorKind.ACCESS_DENIED, "denied")
    url = error.to_redirect_url(REDIRECT + "#frag")
    assert urlsplit(url).fragment == "frag"


def test_spaces_are_form_encoded():
    error = OAuthError(OAuthErrorKind.INVALID_CLIENT, "Client not found")
    url = error.to_redirect_url(REDIRECT)
    assert " " not in url
    assert "Client+not+found" in url


def test_bare_host_gets_root_path():
    error = OAuthError(OAuthErrorKind.INVALID_REQUEST, "x")
    assert urlsplit(error.to_redirect_url("https://client.example.com")).path == "/"


def test_relative_redirect_rejected():
    error = OAuthError(OAuthErrorKind.INVALID_REQUEST, "x")
    with pytest.raises(ValueError):
        error.to_redirect_url("not a url")