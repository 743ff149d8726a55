"""OAuth 2.0 error responses delivered by redirecting back to the client."""

from __future__ import annotations

from enum import Enum
from typing import Optional
from urllib.parse import quote_plus, urlsplit, urlunsplit

__all__ = ["OAuthError", "OAuthErrorKind"]

_SPECIAL_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp", "file"})


class OAuthErrorKind(str, Enum):
    """The error codes an authorization response can carry."""

    INVALID_REQUEST = "invalid_request"
    UNAUTHORIZED_CLIENT = "unauthorized_client"
    ACCESS_DENIED = "access_denied"
    UNSUPPORTED_RESPONSE_TYPE = "unsupported_response_type"
    INVALID_SCOPE = "invalid_scope"
    SERVER_ERROR = "server_error"
    TEMPORARILY_UNAVAILABLE = "temporarily_unavailable"
    INVALID_CLIENT = "invalid_client"


def _form_encode(text: str) -> str:
    return quote_plus(text, safe="*").replace("~", "%7E")


class OAuthError(Exception):
    """An OAuth error code with a human-readable description."""

    def __init__(self, kind: OAuthErrorKind | str, description: str) -> None:
        self.kind = OAuthErrorKind(kind)
        self.description = description
        super().__init__(description)

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.description}"

    def __repr__(self) -> str:
        return f"OAuthError({self.kind.name}, {self.description!r})"

    def to_redirect_url(self, redirect_uri: str, state: Optional[str] = None) -> str:
        """Append ``error``, ``error_description`` and ``state`` to ``redirect_uri``.

        Raises ``ValueError`` when ``redirect_uri`` is not an absolute URL.
        """
        parts = urlsplit(redirect_uri)
        if not parts.scheme:
            raise ValueError(f"invalid redirect URI: {redirect_uri!r}")
        path = parts.path
        if parts.netloc and not path and parts.scheme in _SPECIAL_SCHEMES:
            path = "/"
        pairs = [("error", self.kind.value), ("error_description", self.description)]
        if state is not None:
            pairs.append(("state", state))
        encoded = "&".join(f"{_form_encode(k)}={_form_encode(v)}" for k, v in pairs)
        query = f"{parts.query}&{encoded}" if parts.query else encoded
        return urlunsplit((parts.scheme, parts.netloc, path, query, parts.fragment))