"""The OpenID Connect authorization endpoint and its request store."""

from __future__ import annotations

import secrets
import string
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from vaulton.domain import Client
from vaulton.oauth_error import OAuthError, OAuthErrorKind

__all__ = [
    "AuthRequest",
    "AuthRequestRepository",
    "AuthorizationRequest",
    "AuthorizeOutcome",
    "InMemoryAuthRequestRepository",
    "authorize",
    "generate_request_id",
]

REQUEST_ID_CHARSET = string.ascii_uppercase + string.ascii_lowercase + string.digits
REQUEST_ID_LENGTH = 32
DEFAULT_SCOPE = "openid"

SEE_OTHER = 303
TEMPORARY_REDIRECT = 307

ClientLookup = Callable[[str], Awaitable[Optional[Client]]]


@dataclass(frozen=True)
class AuthRequest:
    """Query parameters of an authorization request."""

    client_id: str
    redirect_uri: str
    response_type: str
    scope: Optional[str] = None
    state: Optional[str] = None
    code_challenge: Optional[str] = None
    code_challenge_method: Optional[str] = None

    @classmethod
    def from_query(cls, query: Mapping[str, str]) -> AuthRequest:
        """Read the parameters from a query mapping; unknown keys are ignored.

        Raises ``ValueError`` when a required parameter is missing.
        """
        for name in ("client_id", "redirect_uri", "response_type"):
            if name not in query:
                raise ValueError(f"missing field `{name}`")
        return cls(
            client_id=query["client_id"],
            redirect_uri=query["redirect_uri"],
            response_type=query["response_type"],
            scope=query.get("scope"),
            state=query.get("state"),
            code_challenge=query.get("code_challenge"),
            code_challenge_method=query.get("code_challenge_method"),
        )


@dataclass(frozen=True)
class AuthorizationRequest:
    """A validated authorization request waiting for the user to log in."""

    request_id: str
    client_id: str
    redirect_uri: str
    scope: str
    state: Optional[str] = None
    code_challenge: Optional[str] = None
    code_challenge_method: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class AuthRequestRepository(ABC):
    """Storage for pending authorization requests."""

    @abstractmethod
    async def store_request(self, request: AuthorizationRequest) -> None:
        """Store ``request`` under its id; raise on failure."""

    @abstractmethod
    async def find_by_id(self, request_id: str) -> Optional[AuthorizationRequest]:
        """Return the stored request with ``request_id``, or ``None``."""


class InMemoryAuthRequestRepository(AuthRequestRepository):
    """Keeps pending requests in a dictionary for the life of the process."""

    def __init__(self) -> None:
        self._requests: dict[str, AuthorizationRequest] = {}

    async def store_request(self, request: AuthorizationRequest) -> None:
        self._requests[request.request_id] = request

    async def find_by_id(self, request_id: str) -> Optional[AuthorizationRequest]:
        return self._requests.get(request_id)


@dataclass(frozen=True)
class AuthorizeOutcome:
    """Where to redirect the user agent after an authorization request."""

    location: str
    status_code: int
    error: Optional[OAuthError] = None
    request: Optional[AuthorizationRequest] = None


def generate_request_id() -> str:
    """Return a random 32-character alphanumeric request id."""
    return "".join(secrets.choice(REQUEST_ID_CHARSET) for _ in range(REQUEST_ID_LENGTH))


def _failure(params: AuthRequest, kind: OAuthErrorKind, description: str) -> AuthorizeOutcome:
    error = OAuthError(kind, description)
    return AuthorizeOutcome(
        location=error.to_redirect_url(params.redirect_uri, params.state),
        status_code=SEE_OTHER,
        error=error,
    )


async def authorize(
    params: AuthRequest,
    find_client: ClientLookup,
    repository: AuthRequestRepository,
) -> AuthorizeOutcome:
    """Validate an authorization request and store it for the login step.

    Errors are reported by redirecting to the request's ``redirect_uri``;
    ``ValueError`` is raised when that URI is not an absolute URL.
    """
    if params.response_type != "code":
        return _failure(
            params,
            OAuthErrorKind.UNSUPPORTED_RESPONSE_TYPE,
            "Only 'code' response type is supported",
        )

    if params.code_challenge_method is not None and params.code_challenge_method != "S256":
        return _failure(
            params,
            OAuthErrorKind.INVALID_REQUEST,
            "Only 'S256' code challenge method is supported",
        )

    scope = params.scope if params.scope is not None else DEFAULT_SCOPE
    requested_scopes = scope.split()
    if "openid" not in requested_scopes:
        return _failure(params, OAuthErrorKind.INVALID_SCOPE, "Missing 'openid' scope")

    client = await find_client(params.client_id)
    if client is None:
        return _failure(params, OAuthErrorKind.INVALID_CLIENT, "Client not found")

    if not client.validate_redirect_uri(params.redirect_uri):
        return _failure(params, OAuthErrorKind.INVALID_REQUEST, "Invalid redirect URI")

    if not client.validate_scopes(requested_scopes):
        return _failure(
            params,
            OAuthErrorKind.INVALID_SCOPE,
            "Requested scopes not allowed for this client",
        )

    request = AuthorizationRequest(
        request_id=generate_request_id(),
        client_id=params.client_id,
        redirect_uri=params.redirect_uri,
        scope=scope,
        state=params.state,
        code_challenge=params.code_challenge,
        code_challenge_method=params.code_challenge_method,
    )

    try:
        await repository.store_request(request)
    except Exception:
        return _failure(
            params,
            OAuthErrorKind.SERVER_ERROR,
            "Failed to store authorization request",
        )

    return AuthorizeOutcome(
        location=f"/login?request_id={request.request_id}",
        status_code=TEMPORARY_REDIRECT,
        request=request,
    )