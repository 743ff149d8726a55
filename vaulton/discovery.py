"""OpenID Connect discovery document."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional

__all__ = ["OpenIDConfiguration", "openid_configuration"]


@dataclass
class OpenIDConfiguration:
    """Provider metadata as published at ``/.well-known/openid-configuration``."""

    issuer: str
    authorization_endpoint: str
    token_endpoint: str
    userinfo_endpoint: str
    jwks_uri: str
    response_types_supported: list[str]
    subject_types_supported: list[str]
    id_token_signing_alg_values_supported: list[str]
    scopes_supported: list[str]
    token_endpoint_auth_methods_supported: list[str]
    claims_supported: list[str]
    code_challenge_methods_supported: list[str]

    def to_dict(self) -> dict[str, Any]:
        """Return the document as JSON-ready data, in field order."""
        return dataclasses.asdict(self)


def openid_configuration(external_url: Optional[str]) -> OpenIDConfiguration:
    """Build the discovery document for a server reachable at ``external_url``."""
    if external_url is None:
        raise ValueError("oidc.external_url is not set")
    return OpenIDConfiguration(
        issuer=external_url,
        authorization_endpoint=f"{external_url}/authorize",
        token_endpoint=f"{external_url}/token",
        userinfo_endpoint=f"{external_url}/userinfo",
        jwks_uri=f"{external_url}/jwks",
        response_types_supported=["code"],
        subject_types_supported=["public"],
        id_token_signing_alg_values_supported=["RS256"],
        scopes_supported=["openid", "profile", "email"],
        token_endpoint_auth_methods_supported=["client_secret_basic"],
        claims_supported=["sub", "iss", "name", "email"],
        code_challenge_methods_supported=["S256"],
    )