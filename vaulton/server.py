"""HTTP application: health check, OpenID discovery and authorization endpoints."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response
from starlette.routing import Route

from vaulton.auth import (
    AuthRequest,
    AuthRequestRepository,
    ClientLookup,
    InMemoryAuthRequestRepository,
    authorize,
)
from vaulton.config import Config
from vaulton.discovery import openid_configuration
from vaulton.domain import Client
from vaulton.sources import ConfigBuilder

__all__ = ["AppState", "create_app", "health_check", "main"]

DEFAULT_CONFIG_PATH = "config.yaml"


async def _no_clients(client_id: str) -> Optional[Client]:
    return None


@dataclass
class AppState:
    """What every request handler shares: configuration and collaborators."""

    config: Config
    find_client: ClientLookup = _no_clients
    auth_requests: AuthRequestRepository = field(
        default_factory=InMemoryAuthRequestRepository
    )


def _state(request: Request) -> AppState:
    return request.app.state.vaulton


async def health_check(request: Request) -> Response:
    """Report that the server is up."""
    return PlainTextResponse("OK")


async def _discovery(request: Request) -> Response:
    document = openid_configuration(_state(request).config.oidc.external_url)
    return JSONResponse(document.to_dict())


async def _authorize(request: Request) -> Response:
    state = _state(request)
    try:
        params = AuthRequest.from_query(request.query_params)
    except ValueError as error:
        return PlainTextResponse(
            f"Failed to deserialize query string: {error}", status_code=400
        )
    try:
        outcome = await authorize(params, state.find_client, state.auth_requests)
    except ValueError:
        return PlainTextResponse("Internal Server Error", status_code=500)
    return RedirectResponse(outcome.location, status_code=outcome.status_code)


def create_app(
    config: Config,
    find_client: Optional[ClientLookup] = None,
    auth_requests: Optional[AuthRequestRepository] = None,
) -> Starlette:
    """Build the web application for ``config``.

    ``find_client`` looks up registered clients by id; without it no client
    is known. ``auth_requests`` stores pending authorization requests and
    defaults to an in-memory store.
    """
    app_state = AppState(
        config=config,
        find_client=find_client if find_client is not None else _no_clients,
        auth_requests=(
            auth_requests if auth_requests is not None else InMemoryAuthRequestRepository()
        ),
    )
    app = Starlette(
        routes=[
            Route("/health", health_check, methods=["GET"]),
            Route("/.well-known/openid-configuration", _discovery, methods=["GET"]),
            Route("/authorize", _authorize, methods=["GET"]),
        ]
    )
    app.state.vaulton = app_state
    return app


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="vaulton", description="Vaulton Server")
    parser.add_argument(
        "-c",
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help="Path to the config file",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load the configuration and serve the application until stopped."""
    args = _parse_args(argv)
    try:
        config = ConfigBuilder().with_yaml_file(args.config).build()
    except Exception as error:
        print(f"Failed to load configuration: {error}", file=sys.stderr)
        return 1

    bind_addr = config.server.bind_addr
    port = config.server.port
    if bind_addr is None or port is None:
        print("Failed to load configuration: server address not set", file=sys.stderr)
        return 1
    addr = f"{bind_addr}:{port}"

    app = create_app(config)
    print(f"Server running on http://{addr}")
    try:
        uvicorn.run(app, host=bind_addr, port=port)
    except OSError as error:
        print(f"Failed to bind to {addr}: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())