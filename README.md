# vaulton

vaulton is a small OpenID Connect authorization server. It serves a health
check and an OpenID discovery document. It also validates authorization
requests for the Authorization Code flow, with optional PKCE (`S256`). Settings
come from built-in defaults. A YAML file can override the defaults, and
`VAULTON__` environment variables override both.

## Installation

```
pip install vaulton
```

To install the test tools (pytest, pytest-asyncio, httpx) as well:

```
pip install "vaulton[test]"
```

## Running the server

```
vaulton --config config.yaml
```

`--config` (or `-c`) names the YAML configuration file and defaults to
`config.yaml`. The file must exist. If it is missing, or it or the environment
holds an invalid value, the command prints `Failed to load configuration: ...`
to standard error and exits with status 1. Otherwise it prints
`Server running on http://<bind_addr>:<port>` and serves the application with
uvicorn on that address.

## Configuration

The built-in defaults:

| Setting                | Default                 |
|------------------------|-------------------------|
| `server.bind_addr`     | `127.0.0.1`             |
| `server.port`          | `3000`                  |
| `oidc.external_url`    | `http://localhost:3000` |
| `postgres.host`        | `localhost`             |
| `postgres.port`        | `5432`                  |
| `postgres.username`    | `postgres`              |
| `postgres.password`    | `secret`                |
| `postgres.database`    | `oidc_server`           |

An example YAML file:

```yaml
server:
  bind_addr: "0.0.0.0"
  port: 8080
oidc:
  external_url: "https://auth.example.com"
postgres:
  host: localhost
  username: user
  password: password
```

If a section is present but leaves out a setting, that setting keeps its
current value. A section that is left out entirely is read as that section's
defaults. Ports must be integers from 0 to 65535. An empty file changes nothing.

Every environment variable name has the same form. It starts with the prefix
`VAULTON__`, followed by the setting's path with dots replaced by double
underscores, all in upper case:

```
VAULTON__SERVER__PORT=9000
VAULTON__OIDC__EXTERNAL_URL=https://auth.example.com
```

Only the settings listed above are read. A value is read as an integer if it
looks like one, then as a float, then as `true`/`false`, and otherwise as a
string. A value that does not fit its setting raises
`vaulton.env_parser.DeserializeError`. For example, a non-numeric port does
this.

## Using the configuration from Python

```python
from vaulton.env import MemoryEnv
from vaulton.fs import MemoryFileSystem
from vaulton.sources import ConfigBuilder

fs = MemoryFileSystem().with_file("config.yaml", "server:\n  port: 8080\n")
env = MemoryEnv({"VAULTON__SERVER__BIND_ADDR": "0.0.0.0"})

config = ConfigBuilder(fs, env).with_yaml_file("config.yaml").build()
assert config.server.port == 8080
assert config.server.bind_addr == "0.0.0.0"
```

- `ConfigBuilder()` with no arguments reads files from disk
  (`LocalFileSystem`) and variables from the process environment
  (`SystemEnv`).
- `YamlConfigSource` and `EnvConfigSource` can also be applied one at a time
  to a `Config`.
- `Config.merge` lays one configuration over another: a setting that is `None`
  in the other configuration leaves the current value unchanged.
- `Config.from_mapping` builds a `Config` from nested dictionaries.
- `config_paths(Config)` lists every setting as a `ConfigPath`.
- `PostgresConfig.connection_string()` returns a `postgres://` URL. It raises
  `ValueError` if a setting is unset.

## Endpoints

- `GET /health` returns `OK`.
- `GET /.well-known/openid-configuration` returns the discovery document. Every
  endpoint URL in it is built from `oidc.external_url`.
- `GET /authorize` validates an authorization request. The request must have
  `client_id`, `redirect_uri` and `response_type`; without them the response is
  400. The endpoint then checks, in order:
  1. `response_type=code`;
  2. a `code_challenge_method` of `S256`, if one is given;
  3. the `openid` scope, where the scope defaults to `openid`;
  4. a known client;
  5. a redirect URI registered for that client;
  6. scopes the client is allowed.

  A valid request is stored with a random 32-character id. The response is a
  307 redirect to `/login?request_id=<id>`. An invalid request gets a 303
  redirect back to its `redirect_uri`, with `error`, `error_description` and
  `state` (if given) added to the query string. If `redirect_uri` is not an
  absolute URL, the response is 500.

To register clients or supply another request store, build the application
yourself:

```python
from vaulton.config import Config
from vaulton.domain import Client
from vaulton.server import create_app

clients = {
    "demo": Client(
        id="demo",
        redirect_uris=["https://app.example.com/callback"],
        allowed_scopes=["openid", "email"],
    )
}

async def find_client(client_id):
    return clients.get(client_id)

app = create_app(Config(), find_client=find_client)
```

The `OAuthError`, `openid_configuration` and `authorize` functions (in
`vaulton.oauth_error`, `vaulton.discovery` and `vaulton.auth`) can also be used
without the web application.

## What vaulton does not do

- **No client registry.** The `vaulton` command starts with no registered
  clients. Every well-formed authorization request it receives is redirected
  back with `invalid_client`. Clients exist only through `create_app(...,
  find_client=...)` as shown above.
- **No persistent storage.** Pending authorization requests are kept in
  memory and lost on restart. The `postgres` settings only produce a
  connection string; nothing connects to a database. `User`, `Role` and
  `UserRole` in `vaulton.domain` are plain records with no storage behind them.
- **No further endpoints.** There is no `/login` page, no token, userinfo or
  JWKS endpoint, and no user or client management API, although the discovery
  document lists URLs for some of them. No tokens are issued.