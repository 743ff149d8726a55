"""Server configuration: typed sections, defaults, merging and path metadata."""

import dataclasses
import types
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any, List, Optional, TypeVar, Union, get_args, get_origin

from vaulton.deserialize import Bounds, deserialize

__all__ = [
    "Config",
    "ConfigPath",
    "OIDCConfig",
    "PostgresConfig",
    "ServerConfig",
    "config_paths",
    "merge_value",
]

T = TypeVar("T")

Port = Optional[Annotated[int, Bounds(0, 65535)]]

PASSWORD = "secret"

_NONE_TYPE = type(None)


@dataclass(frozen=True)
class ConfigPath:
    """One configurable setting, addressed by a dotted path."""

    path: str
    type: Any
    is_optional: bool


def merge_value(current: Optional[T], other: Optional[T]) -> Optional[T]:
    """Return ``other`` when it is set, otherwise keep ``current``."""
    return current if other is None else other


def _merge_fields(target: Any, other: Any) -> None:
    for item in dataclasses.fields(target):
        setattr(
            target,
            item.name,
            merge_value(getattr(target, item.name), getattr(other, item.name)),
        )


@dataclass
class ServerConfig:
    """Network settings of the server."""

    bind_addr: Optional[str] = "127.0.0.1"
    port: Port = 3000

    def merge(self, other: "ServerConfig") -> None:
        _merge_fields(self, other)


@dataclass
class OIDCConfig:
    """OpenID Connect settings; ``external_url`` is used in discovery URLs."""

    external_url: Optional[str] = "http://localhost:3000"

    def merge(self, other: "OIDCConfig") -> None:
        _merge_fields(self, other)


@dataclass
class PostgresConfig:
    """PostgreSQL connection settings."""

    host: Optional[str] = "localhost"
    port: Port = 5432
    username: Optional[str] = "postgres"
    password: Optional[str] = PASSWORD
    database: Optional[str] = "oidc_server"

    def merge(self, other: "PostgresConfig") -> None:
        _merge_fields(self, other)

    def connection_string(self) -> str:
        """Return a ``postgres://`` URL; every setting must be present."""
        missing = [
            item.name
            for item in dataclasses.fields(self)
            if getattr(self, item.name) is None
        ]
        if missing:
            raise ValueError(f"postgres settings not set: {', '.join(missing)}")
        return (
            f"postgres://{self.username}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


@dataclass
class Config:
    """Top-level configuration of the server."""

    server: ServerConfig = field(default_factory=ServerConfig)
    oidc: OIDCConfig = field(default_factory=OIDCConfig)
    postgres: PostgresConfig = field(default_factory=PostgresConfig)

    def merge(self, other: "Config") -> None:
        self.server.merge(other.server)
        self.oidc.merge(other.oidc)
        self.postgres.merge(other.postgres)

    @classmethod
    def from_mapping(cls, data: Mapping) -> "Config":
        """Build a config from nested data.

        Missing sections take their defaults; missing settings inside a given
        section are ``None`` so that merging leaves the current value alone.
        Raises ``FieldError`` when the data does not fit.
        """
        return deserialize(data, cls)


def _optional_inner(hint: Any) -> Any:
    while get_origin(hint) is Annotated:
        hint = get_args(hint)[0]
    if get_origin(hint) in (Union, types.UnionType):
        args = get_args(hint)
        if _NONE_TYPE in args:
            variants = [arg for arg in args if arg is not _NONE_TYPE]
            inner = variants[0] if len(variants) == 1 else Union[tuple(variants)]
            while get_origin(inner) is Annotated:
                inner = get_args(inner)[0]
            return inner
    return None


def config_paths(cls: type) -> List[ConfigPath]:
    """List every setting of a configuration dataclass, sections first."""
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"{cls!r} is not a configuration dataclass")
    paths: List[ConfigPath] = []
    for item in dataclasses.fields(cls):
        hint = item.type
        if isinstance(hint, str):
            raise TypeError(
                f"field {cls.__name__}.{item.name} has a string annotation"
            )
        inner = _optional_inner(hint)
        if inner is not None:
            paths.append(ConfigPath(item.name, inner, True))
            continue
        paths.append(ConfigPath(item.name, hint, False))
        if isinstance(hint, type) and dataclasses.is_dataclass(hint):
            paths.extend(
                dataclasses.replace(nested, path=f"{item.name}.{nested.path}")
                for nested in config_paths(hint)
            )
    return paths