"""Configuration sources (YAML file, environment) and the builder that layers them."""

from __future__ import annotations

from abc import ABC, abstractmethod

import yaml

from vaulton.config import Config, config_paths
from vaulton.env import Env, EnvError, SystemEnv
from vaulton.env_parser import from_iter
from vaulton.fs import FileSystem, LocalFileSystem, PathLike

__all__ = ["ConfigBuilder", "ConfigSource", "EnvConfigSource", "YamlConfigSource"]

DEFAULT_ENV_PREFIX = "VAULTON__"


class ConfigSource(ABC):
    """A place settings can be read from and applied onto a ``Config``."""

    @abstractmethod
    def apply(self, config: Config) -> None:
        """Merge the settings of this source into ``config`` in place."""


class YamlConfigSource(ConfigSource):
    """Settings read from a YAML file."""

    def __init__(self, path: PathLike, fs: FileSystem | None = None) -> None:
        self.path = path
        self.fs = fs if fs is not None else LocalFileSystem()

    def apply(self, config: Config) -> None:
        """Read, parse and merge the file.

        Raises ``OSError`` when the file cannot be read and ``ValueError``
        when its content is not a valid configuration document.
        """
        contents = self.fs.read_to_string(self.path)
        try:
            data = yaml.safe_load(contents)
        except yaml.YAMLError as error:
            raise ValueError(f"invalid YAML in {self.path}: {error}") from error
        if data is None:
            data = {}
        config.merge(Config.from_mapping(data))


class EnvConfigSource(ConfigSource):
    """Settings read from variables such as ``VAULTON__SERVER__PORT``."""

    def __init__(self, env: Env | None = None, prefix: str = DEFAULT_ENV_PREFIX) -> None:
        self.env = env if env is not None else SystemEnv()
        self.prefix = prefix

    def _collect(self) -> dict[str, str]:
        found: dict[str, str] = {}
        for setting in config_paths(Config):
            key = setting.path.replace(".", "__").upper()
            try:
                found[key] = self.env.get_var(f"{self.prefix}{key}")
            except EnvError:
                continue
        return found

    def apply(self, config: Config) -> None:
        """Merge every known setting found in the environment.

        Raises ``ParserError`` when the values do not fit the configuration.
        """
        found = self._collect()
        if not found:
            return
        config.merge(from_iter(found, Config))


class ConfigBuilder:
    """Builds a ``Config`` from defaults, an optional YAML file and the environment."""

    def __init__(self, fs: FileSystem | None = None, env: Env | None = None) -> None:
        self.fs = fs if fs is not None else LocalFileSystem()
        self.env = env if env is not None else SystemEnv()
        self.yaml_path: PathLike | None = None

    def with_yaml_file(self, path: PathLike) -> ConfigBuilder:
        """Use the YAML file at ``path``; returns the builder for chaining."""
        self.yaml_path = path
        return self

    def build(self) -> Config:
        """Return defaults overlaid by the YAML file, then by the environment."""
        config = Config()
        if self.yaml_path is not None:
            YamlConfigSource(self.yaml_path, self.fs).apply(config)
        EnvConfigSource(self.env).apply(config)
        return config