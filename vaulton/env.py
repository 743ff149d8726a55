"""Access to environment variables, real or in memory."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping


class EnvError(LookupError):
    """Raised when an environment variable cannot be read or written."""


class Env(ABC):
    """Interface for reading and writing environment variables."""

    @abstractmethod
    def set_var(self, key: str, value: str) -> None:
        """Set ``key`` to ``value``."""

    @abstractmethod
    def get_var(self, key: str) -> str:
        """Return the value of ``key`` or raise ``EnvError``."""

    @abstractmethod
    def remove_var(self, key: str) -> None:
        """Remove ``key`` if present."""


class SystemEnv(Env):
    """The process environment."""

    def set_var(self, key: str, value: str) -> None:
        try:
            os.environ[key] = value
        except (ValueError, OSError) as error:
            raise EnvError(f"Failed to set environment variable: {error}") from error

    def get_var(self, key: str) -> str:
        try:
            return os.environ[key]
        except KeyError:
            raise EnvError(
                f"Failed to get environment variable: environment variable not found: {key}"
            ) from None

    def remove_var(self, key: str) -> None:
        os.environ.pop(key, None)


class MemoryEnv(Env):
    """An environment held in a dictionary, independent of the process."""

    def __init__(
        self, variables: Mapping[str, str] | Iterable[tuple[str, str]] | None = None
    ) -> None:
        self._variables: dict[str, str] = dict(variables or ())

    def set_var(self, key: str, value: str) -> None:
        self._variables[key] = value

    def get_var(self, key: str) -> str:
        try:
            return self._variables[key]
        except KeyError:
            raise EnvError(
                f"Failed to get environment variable: Environment variable not found: {key}"
            ) from None

    def remove_var(self, key: str) -> None:
        self._variables.pop(key, None)