"""
Configuration models for treepull runs.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .github import RepositoryCoordinate
from ..infrastructure.error_handler import ConfigurationError


TOKEN_ENV_VAR = "GITHUB_TOKEN"


@dataclass(frozen=True)
class DownloadConfig:
    """
    Everything one run needs, fixed before the first network call.

    An empty ``scope`` selects the whole repository and an empty
    ``destination`` means the current directory.
    """

    coordinate: RepositoryCoordinate
    token: str
    scope: str = ""
    destination: str = ""

    chunk_size: int = 8192
    dry_run: bool = False
    verbose: bool = False

    def __post_init__(self) -> None:
        if not self.token:
            raise ConfigurationError(f"Please set '{TOKEN_ENV_VAR}' first.")
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")


def load_token(environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Read the API token from the environment.

    Raises:
        ConfigurationError: If the variable is not set
    """
    if environ is None:
        environ = os.environ
    token = environ.get(TOKEN_ENV_VAR)
    if token is None:
        raise ConfigurationError(f"Please set '{TOKEN_ENV_VAR}' first.")
    return token


__all__ = [
    "TOKEN_ENV_VAR",
    "DownloadConfig",
    "load_token",
]
