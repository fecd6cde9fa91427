"""
Error hierarchy and error translation helpers for treepull.

Nothing here retries. Errors are translated into the hierarchy below,
surfaced to the caller, and reported once at the top level.
"""

from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Iterator, List, Optional, Type, TypeVar

import httpx
import requests
from github import GithubException

from .logger import logger


T = TypeVar("T")


####
##      EXCEPTION CLASSES
#####
class TreepullError(Exception):
    """Base exception for every failure treepull reports."""

    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.original_error is not None:
            return f"{self.message} (Original: {self.original_error})"
        return self.message


class ConfigurationError(TreepullError):
    """A required flag or the API token is missing."""


class NotFoundError(TreepullError):
    """The requested scope path is not in the repository tree."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"can not find {path} in repo")


class TransportError(TreepullError):
    """Network or HTTP failure while listing or downloading."""


class AuthenticationError(TransportError):
    """The token was rejected."""


class RateLimitError(TransportError):
    """The API refused the call because the rate limit is exhausted."""


class RepositoryNotFoundError(TransportError):
    """The repository or branch does not exist (or is not visible)."""


class ContentNotFoundError(TransportError):
    """A raw file URL answered 404."""

    def __init__(self, url: str, original_error: Optional[BaseException] = None):
        self.url = url
        super().__init__(f"File not found at {url}", original_error)


class FilesystemError(TreepullError):
    """Creating a directory, opening a file, or writing to it failed."""


class CombinedError(TreepullError):
    """A primary failure plus the failure of the cleanup that followed it."""

    def __init__(self, errors: List[BaseException]):
        self.errors = list(errors)
        super().__init__("; ".join(str(error) for error in self.errors))

    @property
    def primary(self) -> BaseException:
        return self.errors[0]

    def __str__(self) -> str:
        return self.message


####
##      ERROR COMBINATION
#####
def combine_errors(*errors: Optional[BaseException]) -> Optional[BaseException]:
    """
    Merge the errors of an operation and of its cleanup into one.

    ``None`` entries are ignored and nested CombinedErrors are flattened.

    Returns:
        None when there is no error, the error itself when there is one,
        a CombinedError otherwise
    """
    flat: List[BaseException] = []
    for error in errors:
        if error is None:
            continue
        if isinstance(error, CombinedError):
            flat.extend(error.errors)
        else:
            flat.append(error)

    if not flat:
        return None
    if len(flat) == 1:
        return flat[0]
    return CombinedError(flat)


def _close_quietly(
    resource: Any,
    error_cls: Type[TreepullError],
    description: str
) -> Optional[TreepullError]:
    """Close ``resource`` and hand back any failure instead of raising it."""

    try:
        resource.close()
    except TreepullError as e:
        return e
    except Exception as e:
        return error_cls(f"Failed to close {description}", e)
    return None


@contextmanager
def closing_resource(
    resource: T,
    error_cls: Type[TreepullError],
    description: str
) -> Iterator[T]:
    """
    Close ``resource`` on every exit path.

    A close failure after a successful body is raised as ``error_cls``.
    A close failure after a failed body is combined with the body's error
    so that both reach the caller.

    Args:
        resource: Anything with a ``close()`` method
        error_cls: Error class used to wrap close failures
        description: What the resource is, for error messages
    """
    try:
        yield resource
    except Exception as e:
        close_error = _close_quietly(resource, error_cls, description)
        if close_error is not None:
            raise combine_errors(e, close_error) from e
        raise
    except BaseException:
        resource.close()
        raise
    else:
        close_error = _close_quietly(resource, error_cls, description)
        if close_error is not None:
            raise close_error


####
##      API ERROR TRANSLATION
#####
def _is_rate_limited(text: str) -> bool:
    lowered = text.lower()
    return "rate limit" in lowered or "429" in lowered


def _translate_status(status: int, message: str, error: Exception) -> TransportError:
    if status == 429 or (status == 403 and _is_rate_limited(message)):
        return RateLimitError(f"GitHub API rate limit exceeded: {message}", error)
    if status in (401, 403):
        return AuthenticationError(f"GitHub authentication failed: {message}", error)
    if status == 404:
        return RepositoryNotFoundError(f"Repository or branch not found: {message}", error)
    return TransportError(f"GitHub API error ({status}): {message}", error)


def handle_api_error(func: Callable[..., T]) -> Callable[..., T]:
    """
    Decorator translating client-library exceptions into TransportErrors.

    Our own errors pass through untouched.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return func(*args, **kwargs)
        except TreepullError:
            raise
        except GithubException as e:
            raise _translate_status(e.status, str(e), e) from e
        except httpx.HTTPStatusError as e:
            raise _translate_status(e.response.status_code, str(e), e) from e
        except httpx.HTTPError as e:
            if _is_rate_limited(str(e)):
                raise RateLimitError(f"Rate limit exceeded: {e}", e) from e
            raise TransportError(f"HTTP request failed: {e}", e) from e
        except requests.RequestException as e:
            raise TransportError(f"HTTP request failed: {e}", e) from e
        except Exception as e:
            logger.debug(f"Unexpected error in {func.__name__}: {e!r}")
            raise TransportError(f"Unexpected error: {e}", e) from e

    return wrapper


__all__ = [
    "TreepullError",
    "ConfigurationError",
    "NotFoundError",
    "TransportError",
    "AuthenticationError",
    "RateLimitError",
    "RepositoryNotFoundError",
    "ContentNotFoundError",
    "FilesystemError",
    "CombinedError",
    "combine_errors",
    "closing_resource",
    "handle_api_error",
]
