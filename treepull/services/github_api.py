"""
Service for talking to GitHub: the recursive tree listing and raw file content.
"""

from typing import Dict, List, Optional
from urllib.parse import quote

import httpx
from github import Auth, Github

from ..models import RepositoryCoordinate, TreeEntry
from ..infrastructure.error_handler import ContentNotFoundError, handle_api_error
from ..infrastructure.logger import logger


DEFAULT_API_URL = "https://api.github.com"
RAW_CONTENT_URL = "https://raw.githubusercontent.com/{owner}/{repo}/{branch}/{path}"


class GitHubAPIService:
    """
    Authenticated access to the two GitHub endpoints treepull needs.

    The tree listing goes through PyGithub; raw file bodies are streamed
    through an httpx client carrying the same token.
    """

    def __init__(
        self,
        auth_token: str,
        api_url: str = DEFAULT_API_URL,
        raw_url_template: str = RAW_CONTENT_URL,
        http_client: Optional[httpx.Client] = None
    ):
        self.auth_token = auth_token
        self.api_url = api_url
        self.raw_url_template = raw_url_template
        self.github_client = Github(auth=Auth.Token(auth_token), base_url=api_url)
        self.http_client = http_client or httpx.Client(
            headers=self.auth_headers,
            follow_redirects=True
        )

    @property
    def auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.auth_token}"}

    def raw_url(self, coordinate: RepositoryCoordinate, path: str) -> str:
        """Build the raw-content URL of ``path`` at the coordinate's branch."""

        return self.raw_url_template.format(
            owner=quote(coordinate.owner, safe=""),
            repo=quote(coordinate.name, safe=""),
            branch=quote(coordinate.branch, safe="/"),
            path=quote(path, safe="/")
        )

    @handle_api_error
    def get_repository_tree(self, coordinate: RepositoryCoordinate) -> List[TreeEntry]:
        """
        Fetch the full recursive tree listing in one API call.

        Args:
            coordinate: Repository and branch to list

        Returns:
            Entries in the order the API reported them

        Raises:
            TransportError: On any API, network or authentication failure
        """
        logger.debug(f"Listing tree of {coordinate}")

        # lazy: skip the repository metadata call, only the tree is needed
        repository = self.github_client.get_repo(coordinate.full_name, lazy=True)
        tree = repository.get_git_tree(coordinate.branch, recursive=True)

        entries = [
            TreeEntry(path=item.path, type=item.type, size=item.size, sha=item.sha)
            for item in tree.tree
        ]
        logger.debug(f"Tree of {coordinate} has {len(entries)} entries")
        return entries

    @handle_api_error
    def open_raw_stream(self, url: str) -> httpx.Response:
        """
        Send an authenticated GET and return the response unread.

        The caller owns the response and must close it.
        """
        request = self.http_client.build_request("GET", url)
        return self.http_client.send(request, stream=True)

    @handle_api_error
    def check_response(self, response: httpx.Response) -> None:
        """Raise a TransportError for any non-2xx response, naming the URL on 404."""

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise ContentNotFoundError(str(e.request.url), e) from e
            raise

    def close(self) -> None:
        self.http_client.close()
        self.github_client.close()


__all__ = [
    "DEFAULT_API_URL",
    "RAW_CONTENT_URL",
    "GitHubAPIService",
]
