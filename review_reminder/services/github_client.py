"""
GitHub API Client Module

Fetches the open pull requests of the configured repository.

Design Decisions:
- Use httpx for async HTTP requests
- Parse every record into PullRequest before it reaches the filters
- A single request: no pagination and no retries
"""

from typing import Dict, List, Optional

import httpx

from review_reminder.config import Settings, get_settings
from review_reminder.logging_config import get_logger
from review_reminder.models import PullRequest

logger = get_logger(__name__)


class GitHubAPIError(Exception):
    """Custom exception for GitHub API errors."""
    def __init__(self, message: str, status_code: int = None, response_body: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class GitHubClient:
    """
    Async GitHub API client.
    
    Usage:
        client = GitHubClient()
        pull_requests = await client.get_open_pull_requests()
    """
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the GitHub client.
        
        Args:
            settings: Reminder settings, defaults to the cached settings
            transport: Optional httpx transport, used by tests
        """
        self.settings = settings or get_settings()
        self._transport = transport
    
    def _get_headers(self) -> Dict[str, str]:
        """Get request headers, authenticated when a token is configured."""
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.settings.github_token:
            headers["Authorization"] = f"Bearer {self.settings.github_token}"
        return headers
    
    async def get_open_pull_requests(self) -> List[PullRequest]:
        """
        Fetch the open pull requests of the repository.
        
        Returns:
            Pull requests in the order GitHub returned them
            
        Raises:
            GitHubAPIError: If GitHub answers with an error status
            MalformedRecordError: If a record lacks required fields
            httpx.HTTPError: If the request itself fails
        """
        logger.info(
            "Getting open pull requests",
            repo=self.settings.github_repository
        )
        
        async with httpx.AsyncClient(
            timeout=self.settings.http_timeout,
            transport=self._transport
        ) as client:
            response = await client.get(
                self.settings.pulls_endpoint,
                headers=self._get_headers()
            )
        
        if response.status_code >= 400:
            error_body = response.text
            logger.error(
                "GitHub API error",
                status_code=response.status_code,
                repo=self.settings.github_repository,
                error=error_body[:500]
            )
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code}",
                status_code=response.status_code,
                response_body=error_body
            )
        
        records = response.json()
        if not isinstance(records, list):
            raise GitHubAPIError(
                "GitHub API returned an unexpected body for the pull request list",
                status_code=response.status_code,
                response_body=response.text
            )
        
        pull_requests = [PullRequest.from_api(record) for record in records]
        
        logger.info(
            "Fetched open pull requests",
            count=len(pull_requests)
        )
        
        return pull_requests
