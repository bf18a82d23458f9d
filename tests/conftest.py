"""
Test Configuration

Pytest configuration and fixtures for the test suite.
"""

import json
import logging
from typing import Callable, List

import httpx
import pytest
import structlog

from review_reminder.config import Settings
from review_reminder.models import PullRequest


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    """Build settings without reading the environment or a .env file."""
    def _make(**overrides) -> Settings:
        values = {
            "webhook_url": "https://hooks.example.com/services/T000/B000/XXXX",
            "provider": "slack",
            "channel": "",
            "github_provider_map": "",
            "ignore_label": "",
            "github_token": "ghp_testtoken",
            "github_repository": "owner/repo",
            "github_api_url": "https://api.github.com",
            "log_level": "INFO",
            "log_json_format": False,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)
    return _make


@pytest.fixture
def settings(make_settings) -> Settings:
    return make_settings()


@pytest.fixture
def sample_pr_record() -> dict:
    """Sample element of the GitHub /pulls response."""
    return {
        "id": 123456789,
        "number": 1,
        "state": "open",
        "title": "Fix bug",
        "html_url": "https://github.com/owner/repo/pull/1",
        "url": "https://api.github.com/repos/owner/repo/pulls/1",
        "user": {"login": "carol", "id": 3, "type": "User"},
        "requested_reviewers": [{"login": "alice", "id": 1, "type": "User"}],
        "requested_teams": [],
        "labels": [],
        "draft": False,
    }


@pytest.fixture
def pull_requests() -> List[PullRequest]:
    """Three open pull requests in fetch order."""
    return [
        PullRequest(
            number=1,
            title="Fix bug",
            url="https://github.com/owner/repo/pull/1",
            author="carol",
            requested_reviewers=["alice"],
        ),
        PullRequest(
            number=2,
            title="Add docs",
            url="https://github.com/owner/repo/pull/2",
            author="carol",
            requested_reviewers=["bob", "alice"],
            labels=["documentation"],
        ),
        PullRequest(
            number=3,
            title="Draft idea",
            url="https://github.com/owner/repo/pull/3",
            author="dave",
        ),
    ]


class RecordingTransport(httpx.MockTransport):
    """Mock transport that answers GitHub and webhook calls and keeps the requests."""
    
    def __init__(self, pulls: list, pulls_status: int = 200, webhook_status: int = 200):
        self.requests: List[httpx.Request] = []
        self.pulls = pulls
        self.pulls_status = pulls_status
        self.webhook_status = webhook_status
        super().__init__(self._handle)
    
    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET":
            if self.pulls_status >= 400:
                return httpx.Response(self.pulls_status, json={"message": "Not Found"})
            return httpx.Response(self.pulls_status, json=self.pulls)
        return httpx.Response(self.webhook_status, text="ok")
    
    @property
    def posted(self) -> List[dict]:
        """Get the JSON bodies that were posted to the webhook."""
        return [
            json.loads(request.content)
            for request in self.requests
            if request.method == "POST"
        ]


@pytest.fixture
def recording_transport() -> Callable[..., RecordingTransport]:
    return RecordingTransport


@pytest.fixture
def restore_logging():
    """Undo the global logging setup done by the entry point."""
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield
    root_logger.handlers = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()
