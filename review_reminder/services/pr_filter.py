"""
Pull Request Filter Module

Selects the pull requests a reminder should mention. Both filters are
pure: they keep the input order and return new lists.
"""

from typing import List, Optional, Sequence

from review_reminder.models import PullRequest


def select_reviewable(pull_requests: Sequence[PullRequest]) -> List[PullRequest]:
    """Keep pull requests with at least one pending requested reviewer."""
    return [pr for pr in pull_requests if pr.requested_reviewers]


def exclude_by_label(
    pull_requests: Sequence[PullRequest],
    label_name: Optional[str]
) -> List[PullRequest]:
    """
    Drop pull requests carrying the ignore label.
    
    Label names are matched exactly and case-sensitively. An empty or
    missing label disables the filter.
    """
    if not label_name:
        return list(pull_requests)
    return [pr for pr in pull_requests if label_name not in pr.labels]
