"""
Reviewer Aggregator Module

Groups pending pull requests under each of their requested reviewers.
"""

from typing import Sequence

from review_reminder.models import PullRequest, ReviewGroup


def group_by_reviewer(pull_requests: Sequence[PullRequest]) -> ReviewGroup:
    """
    Group pull requests by requested reviewer.
    
    A pull request with several reviewers is listed under each of them.
    Reviewers keep the order in which they are first seen, and each
    reviewer's pull requests keep the input order.
    """
    groups: ReviewGroup = {}
    for pr in pull_requests:
        for reviewer in pr.requested_reviewers:
            groups.setdefault(reviewer, []).append(pr)
    return groups
