"""
Services Package

This package contains all service modules for the reviews reminder:
- mapping_parser: GitHub login to provider id mapping
- pr_filter: Pull request selection
- aggregator: Grouping by reviewer
- composer: Reminder text and mentions
- formatter: Provider payloads
- github_client: GitHub API client
- notifier: Webhook delivery
"""

from review_reminder.services.aggregator import group_by_reviewer
from review_reminder.services.composer import MessageComposer, get_message_composer
from review_reminder.services.formatter import build_payload, format_flat, format_with_mentions
from review_reminder.services.github_client import GitHubAPIError, GitHubClient
from review_reminder.services.mapping_parser import ConfigFormatError, parse_user_mapping
from review_reminder.services.notifier import WebhookDeliveryError, WebhookNotifier
from review_reminder.services.pr_filter import exclude_by_label, select_reviewable


__all__ = [
    "group_by_reviewer",
    "MessageComposer",
    "get_message_composer",
    "build_payload",
    "format_flat",
    "format_with_mentions",
    "GitHubAPIError",
    "GitHubClient",
    "ConfigFormatError",
    "parse_user_mapping",
    "WebhookDeliveryError",
    "WebhookNotifier",
    "exclude_by_label",
    "select_reviewable",
]
