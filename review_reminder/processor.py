"""
Reminder Processor Module

This module orchestrates one reminder run:
fetch -> select reviewable -> drop ignored label -> group -> compose ->
format -> deliver.

Design Decisions:
- Parse the user mapping before any network call so bad config fails fast
- Skip delivery when nothing is pending or the provider is unknown
- Let fetch and delivery failures propagate unchanged to the caller
"""

from typing import Optional

from review_reminder.config import Settings, get_settings
from review_reminder.logging_config import get_logger
from review_reminder.models import NotificationPayload, Provider
from review_reminder.services.aggregator import group_by_reviewer
from review_reminder.services.composer import get_message_composer
from review_reminder.services.formatter import build_payload
from review_reminder.services.github_client import GitHubClient
from review_reminder.services.mapping_parser import parse_user_mapping
from review_reminder.services.notifier import WebhookNotifier
from review_reminder.services.pr_filter import exclude_by_label, select_reviewable

logger = get_logger(__name__)


class ReminderProcessor:
    """
    Runs the reminder pipeline once.
    
    Usage:
        processor = ReminderProcessor()
        payload = await processor.run()
    """
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        github_client: Optional[GitHubClient] = None,
        notifier: Optional[WebhookNotifier] = None
    ):
        """
        Initialize the processor.
        
        Args:
            settings: Reminder settings, defaults to the cached settings
            github_client: Client used to fetch pull requests
            notifier: Client used to deliver the payload
        """
        self.settings = settings or get_settings()
        self.github_client = github_client or GitHubClient(self.settings)
        self.notifier = notifier or WebhookNotifier(self.settings)
        self.composer = get_message_composer()
    
    async def run(self) -> Optional[NotificationPayload]:
        """
        Execute one reminder run.
        
        Returns:
            The payload that was delivered, None when nothing was sent
        """
        reviewer_map = parse_user_mapping(self.settings.github_provider_map)
        
        pull_requests = await self.github_client.get_open_pull_requests()
        
        reviewable = select_reviewable(pull_requests)
        pending = exclude_by_label(reviewable, self.settings.ignore_label)
        logger.info(
            "Pull requests waiting for reviews",
            count=len(pending),
            ignore_label=self.settings.ignore_label or None
        )
        
        if not pending:
            return None
        
        review_group = group_by_reviewer(pending)
        provider = Provider.from_tag(self.settings.provider)
        text = self.composer.render_text(review_group, reviewer_map, provider)
        mentions = self.composer.resolve_mentions(reviewer_map, review_group)
        
        payload = build_payload(
            provider,
            text,
            mentions=mentions,
            channel=self.settings.channel,
            username=self.settings.slack_username
        )
        if payload is None:
            logger.warning(
                "Unsupported provider, no notification sent",
                provider=self.settings.provider
            )
            return None
        
        await self.notifier.send(payload)
        return payload
