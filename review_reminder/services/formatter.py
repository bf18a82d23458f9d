"""
Payload Formatter Module

Wraps the reminder text into the webhook payload of each provider.

Design Decisions:
- Slack gets a flat message: text, display name and optional channel
- Teams gets an adaptive card; mentions appear both as <at> tokens in the
  text and as declared entities, since Teams validates one against the other
- Provider dispatch is a table keyed by Provider, so a new provider is
  added by extending the enum and the table
"""

from typing import Callable, Dict, List, Optional

from review_reminder.models import (
    AdaptiveCard,
    Mention,
    NotificationPayload,
    Provider,
    SlackMessage,
    TeamsAttachment,
    TeamsCardProperties,
    TeamsMentioned,
    TeamsMentionEntity,
    TeamsMessage,
    TextBlock,
)

DEFAULT_SLACK_USERNAME = "Pull Request reviews reminder"


def format_flat(
    channel: Optional[str],
    text: str,
    username: str = DEFAULT_SLACK_USERNAME
) -> SlackMessage:
    """Build a Slack incoming-webhook message, omitting an empty channel."""
    return SlackMessage(channel=channel or None, username=username, text=text)


def format_with_mentions(text: str, mentions: List[Mention]) -> TeamsMessage:
    """
    Build a Teams adaptive card message.
    
    Args:
        text: Reminder text containing <at>login</at> tokens
        mentions: Reviewers to declare as mention entities
        
    Returns:
        TeamsMessage with one card attachment
    """
    entities = [
        TeamsMentionEntity(
            text=f"<at>{mention.display_handle}</at>",
            mentioned=TeamsMentioned(
                id=mention.destination_id,
                name=mention.display_handle
            ),
        )
        for mention in mentions
    ]
    card = AdaptiveCard(
        body=[TextBlock(text=text)],
        msteams=TeamsCardProperties(entities=entities),
    )
    return TeamsMessage(attachments=[TeamsAttachment(content=card)])


def _slack_payload(
    text: str,
    mentions: List[Mention],
    channel: Optional[str],
    username: str
) -> NotificationPayload:
    return format_flat(channel, text, username=username)


def _msteams_payload(
    text: str,
    mentions: List[Mention],
    channel: Optional[str],
    username: str
) -> NotificationPayload:
    return format_with_mentions(text, mentions)


PROVIDER_FORMATTERS: Dict[Provider, Callable[..., NotificationPayload]] = {
    Provider.SLACK: _slack_payload,
    Provider.MSTEAMS: _msteams_payload,
}


def build_payload(
    provider: Optional[Provider],
    text: str,
    mentions: Optional[List[Mention]] = None,
    channel: Optional[str] = None,
    username: str = DEFAULT_SLACK_USERNAME
) -> Optional[NotificationPayload]:
    """
    Build the payload for a provider.
    
    Returns:
        The provider's payload, or None when the provider is unknown
    """
    formatter = PROVIDER_FORMATTERS.get(provider)
    if formatter is None:
        return None
    return formatter(text, mentions or [], channel, username)
