"""
Message Composer Module

Renders the reminder text and resolves which reviewers can be mentioned
on the destination platform.

Design Decisions:
- One line per reviewer, in the order reviewers were first seen
- The provider only changes mention syntax, title escaping and the line
  break, never which pull requests are listed or in what order
- Reviewers without a mapping entry are written as @login
"""

from typing import Callable, Dict, List, Optional

from review_reminder.logging_config import get_logger
from review_reminder.models import (
    Mention,
    Provider,
    PullRequest,
    ReviewerMap,
    ReviewGroup,
)

logger = get_logger(__name__)


# Mention syntax per provider, called with (login, destination_id)
MENTION_SYNTAX: Dict[Provider, Callable[[str, str], str]] = {
    Provider.SLACK: lambda login, user_id: f"<@{user_id}>",
    Provider.MSTEAMS: lambda login, user_id: f"<at>{login}</at>",
}

# Slack treats <...> as control sequences, so &, < and > must be escaped
TITLE_ESCAPES: Dict[Provider, Callable[[str], str]] = {
    Provider.SLACK: lambda title: (
        title.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    ),
}

# Teams renders Markdown, where a bare newline does not break the line
LINE_BREAKS: Dict[Provider, str] = {
    Provider.SLACK: "\n",
    Provider.MSTEAMS: "  \n",
}


class MessageComposer:
    """
    Builds the human-readable reminder.
    
    Usage:
        composer = MessageComposer()
        text = composer.render_text(review_group, reviewer_map, Provider.SLACK)
        mentions = composer.resolve_mentions(reviewer_map, review_group)
    """
    
    def render_text(
        self,
        review_group: ReviewGroup,
        reviewer_map: ReviewerMap,
        provider: Optional[Provider]
    ) -> str:
        """
        Render one reminder line per reviewer.
        
        Args:
            review_group: Pull requests grouped by reviewer
            reviewer_map: GitHub login to destination user id
            provider: Destination platform, None when unknown
            
        Returns:
            The message text
        """
        lines = [
            self._render_line(
                self._mention(reviewer, reviewer_map, provider),
                pull_requests,
                TITLE_ESCAPES.get(provider, str)
            )
            for reviewer, pull_requests in review_group.items()
            if pull_requests
        ]
        
        logger.debug(
            "Rendered reminder text",
            reviewers=len(lines),
            provider=provider.value if provider else None
        )
        
        return LINE_BREAKS.get(provider, "\n").join(lines)
    
    def resolve_mentions(
        self,
        reviewer_map: ReviewerMap,
        review_group: ReviewGroup
    ) -> List[Mention]:
        """
        List the reviewers that must be declared as mention entities.
        
        Only reviewers with a mapping entry and at least one pending pull
        request are returned; the others appear in the text as @login.
        """
        return [
            Mention(destination_id=reviewer_map[reviewer], display_handle=reviewer)
            for reviewer, pull_requests in review_group.items()
            if pull_requests and reviewer in reviewer_map
        ]
    
    @staticmethod
    def _mention(
        reviewer: str,
        reviewer_map: ReviewerMap,
        provider: Optional[Provider]
    ) -> str:
        syntax = MENTION_SYNTAX.get(provider)
        user_id = reviewer_map.get(reviewer)
        if syntax is None or not user_id:
            return f"@{reviewer}"
        return syntax(reviewer, user_id)
    
    @staticmethod
    def _render_line(
        mention: str,
        pull_requests: List[PullRequest],
        escape: Callable[[str], str]
    ) -> str:
        if len(pull_requests) == 1:
            pr = pull_requests[0]
            return f'Hey {mention}, the PR "{escape(pr.title)}" is waiting for your review: {pr.url}'
        
        listed = ", ".join(f'"{escape(pr.title)}" {pr.url}' for pr in pull_requests)
        return (
            f"Hey {mention}, {len(pull_requests)} PRs are waiting for your review: "
            f"{listed}"
        )


# Singleton instance
_composer_instance: Optional[MessageComposer] = None


def get_message_composer() -> MessageComposer:
    """Get the singleton MessageComposer instance."""
    global _composer_instance
    if _composer_instance is None:
        _composer_instance = MessageComposer()
    return _composer_instance
