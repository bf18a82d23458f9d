"""
Data Models Module

This module defines all Pydantic models used throughout the reminder.
Strong typing ensures data integrity and provides clear contracts between components.

Design Decisions:
- Parse loosely-typed GitHub records into PullRequest at the boundary
- Keep pull requests immutable for the whole run
- Model each provider payload so the wire shape is declared in one place
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class MalformedRecordError(Exception):
    """Raised when a pull request record lacks required fields."""
    def __init__(self, message: str, record_id: Any = None):
        super().__init__(message)
        self.record_id = record_id


# =============================================================================
# Enums
# =============================================================================

class Provider(str, Enum):
    """Chat platforms a reminder can be delivered to."""
    SLACK = "slack"
    MSTEAMS = "msteams"

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> Optional["Provider"]:
        """
        Look up a provider by its configuration tag.

        Unknown tags are not an error: they resolve to None and the
        reminder has nothing to send.
        """
        try:
            return cls(tag)
        except ValueError:
            return None


# =============================================================================
# Pull Request Models
# =============================================================================

class PullRequest(BaseModel):
    """
    An open pull request as returned by the repository host.

    Attributes:
        number: Pull request number
        title: Pull request title
        url: Browser URL of the pull request
        author: Login of the user who opened it
        requested_reviewers: Logins of pending reviewers, in request order
        labels: Label names attached to the pull request
    """
    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    url: str
    author: str = ""
    requested_reviewers: Tuple[str, ...] = ()
    labels: Tuple[str, ...] = ()

    @field_validator("requested_reviewers", mode="before")
    @classmethod
    def normalize_reviewers(cls, v: Any) -> Any:
        """Accept user objects or logins, dropping repeated logins."""
        if not isinstance(v, (list, tuple)):
            return v
        logins: List[Any] = []
        for reviewer in v:
            if isinstance(reviewer, dict):
                if "login" not in reviewer:
                    raise ValueError("requested reviewer has no login")
                reviewer = reviewer["login"]
            if reviewer not in logins:
                logins.append(reviewer)
        return tuple(logins)

    @field_validator("labels", mode="before")
    @classmethod
    def normalize_labels(cls, v: Any) -> Any:
        """Accept label objects or plain label names."""
        if not isinstance(v, (list, tuple)):
            return v
        names = []
        for label in v:
            if isinstance(label, dict):
                if "name" not in label:
                    raise ValueError("label has no name")
                label = label["name"]
            names.append(label)
        return tuple(names)

    @classmethod
    def from_api(cls, record: Dict[str, Any]) -> "PullRequest":
        """
        Build a PullRequest from a raw GitHub REST record.

        Args:
            record: One element of the /pulls response

        Returns:
            Validated PullRequest

        Raises:
            MalformedRecordError: If required fields are missing or invalid
        """
        if not isinstance(record, dict):
            raise MalformedRecordError(
                f"Pull request record must be an object, got {type(record).__name__}"
            )

        number = record.get("number", record.get("id"))
        url = record.get("html_url") or record.get("url")
        required = {"number": number, "title": record.get("title"), "url": url}
        missing = [name for name, value in required.items() if value is None]
        if missing:
            raise MalformedRecordError(
                f"Pull request record is missing {', '.join(missing)}",
                record_id=number
            )

        author = record.get("user") or record.get("author") or {}
        if isinstance(author, dict):
            author = author.get("login", "")

        try:
            return cls(
                number=number,
                title=record["title"],
                url=url,
                author=author,
                requested_reviewers=record.get("requested_reviewers") or [],
                labels=record.get("labels") or [],
            )
        except ValidationError as e:
            raise MalformedRecordError(
                f"Invalid pull request record #{number}: {e}",
                record_id=number
            ) from e


# Reviewer login -> destination platform user id
ReviewerMap = Dict[str, str]

# Reviewer login -> pull requests awaiting that reviewer
ReviewGroup = Dict[str, List[PullRequest]]


class Mention(BaseModel):
    """A reviewer that can be notified through the destination platform."""
    model_config = ConfigDict(frozen=True)

    destination_id: str
    display_handle: str


# =============================================================================
# Slack Payload Models
# =============================================================================

class SlackMessage(BaseModel):
    """Incoming-webhook message for Slack."""
    channel: Optional[str] = None
    username: str
    text: str

    def to_body(self) -> Dict[str, Any]:
        """Serialize to the JSON body Slack expects."""
        return self.model_dump(exclude_none=True)


# =============================================================================
# Microsoft Teams Payload Models
# =============================================================================

class TeamsMentioned(BaseModel):
    id: str
    name: str


class TeamsMentionEntity(BaseModel):
    """
    A mention declared in the card's entity registry.

    Teams only renders an <at>name</at> token as a mention when an entity
    with the same text is declared.
    """
    type: str = "mention"
    text: str
    mentioned: TeamsMentioned


class TextBlock(BaseModel):
    type: str = "TextBlock"
    text: str
    wrap: bool = True


class TeamsCardProperties(BaseModel):
    width: str = "Full"
    entities: List[TeamsMentionEntity] = Field(default_factory=list)


class AdaptiveCard(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = "AdaptiveCard"
    body: List[TextBlock]
    schema_url: str = Field(
        default="http://adaptivecards.io/schemas/adaptive-card.json",
        alias="$schema"
    )
    version: str = "1.0"
    msteams: TeamsCardProperties = Field(default_factory=TeamsCardProperties)


class TeamsAttachment(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content_type: str = Field(
        default="application/vnd.microsoft.card.adaptive",
        alias="contentType"
    )
    content: AdaptiveCard


class TeamsMessage(BaseModel):
    """Incoming-webhook message for Microsoft Teams carrying one adaptive card."""
    type: str = "message"
    attachments: List[TeamsAttachment]

    def to_body(self) -> Dict[str, Any]:
        """Serialize to the JSON body Teams expects."""
        return self.model_dump(by_alias=True)

    @property
    def entities(self) -> List[TeamsMentionEntity]:
        """Get the mention entities declared across all cards."""
        return [
            entity
            for attachment in self.attachments
            for entity in attachment.content.msteams.entities
        ]


NotificationPayload = Union[SlackMessage, TeamsMessage]
