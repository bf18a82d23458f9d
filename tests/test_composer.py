"""
Tests for the Message Composer
"""

import pytest

from review_reminder.models import Mention, Provider, PullRequest
from review_reminder.services.aggregator import group_by_reviewer
from review_reminder.services.composer import MessageComposer, get_message_composer


@pytest.fixture
def fix_bug() -> PullRequest:
    return PullRequest(
        number=1,
        title="Fix bug",
        url="https://github.com/owner/repo/pull/1",
        requested_reviewers=["alice"],
    )


class TestRenderText:
    """Test suite for MessageComposer.render_text."""
    
    def setup_method(self):
        """Set up test fixtures."""
        self.composer = MessageComposer()
    
    def test_unmapped_reviewer(self, fix_bug):
        text = self.composer.render_text(group_by_reviewer([fix_bug]), {}, Provider.SLACK)
        
        assert text == (
            'Hey @alice, the PR "Fix bug" is waiting for your review: '
            "https://github.com/owner/repo/pull/1"
        )
    
    def test_slack_mention(self, fix_bug):
        text = self.composer.render_text(
            group_by_reviewer([fix_bug]), {"alice": "U024BE7LH"}, Provider.SLACK
        )
        
        assert text.startswith("Hey <@U024BE7LH>,")
        assert "Fix bug" in text
    
    def test_teams_mention(self, fix_bug):
        text = self.composer.render_text(
            group_by_reviewer([fix_bug]), {"alice": "29:abc123"}, Provider.MSTEAMS
        )
        
        assert text.startswith("Hey <at>alice</at>,")
        assert "29:abc123" not in text
    
    def test_unknown_provider_uses_handle(self, fix_bug):
        text = self.composer.render_text(
            group_by_reviewer([fix_bug]), {"alice": "U1"}, None
        )
        
        assert text.startswith("Hey @alice,")
    
    def test_one_line_per_reviewer(self, pull_requests):
        text = self.composer.render_text(
            group_by_reviewer(pull_requests), {"alice": "U1"}, Provider.SLACK
        )
        lines = text.split("\n")
        
        assert len(lines) == 2
        assert lines[0] == (
            'Hey <@U1>, 2 PRs are waiting for your review: '
            '"Fix bug" https://github.com/owner/repo/pull/1, '
            '"Add docs" https://github.com/owner/repo/pull/2'
        )
        assert lines[1].startswith("Hey @bob, the PR \"Add docs\"")
    
    def test_teams_uses_markdown_line_breaks(self, pull_requests):
        text = self.composer.render_text(
            group_by_reviewer(pull_requests), {}, Provider.MSTEAMS
        )
        
        assert text.count("  \n") == 1
    
    def test_provider_does_not_change_content(self, pull_requests):
        group = group_by_reviewer(pull_requests)
        
        slack = self.composer.render_text(group, {}, Provider.SLACK)
        teams = self.composer.render_text(group, {}, Provider.MSTEAMS)
        
        assert slack.split("\n") == teams.split("  \n")
    
    def test_slack_escapes_title_control_characters(self):
        pr = PullRequest(
            number=4,
            title="Handle <!channel> & <b>",
            url="https://github.com/owner/repo/pull/4",
            requested_reviewers=["alice"],
        )
        
        text = self.composer.render_text(group_by_reviewer([pr]), {}, Provider.SLACK)
        
        assert '"Handle &lt;!channel&gt; &amp; &lt;b&gt;"' in text
        assert "<!channel>" not in text
    
    def test_teams_keeps_title_unchanged(self):
        pr = PullRequest(
            number=4,
            title="Handle <!channel> & <b>",
            url="https://github.com/owner/repo/pull/4",
            requested_reviewers=["alice"],
        )
        
        text = self.composer.render_text(group_by_reviewer([pr]), {}, Provider.MSTEAMS)
        
        assert '"Handle <!channel> & <b>"' in text
    
    def test_empty_group(self):
        assert self.composer.render_text({}, {}, Provider.SLACK) == ""


class TestResolveMentions:
    """Test suite for MessageComposer.resolve_mentions."""
    
    def setup_method(self):
        self.composer = MessageComposer()
    
    def test_mapped_reviewer(self, fix_bug):
        mentions = self.composer.resolve_mentions(
            {"alice": "29:abc123"}, group_by_reviewer([fix_bug])
        )
        
        assert mentions == [Mention(destination_id="29:abc123", display_handle="alice")]
    
    def test_unmapped_reviewer_omitted(self, pull_requests):
        mentions = self.composer.resolve_mentions(
            {"alice": "29:abc123"}, group_by_reviewer(pull_requests)
        )
        
        assert [m.display_handle for m in mentions] == ["alice"]
    
    def test_mapped_reviewer_without_pull_requests_omitted(self, fix_bug):
        mentions = self.composer.resolve_mentions(
            {"alice": "29:a", "bob": "29:b"}, group_by_reviewer([fix_bug])
        )
        
        assert [m.display_handle for m in mentions] == ["alice"]
    
    def test_follows_reviewer_order(self, pull_requests):
        mentions = self.composer.resolve_mentions(
            {"bob": "29:b", "alice": "29:a"}, group_by_reviewer(pull_requests)
        )
        
        assert [m.destination_id for m in mentions] == ["29:a", "29:b"]


def test_get_message_composer_singleton():
    assert get_message_composer() is get_message_composer()
