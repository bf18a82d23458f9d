"""
Pull Request Reviews Reminder

Posts a reminder to a Slack or Microsoft Teams channel listing the open
pull requests that are still waiting for their requested reviewers.
"""

__version__ = "1.0.0"
