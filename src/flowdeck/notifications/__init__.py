"""
User-facing notifications.

Success and error messages for the dashboard toast feed and the CLI,
optionally mirrored to a Slack channel.
"""

from flowdeck.notifications.center import NotificationCenter, NotificationSink
from flowdeck.notifications.slack import SlackNotifier

__all__ = ["NotificationCenter", "NotificationSink", "SlackNotifier"]
