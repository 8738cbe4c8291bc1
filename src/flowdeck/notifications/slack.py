"""Slack sink: mirrors console notifications to a channel."""

import logging

from flowdeck.models import Notification, NotificationLevel

logger = logging.getLogger(__name__)

_LEVEL_ICON = {
    NotificationLevel.SUCCESS: ":white_check_mark:",
    NotificationLevel.ERROR: ":x:",
}


def _build_notification_text(notification: Notification) -> str:
    """Plain-text fallback for notifications and accessibility."""
    icon = _LEVEL_ICON.get(notification.level, "")
    prefix = f"[{notification.flow_key}] " if notification.flow_key else ""
    return f"{icon} {prefix}{notification.text}".strip()


def _build_notification_blocks(notification: Notification) -> list[dict]:
    """Block Kit layout for one notification."""
    blocks: list[dict] = [
        {
            "type": "section",
            "text": {"type": "mrkdwn", "text": _build_notification_text(notification)},
        },
    ]
    context = [f"*Level:* {notification.level.value}", f"*At:* {notification.created_at.isoformat()}"]
    if notification.flow_key:
        context.insert(0, f"*Flow:* `{notification.flow_key}`")
    blocks.append(
        {"type": "context", "elements": [{"type": "mrkdwn", "text": item} for item in context]}
    )
    return blocks


class SlackNotifier:
    """Publishes notifications via slack_sdk WebClient; no-op when token or channel is not configured."""

    def __init__(self, bot_token: str = "", channel_id: str = "") -> None:
        self.bot_token = bot_token
        self.channel_id = channel_id

    @property
    def configured(self) -> bool:
        return bool(self.bot_token and self.channel_id)

    def publish(self, notification: Notification) -> bool:
        """Send notification to configured Slack channel. Returns False if token/channel missing or API fails."""
        if not self.configured:
            logger.debug("Slack publish skipped: no token or channel")
            return False
        try:
            from slack_sdk import WebClient

            client = WebClient(token=self.bot_token)
            client.chat_postMessage(
                channel=self.channel_id,
                text=_build_notification_text(notification),
                blocks=_build_notification_blocks(notification),
            )
            logger.debug("Slack notification published", extra={"notification_id": notification.id})
            return True
        except Exception as e:
            logger.warning("Slack publish failed: %s", e, exc_info=True)
            return False
