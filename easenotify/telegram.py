"""Notification through a Telegram bot."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import quote_plus

from easenotify.base import DefaultNotify, Format, NotifySettings
from easenotify.slack import _check_status, _post_json, _setup

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 4096
API_BASE = "https://api.telegram.org/bot"


def split_message(message: str) -> list[str]:
    """Cut ``message`` into parts no longer than a Telegram message may be."""
    return [
        message[start : start + MAX_MESSAGE_LENGTH]
        for start in range(0, len(message), MAX_MESSAGE_LENGTH)
    ]


@dataclass
class TelegramNotify(DefaultNotify):
    """Sends markdown messages to a Telegram chat through a bot."""

    token: str = ""
    chat_id: str = ""

    def configure(self, settings: NotifySettings) -> None:
        _setup(self, "telegram", Format.MARKDOWN, self.send_telegram, settings)

    def send_telegram(self, title: str, text: str) -> None:
        """Send ``text`` in as many parts as needed, stopping at the first failure."""
        for part in split_message(text):
            self.send_telegram_notification(part)

    def send_telegram_notification(self, text: str) -> None:
        """Send one message part, raising on a non-200 reply."""
        api = (
            f"{API_BASE}{self.token}/sendMessage?&chat_id={self.chat_id}"
            f"&parse_mode=markdown&text={quote_plus(text)}"
        )
        logger.debug("[%s] - API %s", self.kind, api)
        _check_status(_post_json(self, api), "Telegram")