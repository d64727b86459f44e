"""Notification through a Microsoft Teams incoming webhook."""

from __future__ import annotations

from dataclasses import dataclass

from easenotify.base import DefaultNotify, Format, NotifySettings
from easenotify.slack import _post_json, _setup


def _message_card(title: str, msg: str) -> dict:
    card = {"@type": "MessageCard", "@context": "https://schema.org/extensions"}
    card.update({key: value for key, value in (("title", title), ("text", msg)) if value})
    return card


@dataclass
class TeamsNotify(DefaultNotify):
    """Posts message cards to a Teams channel webhook."""

    webhook_url: str = ""

    def configure(self, settings: NotifySettings) -> None:
        _setup(self, "teams", Format.MARKDOWN_SOCIAL, self.send_teams_message, settings)

    def send_teams_message(self, title: str, msg: str) -> None:
        """Post a message card; fail unless the reply is 200 or the body is ``1``."""
        resp = _post_json(self, self.webhook_url, _message_card(title, msg))
        if resp.status_code != 200 and resp.text != "1":
            raise RuntimeError(
                f"error response from Teams Webhook - code [{resp.status_code}] - msg [{resp.text}]"
            )