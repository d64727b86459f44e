"""Notification through a WeCom robot webhook."""

from __future__ import annotations

from dataclasses import dataclass

from easenotify.base import DefaultNotify, Format, NotifySettings
from easenotify.slack import _check_status, _post_json, _setup


@dataclass
class WecomNotify(DefaultNotify):
    """Posts markdown messages to a WeCom group robot."""

    webhook_url: str = ""

    def configure(self, settings: NotifySettings) -> None:
        _setup(self, "wecom", Format.MARKDOWN, self.send_wecom, settings)

    def send_wecom(self, title: str, msg: str) -> None:
        """Send ``msg``; the title is already part of the rendered message."""
        self.send_wecom_notification(msg)

    def send_wecom_notification(self, msg: str) -> None:
        """Post ``msg`` as a markdown robot message, raising on a non-200 reply."""
        payload = {"msgtype": "markdown", "markdown": {"content": msg}}
        _check_status(_post_json(self, self.webhook_url, payload), "Wecom")