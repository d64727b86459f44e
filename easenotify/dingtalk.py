"""Notification through a DingTalk robot webhook."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
import time
from dataclasses import dataclass
from urllib.parse import quote_plus

from easenotify.base import DefaultNotify, Format, NotifySettings
from easenotify.slack import _post_json, _setup

logger = logging.getLogger(__name__)


@dataclass
class DingtalkNotify(DefaultNotify):
    """Posts markdown messages to a DingTalk group robot, signed when a secret is set."""

    webhook_url: str = ""
    sign_secret: str = ""

    def configure(self, settings: NotifySettings) -> None:
        _setup(self, "dingtalk", Format.MARKDOWN, self.send_dingtalk_notification, settings)

    def send_dingtalk_notification(self, title: str, msg: str) -> None:
        """Post a markdown message and check that DingTalk answered ``errmsg: ok``."""
        payload = {
            "msgtype": "markdown",
            "markdown": {"title": f"**{title}**", "text": msg},
        }
        resp = _post_json(self, self.add_sign(self.webhook_url, self.sign_secret), payload)
        body = resp.text
        try:
            data = json.loads(body)
        except ValueError:
            data = None
        if not isinstance(data, dict) or data.get("errmsg") != "ok":
            raise RuntimeError(
                f"[{self.kind} / {self.name}] - Error response from Dingtalk "
                f"[{resp.status_code}] - [{body}]"
            )

    def add_sign(self, webhook_url: str, secret: str) -> str:
        """Append the timestamp and HMAC-SHA256 signature when a secret is given."""
        webhook = webhook_url
        if secret:
            timestamp = time.time_ns() // 1_000_000
            string_to_sign = f"{timestamp}\n{secret}"
            digest = hmac.new(
                secret.encode("utf-8"), string_to_sign.encode("utf-8"), hashlib.sha256
            ).digest()
            sign = quote_plus(base64.b64encode(digest).decode("ascii"))
            webhook = f"{webhook_url}&timestamp={timestamp}&sign={sign}"
        logger.debug("[%s / %s] - Dingtalk webhook: %s", self.kind, self.name, webhook)
        return webhook