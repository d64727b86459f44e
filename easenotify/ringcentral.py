"""Notification through a RingCentral incoming webhook."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from easenotify.base import DefaultNotify, Format, NotifySettings
from easenotify.slack import _check_status, _post_json, _setup

logger = logging.getLogger(__name__)

_SUCCESS_BODY = '{"status":"OK"}'
_CARD_SCHEMA = "http://adaptivecards.io/schemas/adaptive-card.json"


def _adaptive_card(title: str, msg: str) -> dict:
    heading = {"type": "TextBlock", "text": title, "weight": "bolder", "size": "medium", "wrap": True}
    text = {"type": "TextBlock", "text": msg, "wrap": True}
    card = {"$schema": _CARD_SCHEMA, "type": "AdaptiveCard", "version": "1.0", "body": [heading, text]}
    return {"attachments": [card]}


@dataclass
class RingCentralNotify(DefaultNotify):
    """Posts plain-text adaptive cards to a RingCentral webhook."""

    webhook_url: str = ""

    def configure(self, settings: NotifySettings) -> None:
        _setup(self, "ringcentral", Format.TEXT, self.send_ringcentral, settings)

    def send_ringcentral(self, title: str, msg: str) -> None:
        """Post a card holding ``title`` and ``msg`` and check RingCentral's reply."""
        resp = _post_json(self, self.webhook_url, _adaptive_card(title, msg))
        if resp.status_code != 200:
            logger.debug(msg)
        _check_status(resp, "RingCentral")
        if resp.text != _SUCCESS_BODY:
            raise RuntimeError("Non-ok response returned from RingCentral " + resp.text)