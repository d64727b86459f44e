"""Notification through a Slack incoming webhook.

This module also holds the pieces that every webhook notifier shares:
the common configuration step, the JSON POST and the status check.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Callable

import requests

from easenotify.base import DefaultNotify, Format, NotifySettings

logger = logging.getLogger(__name__)

_JSON_HEADERS = {"Content-Type": "application/json", "Connection": "close"}


def _setup(
    notifier: DefaultNotify,
    kind: str,
    fmt: Format,
    send_func: Callable[[str, str], None],
    settings: NotifySettings,
) -> None:
    """Set the kind, format and sender of ``notifier``, then apply the common settings."""
    notifier.kind = kind
    notifier.format = fmt
    notifier.send_func = send_func
    DefaultNotify.configure(notifier, settings)
    logger.debug("Notification [%s] - [%s] configuration: %r", kind, notifier.name, notifier)


def _post_json(notifier: DefaultNotify, url: str, body: object = None) -> requests.Response:
    """POST ``body`` as JSON to ``url`` within the notifier's timeout.

    A string is sent as it is; any other value but ``None`` is JSON-encoded first.
    """
    if body is not None and not isinstance(body, str):
        body = json.dumps(body)
    data = body.encode("utf-8") if body is not None else None
    return requests.post(url, data=data, headers=_JSON_HEADERS, timeout=notifier.timeout or None)


def _check_status(resp: requests.Response, service: str) -> None:
    """Raise unless the reply has status 200."""
    if resp.status_code != 200:
        raise RuntimeError(
            f"Error response from {service} - code [{resp.status_code}] - msg [{resp.text}]"
        )


@dataclass
class SlackNotify(DefaultNotify):
    """Posts pre-rendered Slack messages to an incoming webhook."""

    webhook_url: str = ""

    def configure(self, settings: NotifySettings) -> None:
        _setup(self, "slack", Format.SLACK, self.send_slack, settings)

    def send_slack(self, title: str, msg: str) -> None:
        """Send ``msg``; the title is already part of the rendered message."""
        self.send_slack_notification(msg)

    def send_slack_notification(self, msg: str) -> None:
        """Post the JSON message to the webhook, raising on a non-200 reply."""
        resp = _post_json(self, self.webhook_url, msg)
        if resp.status_code != 200:
            logger.debug(msg)
        _check_status(resp, "Slack")