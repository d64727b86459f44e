"""Shared notification settings, retry handling and the default notifier."""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL_NAME = "default"
DEFAULT_TIMEOUT = 30.0
DEFAULT_RETRY_TIMES = 3
DEFAULT_RETRY_INTERVAL = 5.0

SLA_TITLE = "Overall SLA Report"


class Format(enum.Enum):
    """The rendering format a notifier expects its messages in."""

    UNKNOWN = "unknown"
    TEXT = "text"
    HTML = "html"
    MARKDOWN = "markdown"
    MARKDOWN_SOCIAL = "markdown-social"
    JSON = "json"
    SLACK = "slack"
    DISCORD = "discord"
    LARK = "lark"
    SMS = "sms"
    LOG = "log"
    SHELL = "shell"


@dataclass
class Retry:
    """How many times to try a send and how long to wait between tries."""

    times: int = 0
    interval: float = 0.0


@dataclass
class NotifySettings:
    """Global settings that fill in whatever a notifier leaves unset."""

    timeout: float = 0.0
    retry: Retry = field(default_factory=Retry)

    def normalize_timeout(self, timeout: float) -> float:
        if timeout > 0:
            return timeout
        if self.timeout > 0:
            return self.timeout
        return DEFAULT_TIMEOUT

    def normalize_retry(self, retry: Retry) -> Retry:
        times = retry.times
        if times <= 0:
            times = self.retry.times if self.retry.times > 0 else DEFAULT_RETRY_TIMES
        interval = retry.interval
        if interval <= 0:
            interval = (
                self.retry.interval if self.retry.interval > 0 else DEFAULT_RETRY_INTERVAL
            )
        return Retry(times=times, interval=interval)


class NoRetryError(Exception):
    """A failure that retrying cannot fix."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def do_retry(
    kind: str, name: str, tag: str, retry: Retry, fn: Callable[[], None]
) -> None:
    """Call ``fn`` up to ``retry.times`` times, raising the last error on failure."""
    attempts = max(retry.times, 1)
    last_error: Optional[Exception] = None
    for attempt in range(1, attempts + 1):
        try:
            fn()
            return
        except NoRetryError as exc:
            logger.error("[%s / %s / %s] - %s, no retry", kind, name, tag, exc)
            raise
        except Exception as exc:  # noqa: BLE001 - any send failure is retried
            last_error = exc
            logger.warning(
                "[%s / %s / %s] - failed (%d/%d): %s", kind, name, tag, attempt, attempts, exc
            )
            if attempt < attempts and retry.interval > 0:
                time.sleep(retry.interval)
    assert last_error is not None
    raise last_error


def log_send(kind: str, name: str, tag: str, title: str, error: Optional[Exception]) -> None:
    """Log the outcome of a send."""
    if error is None:
        logger.info("[%s / %s / %s] - %s - successfully sent!", kind, name, tag, title)
    else:
        logger.error(
            "[%s / %s / %s] - %s - failed to send! (%s)", kind, name, tag, title, error
        )


@dataclass
class DefaultNotify:
    """Common state and behaviour of every notifier."""

    kind: str = ""
    format: Format = Format.UNKNOWN
    send_func: Optional[Callable[[str, str], None]] = field(default=None, repr=False)
    name: str = ""
    channels: list[str] = field(default_factory=list)
    dry: bool = False
    timeout: float = 0.0
    retry: Retry = field(default_factory=Retry)

    def configure(self, settings: NotifySettings) -> None:
        mode = "Dry" if self.dry else "Live"
        logger.info("Notification [%s] - [%s] is running on %s mode!", self.kind, self.name, mode)
        self.timeout = settings.normalize_timeout(self.timeout)
        self.retry = settings.normalize_retry(self.retry)
        if not self.channels:
            self.channels.append(DEFAULT_CHANNEL_NAME)
        logger.info("Notification [%s] - [%s] is configured!", self.kind, self.name)

    def notify(self, title: str, message: str) -> None:
        """Send a rendered probe result."""
        if self.dry:
            self.dry_notify(message)
            return
        self.send_with_retry(title, message, "Notification")

    def notify_stat(self, message: str) -> None:
        """Send a rendered SLA report."""
        if self.dry:
            self.dry_notify(message)
            return
        self.send_with_retry(SLA_TITLE, message, "SLA")

    def send_with_retry(self, title: str, message: str, tag: str) -> None:
        def attempt() -> None:
            logger.debug("[%s / %s / %s] - %s", self.kind, self.name, tag, title)
            if self.send_func is None:
                logger.error(
                    "[%s / %s / %s] - %s SendFunc is nil", self.kind, self.name, tag, title
                )
                raise NoRetryError("SendFunc is nil")
            self.send_func(title, message)

        error: Optional[Exception] = None
        try:
            do_retry(self.kind, self.name, tag, self.retry, attempt)
        except Exception as exc:  # noqa: BLE001 - reported, never raised
            error = exc
        log_send(self.kind, self.name, tag, title, error)

    def dry_notify(self, message: str) -> None:
        logger.info("[%s / %s / dry_notify] - %s", self.kind, self.name, message)