"""Notification into a local log file or a local or remote syslog."""

from __future__ import annotations

import enum
import logging
import logging.handlers
import os
import socket
import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from easenotify.base import DefaultNotify, Format, NotifySettings

logger = logging.getLogger(__name__)

TCP = "tcp"
UDP = "udp"
SYSLOG_IDENTIFIER = "syslog"
APP_NAME = "easenotify"


class LogType(enum.IntEnum):
    FILE_LOG = 0
    SYSLOG = 1


class SysLogFormatter(logging.Formatter):
    """Plain messages for syslog; timestamp, host, app and level for files."""

    def __init__(self, log_type: LogType = LogType.FILE_LOG, app_name: str = APP_NAME) -> None:
        super().__init__()
        self.log_type = log_type
        self.app_name = app_name

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if self.log_type == LogType.SYSLOG:
            return message
        timestamp = datetime.now().astimezone().isoformat(timespec="seconds")
        host = socket.gethostname()
        level = record.levelname.lower()
        return f"{timestamp} {host} {self.app_name} {level} {message}"


def _split_host_port(hostport: str) -> tuple[str, str]:
    if hostport.startswith("["):
        end = hostport.find("]")
        if end < 0 or hostport[end + 1 : end + 2] != ":":
            raise ValueError(f"invalid address: {hostport}")
        return hostport[1:end], hostport[end + 2 :]
    host, sep, port = hostport.rpartition(":")
    if not sep or ":" in host:
        raise ValueError(f"invalid address: {hostport}")
    return host, port


def _local_syslog_address():
    for path in ("/dev/log", "/var/run/syslog"):
        if os.path.exists(path):
            return path
    return ("localhost", logging.handlers.SYSLOG_UDP_PORT)


@dataclass
class LogNotify(DefaultNotify):
    """Writes each line of a notification to a log file or syslog."""

    file: str = ""
    host: str = ""
    network: str = ""
    log_type: LogType = LogType.FILE_LOG
    _logger: Optional[logging.Logger] = field(default=None, init=False, repr=False)
    _handler: Optional[logging.Handler] = field(default=None, init=False, repr=False)

    def _title(self) -> str:
        return f"[{self.kind} / {self.name}]"

    def is_syslog(self) -> bool:
        return self.file.strip() == SYSLOG_IDENTIFIER

    def has_network(self) -> bool:
        if not self.is_syslog():
            return False
        return bool(self.network.strip()) and bool(self.host.strip())

    def check_network_protocol(self) -> None:
        title = self._title()
        if not self.network.strip():
            raise ValueError(f"{title} protocol is required")
        if not self.host.strip():
            raise ValueError(f"{title} host is required")
        if self.network not in (TCP, UDP):
            raise ValueError(f"{title} invalid protocol: {self.network}")
        try:
            _, port = _split_host_port(self.host)
        except ValueError:
            raise ValueError(f"{title} invalid host: {self.host}") from None
        try:
            int(port)
        except ValueError:
            raise ValueError(f"{title} invalid port: {port}") from None

    def _install(self, handler: logging.Handler) -> None:
        if self._handler is not None:
            self._handler.close()
        handler.setFormatter(SysLogFormatter(self.log_type))
        notify_logger = logging.Logger(f"{APP_NAME}.{self.name or 'log'}", logging.INFO)
        notify_logger.propagate = False
        notify_logger.addHandler(handler)
        self._handler = handler
        self._logger = notify_logger

    def _config_log_file(self) -> logging.Handler:
        self.kind = "log"
        self.log_type = LogType.FILE_LOG
        try:
            handler = logging.FileHandler(self.file, mode="a", encoding="utf-8")
        except OSError as exc:
            logger.error("%s cannot open file: %s", self._title(), exc)
            raise
        logger.info("%s - local log file(%s) configured", self._title(), self.file)
        return handler

    def config_log(self) -> None:
        self.kind = "log"
        self.format = Format.LOG
        self.send_func = self.log

        if sys.platform == "win32":
            self._install(self._config_log_file())
            return

        if self.is_syslog() and self.has_network():
            self.kind = SYSLOG_IDENTIFIER
            self.log_type = LogType.SYSLOG
            self.check_network_protocol()
            host, port = _split_host_port(self.host)
            socktype = socket.SOCK_STREAM if self.network == TCP else socket.SOCK_DGRAM
            try:
                handler = logging.handlers.SysLogHandler(
                    address=(host, int(port)), socktype=socktype
                )
            except OSError as exc:
                logger.error("%s cannot dial syslog network: %s", self._title(), exc)
                raise
            logger.info(
                "%s - remote syslog (%s:%s) configured", self._title(), self.network, self.host
            )
        elif self.is_syslog():
            self.kind = SYSLOG_IDENTIFIER
            self.log_type = LogType.SYSLOG
            try:
                handler = logging.handlers.SysLogHandler(address=_local_syslog_address())
            except OSError as exc:
                logger.error("%s cannot open syslog: %s", self._title(), exc)
                raise
            logger.info("%s - local syslog configured!", self._title())
        else:
            handler = self._config_log_file()

        if self.log_type == LogType.SYSLOG:
            handler.ident = f"{APP_NAME}: "
        self._install(handler)

    def configure(self, settings: NotifySettings) -> None:
        self.config_log()
        super().configure(settings)

    def log(self, title: str, msg: str) -> None:
        if self._logger is None:
            raise RuntimeError(f"{self._title()} is not configured")
        for line in msg.splitlines():
            logger.debug("[%s] %s", self.kind, line)
            self._logger.info(line)