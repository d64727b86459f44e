"""Notification by e-mail over SMTP."""

from __future__ import annotations

import logging
import re
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage

from easenotify.base import DefaultNotify, Format, NotifySettings

logger = logging.getLogger(__name__)

_SSL_PORT = 465


def _split_host_port(hostport: str) -> tuple[str, str]:
    if hostport.startswith("["):
        end = hostport.find("]")
        if end < 0 or hostport[end + 1 : end + 2] != ":":
            raise ValueError(f"address {hostport}: missing port in address")
        return hostport[1:end], hostport[end + 2 :]
    host, sep, port = hostport.rpartition(":")
    if not sep:
        raise ValueError(f"address {hostport}: missing port in address")
    if ":" in host:
        raise ValueError(f"address {hostport}: too many colons in address")
    return host, port


@dataclass
class EmailNotify(DefaultNotify):
    """Sends HTML e-mails through an SMTP server."""

    server: str = ""
    user: str = ""
    password: str = ""
    to: str = ""
    sender: str = ""

    def configure(self, settings: NotifySettings) -> None:
        self.kind = "email"
        self.format = Format.HTML
        self.send_func = self.send_mail
        super().configure(settings)
        logger.debug("Notification [%s] - [%s] configuration: %r", self.kind, self.name, self)

    def send_mail(self, subject: str, message: str) -> None:
        """Send ``message`` as an HTML mail to every ``;`` or ``,`` separated recipient."""
        host, port_text = _split_host_port(self.server)
        try:
            port = int(port_text)
        except ValueError:
            raise ValueError(f'parsing "{port_text}": invalid syntax') from None

        sender = self.sender or f"Notification<{self.user}>"
        recipients = [r for r in re.split(r"[;,]", self.to) if r]

        mail = EmailMessage()
        mail["From"] = sender
        mail["To"] = ", ".join(recipients)
        mail["Subject"] = subject
        mail.set_content(message, subtype="html", charset="utf-8")

        timeout = self.timeout or None
        if port == _SSL_PORT:
            client = smtplib.SMTP_SSL(host, port, timeout=timeout)
        else:
            client = smtplib.SMTP(host, port, timeout=timeout)
        with client as smtp:
            if port != _SSL_PORT:
                smtp.ehlo()
                if smtp.has_extn("starttls"):
                    smtp.starttls()
                    smtp.ehlo()
            if self.user:
                smtp.login(self.user, self.password)
            smtp.send_message(mail)