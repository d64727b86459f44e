"""SMS notification dispatched to the configured provider."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol

from easenotify.base import Format, NotifySettings
from easenotify.sms_conf import ProviderType, SmsOptions
from easenotify.sms_providers import Nexmo, Twilio, Yunpian

logger = logging.getLogger(__name__)


class _Provider(Protocol):
    def notify(self, title: str, text: str) -> None: ...


_DRIVERS = {
    ProviderType.YUNPIAN: Yunpian,
    ProviderType.TWILIO: Twilio,
    ProviderType.NEXMO: Nexmo,
}


@dataclass
class SmsNotify(SmsOptions):
    """Sends notifications as SMS through Yunpian, Twilio or Nexmo."""

    provider: Optional[_Provider] = field(default=None, repr=False, compare=False)

    def configure(self, settings: NotifySettings) -> None:
        self.kind = self.provider_type.label
        self.format = Format.SMS
        super().configure(settings)
        self._config_driver()
        self.send_func = self.do_notify
        logger.debug("Notification [%s] - [%s] configuration: %r", self.kind, self.name, self)

    def _config_driver(self) -> None:
        driver = _DRIVERS.get(self.provider_type)
        if driver is None:
            self.provider_type = ProviderType.UNKNOWN
            self.provider = None
            return
        self.provider = driver(self)

    def do_notify(self, title: str, text: str) -> None:
        """Hand the message to the provider; an unknown provider is an error."""
        if self.provider_type == ProviderType.UNKNOWN or self.provider is None:
            raise ValueError("wrong Provider type")
        self.provider.notify(title, text)