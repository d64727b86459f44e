"""SMS delivery through the Nexmo, Twilio and Yunpian HTTP APIs."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlencode

import requests

from easenotify.sms_conf import SmsOptions

logger = logging.getLogger(__name__)


class _FormProvider:
    """An SMS provider that posts a URL-encoded form to an HTTP API."""

    def __init__(self, options: SmsOptions) -> None:
        self.options = options

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.options.name!r}, url={self.options.url!r})"

    def _api(self) -> str:
        return self.options.url

    def _auth(self) -> Optional[tuple[str, str]]:
        return None

    def _send(self, form: dict[str, str]) -> None:
        api = self._api()
        body = urlencode(sorted(form.items()))
        logger.debug(
            "[%s / %s] - API %s - Form %s", self.options.kind, self.options.name, api, form
        )
        resp = requests.post(
            api,
            data=body,
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "Connection": "close",
            },
            auth=self._auth(),
            timeout=self.options.timeout or None,
        )
        if resp.status_code != 200:
            raise RuntimeError(f"Error response from SMS [{resp.status_code}] - [{resp.text}]")


class Nexmo(_FormProvider):
    """Sends SMS through the Nexmo API, authenticated by key and secret in the form."""

    def notify(self, title: str, text: str) -> None:
        opts = self.options
        self._send(
            {
                "From": opts.sender,
                "To": opts.mobile,
                "text": text,
                "api_key": opts.key,
                "api_secret": opts.secret,
            }
        )


class Twilio(_FormProvider):
    """Sends SMS through the Twilio API, authenticated with HTTP basic auth."""

    def _api(self) -> str:
        return self.options.url + self.options.key + "/Messages.json"

    def _auth(self) -> Optional[tuple[str, str]]:
        return (self.options.key, self.options.secret)

    def notify(self, title: str, text: str) -> None:
        opts = self.options
        self._send({"From": opts.sender, "To": opts.mobile, "text": text})


class Yunpian(_FormProvider):
    """Sends SMS through the Yunpian API, prefixing the text with the sign."""

    def notify(self, title: str, text: str) -> None:
        opts = self.options
        self._send({"apikey": opts.key, "mobile": opts.mobile, "text": opts.sign + text})