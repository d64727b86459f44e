"""SMS provider selection and the options shared by SMS providers."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from typing import Any

import yaml

from easenotify.base import DefaultNotify

_LABEL = "SMS Provider"


class ProviderType(enum.IntEnum):
    """The SMS service used to deliver a message."""

    UNKNOWN = 0
    YUNPIAN = 1
    TWILIO = 2
    NEXMO = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    def __str__(self) -> str:
        return self.label

    @classmethod
    def from_name(cls, name: str) -> "ProviderType":
        """Return the provider with this name, or UNKNOWN."""
        for member in cls:
            if member.label == name:
                return member
        return cls.UNKNOWN

    @classmethod
    def _parse(cls, value: Any) -> "ProviderType":
        if isinstance(value, str):
            for member in cls:
                if member.label == value:
                    return member
        raise ValueError(f"{value!r} is not a valid {_LABEL}")

    def to_yaml(self) -> str:
        return f"{self.label}\n"

    @classmethod
    def from_yaml(cls, text: str) -> "ProviderType":
        try:
            value = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ValueError(f"invalid {_LABEL}: {exc}") from exc
        return cls._parse(value)

    def to_json(self) -> str:
        return json.dumps(self.label)

    @classmethod
    def from_json(cls, text: str) -> "ProviderType":
        return cls._parse(json.loads(text))


@dataclass
class SmsOptions(DefaultNotify):
    """Configuration common to every SMS provider."""

    provider_type: ProviderType = ProviderType.UNKNOWN
    mobile: str = ""
    sender: str = ""
    key: str = ""
    secret: str = ""
    url: str = ""
    sign: str = ""