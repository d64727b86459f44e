"""Notification channels for monitoring alerts: log, syslog, e-mail, webhooks, SMS and shell."""

__version__ = "0.1.0"

__all__ = [
    "base",
    "dingtalk",
    "email",
    "lognotify",
    "ringcentral",
    "shell",
    "slack",
    "sms",
    "sms_conf",
    "sms_providers",
    "teams",
    "telegram",
    "wecom",
]