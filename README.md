# easenotify

Deliver monitoring alerts to the places your team already watches.
Each notifier takes a title and an already rendered message and sends it,
with a timeout, a retry policy and a dry-run mode that only logs what
would have been sent.

## Channels

| Module | Class | Delivers to |
| --- | --- | --- |
| `easenotify.lognotify` | `LogNotify` | a log file, the local syslog, or a remote syslog over TCP/UDP |
| `easenotify.email` | `EmailNotify` | an SMTP server (SSL on port 465, STARTTLS where offered otherwise) |
| `easenotify.slack` | `SlackNotify` | a Slack incoming webhook (the message is posted as JSON as given) |
| `easenotify.wecom` | `WecomNotify` | a WeCom group robot, as a markdown message |
| `easenotify.dingtalk` | `DingtalkNotify` | a DingTalk group robot, signed with HMAC-SHA256 when `sign_secret` is set |
| `easenotify.ringcentral` | `RingCentralNotify` | a RingCentral webhook, as an adaptive card |
| `easenotify.teams` | `TeamsNotify` | a Microsoft Teams webhook, as a message card |
| `easenotify.telegram` | `TelegramNotify` | a Telegram chat through a bot; long texts are cut by `split_message` into 4096-character parts |
| `easenotify.sms` | `SmsNotify` | SMS through Yunpian, Twilio or Nexmo (`easenotify.sms_providers`) |
| `easenotify.shell` | `ShellNotify` | any local command |

## Installation

```
pip install easenotify
```

## Usage

Every notifier is a dataclass. Create it, call `configure()` once with
`NotifySettings`, then call `notify(title, message)` for a single alert or
`notify_stat(message)` for a report (sent with the title
`Overall SLA Report`).

```python
from easenotify.base import NotifySettings
from easenotify.slack import SlackNotify

slack = SlackNotify(name="ops", webhook_url="https://hooks.example.com/services/placeholder")
slack.configure(NotifySettings())
slack.notify("Service down", '{"text": "api is not responding"}')
```

`configure()` fills in what the notifier leaves unset: a timeout of 30
seconds, 3 tries 5 seconds apart, and the channel `default`. Values set in
`NotifySettings` take precedence over these defaults, and values set on the
notifier itself take precedence over both.

Set `dry=True` on a notifier to log the message instead of sending it.

### E-mail

```python
from easenotify.base import NotifySettings
from easenotify.email import EmailNotify

password = "password"
mail = EmailNotify(
    name="team",
    server="smtp.example.com:465",
    user="alerts@example.com",
    password=password,
    to="ops@example.com;dev@example.com",
)
mail.configure(NotifySettings())
mail.notify("Service down", "<b>api</b> is not responding")
```

Recipients in `to` are separated by `;` or `,`. Without `sender` the mail
is sent from `Notification<user>`.

### Log and syslog

`LogNotify(file="/var/log/alerts.log")` appends each line of a message to
the file, prefixed with a timestamp, the host name, the application name and
the level. With `file="syslog"` the lines go to the local syslog, and with
`network="tcp"` or `"udp"` and `host="logs.example.com:514"` to a remote
one. `check_network_protocol()` raises `ValueError` for a missing or unknown
protocol, a host without a port, or a port that is not a number.

### SMS

`SmsNotify` takes `provider_type` (a `ProviderType` from
`easenotify.sms_conf`: `YUNPIAN`, `TWILIO` or `NEXMO`), `mobile`, `sender`,
`key`, `secret`, `url` and, for Yunpian, a `sign` that is put before the
text. With an unknown provider, sending raises `ValueError("wrong Provider
type")`. `ProviderType` reads and writes its lower-case name as YAML or JSON
with `from_yaml`, `to_yaml`, `from_json` and `to_json`.

### Shell

`ShellNotify(cmd="/usr/local/bin/alert", args=[...])` expects the message to
be a JSON object of strings. Its entries are added to the command's
environment (on top of the current one unless `clean_env=True`, then the
`env` entries of the form `KEY=value`), and the value of `EASEPROBE_CSV`, if
present, is written to the command's standard input. A command that fails
raises `subprocess.CalledProcessError`.

## Errors and retries

Each send is tried up to `retry.times` times, `retry.interval` seconds
apart (`easenotify.base.do_retry`). A `NoRetryError` stops the tries at
once. `notify()` and `notify_stat()` never raise: the outcome of a send is
logged through the standard `logging` module. Calling a notifier's own send
method directly, such as `SlackNotify.send_slack()`, raises on failure.

## What this package does not do

It does not render probe results into messages: every notifier sends the
title and message it is given, in the format its `format` field names. It
does not read a configuration file or build notifiers from one, and it has
no command-line program or scheduler; create and configure the notifiers in
your own code.

## Running the tests

```
pip install "easenotify[test]"
pytest
```