import pytest
import requests
import responses

from easenotify.base import Format, NotifySettings, Retry
from easenotify.slack import SlackNotify

SLACK_HOOK = "https://hooks.example.com/slack"


@pytest.fixture
def slack():
    notifier = SlackNotify(
        name="dummy", webhook_url=SLACK_HOOK, retry=Retry(times=1, interval=0.001)
    )
    notifier.configure(NotifySettings())
    with responses.RequestsMock(assert_all_requests_are_fired=False) as fake:
        yield notifier, fake


def test_config(slack):
    notifier, _ = slack
    assert (notifier.kind, notifier.format) == ("slack", Format.SLACK)
    assert notifier.channels == ["default"]
    assert notifier.send_func == notifier.send_slack


def test_send_ok(slack):
    notifier, fake = slack
    fake.add(responses.POST, SLACK_HOOK, body="ok", status=200)
    assert notifier.send_slack("title", "message") is None
    request = fake.calls[0].request
    assert request.body == b"message"
    assert request.headers["Content-Type"] == "application/json"


@pytest.mark.parametrize(
    "reply, error, text",
    [
        (
            {"body": "not found", "status": 404},
            RuntimeError,
            "Error response from Slack - code [404] - msg [not found]",
        ),
        (
            {"body": requests.ConnectionError("http do error")},
            requests.ConnectionError,
            "http do error",
        ),
    ],
)
def test_send_failures(slack, reply, error, text):
    notifier, fake = slack
    fake.add(responses.POST, SLACK_HOOK, **reply)
    with pytest.raises(error) as info:
        notifier.send_slack("title", "message")
    assert str(info.value) == text


def test_bad_url(slack):
    notifier, _ = slack
    notifier.webhook_url = ""
    with pytest.raises(requests.exceptions.MissingSchema):
        notifier.send_slack("title", "message")


def test_notify_goes_through_webhook(slack):
    notifier, fake = slack
    fake.add(responses.POST, SLACK_HOOK, body="ok", status=200)
    notifier.notify("title", '{"text": "hi"}')
    assert fake.calls[0].request.body == b'{"text": "hi"}'