import re
import string

import pytest
import requests
import responses

from easenotify.base import Format, NotifySettings
from easenotify.telegram import MAX_MESSAGE_LENGTH, TelegramNotify, split_message

API = re.compile(r"https://api\.telegram\.org/bot.*")


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def notifier():
    conf = TelegramNotify(name="dummy", token="token", chat_id="42")
    conf.configure(NotifySettings())
    return conf


def _text(length):
    chars = string.ascii_letters + string.digits
    return "".join(chars[i % len(chars)] for i in range(length))


def test_configure(notifier):
    assert notifier.kind == "telegram"
    assert notifier.format == Format.MARKDOWN
    assert notifier.send_func == notifier.send_telegram


def test_send_ok(notifier, mocked):
    mocked.add(responses.POST, API, body="ok", status=200)
    assert notifier.send_telegram("title", "hello world") is None
    url = mocked.calls[0].request.url
    assert url.startswith("https://api.telegram.org/bottoken/sendMessage?")
    assert "chat_id=42" in url
    assert "parse_mode=markdown" in url
    assert "text=hello+world" in url


def test_long_message_is_sent_in_parts(notifier, mocked):
    mocked.add(responses.POST, API, body="ok", status=200)
    assert notifier.send_telegram("title", _text(MAX_MESSAGE_LENGTH + 1)) is None
    assert len(mocked.calls) == 2


def test_send_not_found(notifier, mocked):
    mocked.add(responses.POST, API, body="not found", status=404)
    with pytest.raises(RuntimeError) as info:
        notifier.send_telegram("title", "message")
    assert str(info.value) == "Error response from Telegram - code [404] - msg [not found]"


def test_send_connection_error(notifier, mocked):
    mocked.add(responses.POST, API, body=requests.ConnectionError("http do error"))
    with pytest.raises(requests.ConnectionError) as info:
        notifier.send_telegram("title", "message")
    assert str(info.value) == "http do error"


def test_split_short_message():
    msg = _text(100)
    parts = split_message(msg)
    assert parts == [msg]


def test_split_long_message():
    msg = _text(4097)
    parts = split_message(msg)
    assert len(parts) == 2
    assert parts[0] == msg[:4096]
    assert parts[1] == msg[4096:]


def test_split_empty_message():
    assert split_message("") == []