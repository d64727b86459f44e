import logging

import pytest

from easenotify.base import (
    DEFAULT_CHANNEL_NAME,
    DEFAULT_RETRY_INTERVAL,
    DEFAULT_RETRY_TIMES,
    DEFAULT_TIMEOUT,
    DefaultNotify,
    Format,
    NoRetryError,
    NotifySettings,
    Retry,
    do_retry,
)


def _make(send_func=lambda title, message: None):
    return DefaultNotify(
        kind="TestKind",
        format=Format.MARKDOWN,
        send_func=send_func,
        name="TestName",
        channels=[],
        dry=False,
        timeout=10.0,
    )


def test_configure_defaults():
    d = _make()
    d.configure(NotifySettings())
    assert d.kind == "TestKind"
    assert d.name == "TestName"
    assert d.channels == [DEFAULT_CHANNEL_NAME]
    assert d.timeout == 10.0
    assert d.retry == Retry(times=DEFAULT_RETRY_TIMES, interval=DEFAULT_RETRY_INTERVAL)


def test_normalize_timeout_and_retry():
    settings = NotifySettings(timeout=7.0, retry=Retry(times=5, interval=1.0))
    assert settings.normalize_timeout(0) == 7.0
    assert settings.normalize_timeout(2.0) == 2.0
    assert NotifySettings().normalize_timeout(0) == DEFAULT_TIMEOUT
    assert settings.normalize_retry(Retry()) == Retry(times=5, interval=1.0)
    assert settings.normalize_retry(Retry(times=2, interval=0.5)) == Retry(2, 0.5)


def test_dry_notify(caplog):
    caplog.set_level(logging.DEBUG, logger="easenotify")
    d = _make()
    d.dry = True
    d.configure(NotifySettings())
    d.notify("title", "**dummy Recovery** ✅")
    assert "[TestKind / TestName / dry_notify]" in caplog.text
    assert "**dummy Recovery** ✅" in caplog.text

    caplog.clear()
    d.notify_stat("**Overall SLA Report**")
    assert "[TestKind / TestName / dry_notify]" in caplog.text
    assert "**Overall SLA Report**" in caplog.text


def test_live_notify_stat(caplog):
    caplog.set_level(logging.DEBUG, logger="easenotify")
    sent = []
    d = _make(lambda title, message: sent.append((title, message)))
    d.configure(NotifySettings())
    d.notify_stat("report")
    assert sent == [("Overall SLA Report", "report")]
    assert (
        "[TestKind / TestName / SLA] - Overall SLA Report - successfully sent!" in caplog.text
    )


def test_nil_send_func(caplog):
    caplog.set_level(logging.DEBUG, logger="easenotify")
    d = _make(None)
    d.configure(NotifySettings())
    d.notify("title", "message")
    assert "SendFunc is nil" in caplog.text


def test_do_retry_succeeds_after_failures():
    calls = []

    def fn():
        calls.append(1)
        if len(calls) < 3:
            raise RuntimeError("boom")

    result = do_retry("k", "n", "t", Retry(times=3, interval=0), fn)
    assert result is None
    assert len(calls) == 3


def test_do_retry_raises_last_error():
    calls = []

    def fn():
        calls.append(1)
        raise RuntimeError(f"boom {len(calls)}")

    with pytest.raises(RuntimeError, match="boom 2"):
        do_retry("k", "n", "t", Retry(times=2, interval=0), fn)
    assert len(calls) == 2


def test_do_retry_stops_on_no_retry():
    calls = []

    def fn():
        calls.append(1)
        raise NoRetryError("fatal")

    with pytest.raises(NoRetryError, match="fatal"):
        do_retry("k", "n", "t", Retry(times=5, interval=0), fn)
    assert len(calls) == 1