import json

import pytest
import requests
import responses

from easenotify.base import Format, NotifySettings
from easenotify.teams import TeamsNotify

TEAMS_HOOK = "https://hooks.example.com/teams"
CARD_HEAD = {"@type": "MessageCard", "@context": "https://schema.org/extensions"}


@pytest.fixture
def teams():
    conf = TeamsNotify(name="dummy", webhook_url=TEAMS_HOOK)
    conf.configure(NotifySettings())
    return conf


def test_configure(teams):
    assert teams.kind == "teams"
    assert teams.format == Format.MARKDOWN_SOCIAL
    assert teams.send_func == teams.send_teams_message


@pytest.mark.parametrize(
    "title, msg, reply, card",
    [
        ("title", "message", {"body": "ok", "status": 200}, {**CARD_HEAD, "title": "title", "text": "message"}),
        ("", "", {"body": "ok", "status": 200}, CARD_HEAD),
        ("title", "message", {"body": "1", "status": 400}, {**CARD_HEAD, "title": "title", "text": "message"}),
    ],
)
def test_send_accepted(teams, title, msg, reply, card):
    with responses.RequestsMock() as fake:
        fake.add(responses.POST, TEAMS_HOOK, **reply)
        assert teams.send_teams_message(title, msg) is None
        assert json.loads(fake.calls[0].request.body) == card


@pytest.mark.parametrize(
    "reply, error, text",
    [
        (
            {"body": "not found", "status": 404},
            RuntimeError,
            "error response from Teams Webhook - code [404] - msg [not found]",
        ),
        ({"body": requests.ConnectionError("http do error")}, requests.ConnectionError, "http do error"),
    ],
)
def test_send_failures(teams, reply, error, text):
    with responses.RequestsMock() as fake, pytest.raises(error) as info:
        fake.add(responses.POST, TEAMS_HOOK, **reply)
        teams.send_teams_message("title", "message")
    assert str(info.value) == text


def test_send_bad_url(teams):
    teams.webhook_url = ""
    with pytest.raises(requests.exceptions.MissingSchema):
        teams.send_teams_message("title", "message")