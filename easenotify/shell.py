"""Notification by running a command with the result in its environment."""

from __future__ import annotations

import json
import logging
import os
import shlex
import subprocess
from dataclasses import dataclass, field

from easenotify.base import DefaultNotify, Format, NotifySettings

logger = logging.getLogger(__name__)

CSV_VARIABLE = "EASEPROBE_CSV"


def _parse_env_message(msg: str) -> dict[str, str]:
    data = json.loads(msg)
    if not isinstance(data, dict) or not all(
        isinstance(key, str) and isinstance(value, str) for key, value in data.items()
    ):
        raise ValueError("shell notification message must be a JSON object of strings")
    return data


@dataclass
class ShellNotify(DefaultNotify):
    """Runs a command, passing the notification as environment and CSV on stdin."""

    cmd: str = ""
    args: list[str] = field(default_factory=list)
    env: list[str] = field(default_factory=list)
    clean_env: bool = False

    def configure(self, settings: NotifySettings) -> None:
        self.kind = "shell"
        self.format = Format.SHELL
        self.send_func = self.run_shell
        super().configure(settings)

    def run_shell(self, title: str, msg: str) -> None:
        """Run the command; raise if the message is not valid or the command fails."""
        variables = _parse_env_message(msg)

        if self.clean_env:
            logger.info("[%s / %s] clean the environment variables", self.kind, self.name)
            environment: dict[str, str] = {}
        else:
            environment = dict(os.environ)
        environment.update(variables)
        for entry in self.env:
            key, _, value = entry.partition("=")
            if key:
                environment[key] = value

        result = subprocess.run(
            [self.cmd, *self.args],
            input=variables.get(CSV_VARIABLE, ""),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            env=environment,
            text=True,
            timeout=self.timeout or None,
            check=True,
        )
        logger.debug(
            "[%s / %s] - %s", self.kind, self.name, shlex.join([self.cmd, *self.args])
        )
        logger.debug("input: \n%s", msg)
        logger.debug("output:\n%s", result.stdout)