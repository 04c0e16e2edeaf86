"""Prompters for PYCUT interactive tests."""

from collections.abc import Iterable

import click

from pycut.interfaces.prompter import Prompter


class ConsolePrompter(Prompter):
    """Terminal prompter built on click.

    Reads a line from stdin and keeps its first character. End of input
    yields the empty response, which the engine treats as continue/pass.
    """

    def get_response(self, prompt: str) -> str:
        """Ask ``prompt`` on the terminal and return the first character."""
        try:
            answer = click.prompt(
                prompt, default="", show_default=False, prompt_suffix=" "
            )
        except click.Abort:
            click.echo()
            return ""
        answer = answer.strip()
        return answer[:1]

    def beep(self) -> None:
        """Write the terminal bell."""
        click.echo("\a", nl=False)

    def pause(self, message: str) -> None:
        """Wait for a key press, unless stdin is not a terminal."""
        click.pause(info=f"{message} Press any key to continue...")


class ScriptedPrompter(Prompter):
    """A prompter that replays canned answers.

    Once the script runs out every question gets the empty response.

    Note:
        Not suitable for production use; intended for tests and demos.
    """

    def __init__(self, responses: Iterable[str] = ()) -> None:
        self._responses = list(responses)
        self.prompts: list[str] = []
        self.beeps = 0
        self.pauses: list[str] = []

    def get_response(self, prompt: str) -> str:
        """Record ``prompt`` and return the next canned answer."""
        self.prompts.append(prompt)
        if not self._responses:
            return ""
        return self._responses.pop(0)[:1]

    def beep(self) -> None:
        """Count the beep."""
        self.beeps += 1

    def pause(self, message: str) -> None:
        """Record the pause message."""
        self.pauses.append(message)
