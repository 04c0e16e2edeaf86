"""Interface for the terminal used by interactive tests."""

import abc


class Prompter(abc.ABC):
    """Contract for asking the person running the tests a question.

    This is the only place the engine blocks: a test calling
    `TestStatus.prompt()` or `TestStatus.response()` waits here until an
    answer is available.
    """

    @abc.abstractmethod
    def get_response(self, prompt: str) -> str:
        """Show ``prompt`` and read one answer.

        Returns:
            str: The first character of the answer, or "" if there is no
            answer (empty line, end of input).
        """

    @abc.abstractmethod
    def beep(self) -> None:
        """Alert the user that a question is coming."""

    @abc.abstractmethod
    def pause(self, message: str) -> None:
        """Show ``message`` and wait until the user is ready to go on."""
