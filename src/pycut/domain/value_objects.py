"""Value objects used across the domain layer."""

from enum import Enum

from pycut.domain.errors import InvalidResponseError


class Disposition(Enum):
    """Outcome classification of a single test invocation."""

    CONTINUE = "continue"
    DID_NOT_TEST = "did-not-test"
    FAILED = "failed"
    QUITTED = "quitted"
    ABORTED = "aborted"


class CallingConvention(Enum):
    """How a registered test is invoked by the battery."""

    FUNCTION = "function"
    CASE = "case"


NO_RESPONSE = ""
"""The empty response: no terminal, or end of input. Treated as continue/pass."""

BEFORE_RESPONSES: dict[str, Disposition] = {
    "c": Disposition.CONTINUE,
    "s": Disposition.DID_NOT_TEST,
    "f": Disposition.FAILED,
    "q": Disposition.QUITTED,
    "a": Disposition.ABORTED,
}

AFTER_RESPONSES: dict[str, Disposition] = {
    "p": Disposition.CONTINUE,
    "c": Disposition.CONTINUE,
    "f": Disposition.FAILED,
    "q": Disposition.QUITTED,
    "a": Disposition.ABORTED,
}

HELP_RESPONSES = frozenset({"h", "?"})

BEFORE_HELP = (
    "Continue:  Go ahead and perform the upcoming test.",
    "Skip:      Do not perform the test.  Treat it as passed.",
    "Fail:      Do not perform the test.  Treat it as failed.",
    "Quit:      Do not perform any more tests.  Treat this test as passed.",
    "Abort:     Do not perform the test.  Treat it as failed.",
)

AFTER_HELP = (
    "Pass:      Indicate that the test has passed.",
    "Fail:      Indicate that the test has failed.",
    "Quit:      Treat this test as passed, and end the unit-testing.",
    "Abort:     Treat this test as failed.",
)


def parse_response(response: str, table: dict[str, Disposition]) -> Disposition:
    """Map a single-character prompt response to a disposition.

    Matching is case-insensitive and only the first character counts. The
    empty response maps to CONTINUE.

    Args:
        response: The raw response.
        table: Either BEFORE_RESPONSES or AFTER_RESPONSES.

    Returns:
        Disposition: The disposition selected by the response.

    Raises:
        InvalidResponseError: If the character is not in the table.
    """
    if response == NO_RESPONSE:
        return Disposition.CONTINUE
    key = response[0].lower()
    if key not in table:
        raise InvalidResponseError(response, "".join(table))
    return table[key]
