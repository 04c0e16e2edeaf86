"""Domain-layer error definitions.

The engine raises these internally and converts them into data (an invalid
options record, a failed registration, a failing status) at its boundaries.
"""

# ============================================================================
#                           General errors
# ============================================================================


class PycutError(Exception):
    """Base class for all PYCUT errors."""


# ============================================================================
#                           Option errors
# ============================================================================


class OptionValueError(PycutError, ValueError):
    """Raised when an option is given a value outside its allowed range."""

    def __init__(self, option: str, value: object, reason: str) -> None:
        super().__init__(f"Bad value {value!r} for {option}: {reason}.")
        self.option = option
        self.value = value


class InvalidResponseError(PycutError, ValueError):
    """Raised when a prompt response character is not one of the accepted ones."""

    def __init__(self, response: str, accepted: str) -> None:
        super().__init__(
            f"Response {response!r} is not one of {', '.join(accepted)}."
        )
        self.response = response
        self.accepted = accepted


# ============================================================================
#                           Registry errors
# ============================================================================


class RegistryError(PycutError):
    """Base class for errors loading or running the battery of tests."""


class InvalidTestError(RegistryError):
    """Raised when something that is not a test is registered."""

    def __init__(self, test: object) -> None:
        super().__init__(f"{test!r} is not a unit-test function or case.")
        self.test = test


class MixedConventionError(RegistryError):
    """Raised when tests of two calling conventions are loaded into one battery."""

    def __init__(self, loaded: str, attempted: str) -> None:
        super().__init__(
            f"Cannot mix {attempted} tests into a battery of {loaded} tests."
        )
        self.loaded = loaded
        self.attempted = attempted

