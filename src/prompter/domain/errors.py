"""Exceptions raised by the prompter core."""

__all__ = [
    "PrompterError",
    "PrompterDestroyedError",
    "ChannelFullError",
    "ChannelEmptyError",
    "NoMatchError",
    "SourceDestroyError",
]


class PrompterError(Exception):
    """Base class for all prompter errors."""


class ChannelFullError(PrompterError):
    """A single-slot channel received a second value."""


class ChannelEmptyError(PrompterError):
    """A single-slot channel was read after its value was consumed."""


class PrompterDestroyedError(PrompterError):
    """An input change or result was requested after the prompter was destroyed."""


class NoMatchError(PrompterError):
    """No marked suggestion, no resolvable selection, and a match is required."""

    def __init__(self, input: str):
        super().__init__(f"No suggestion matches input {input!r} and a match is required")
        self.input = input


class SourceDestroyError(PrompterError):
    """Teardown steps failed while destroying a prompter.

    Attributes:
        failures: (owner, exception) pairs in teardown order; the owner is a
            source, or "before_destructor"/"after_destructor" for the hooks
    """

    def __init__(self, failures: list[tuple[object, BaseException]]):
        names = ", ".join(f"{owner!r}: {error}" for owner, error in failures)
        super().__init__(f"{len(failures)} teardown step(s) failed ({names})")
        self.failures = failures
