from dataclasses import dataclass


@dataclass(frozen=True)
class Ok:
    """The message was handled (reply or fallback notice sent)."""


@dataclass(frozen=True)
class Err:
    """The message was dropped; ``cause`` is the exception that stopped it."""

    cause: Exception


HandleResult = Ok | Err
