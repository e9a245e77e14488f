"""User-facing and configuration errors raised while resolving directives."""

from __future__ import annotations

from typing import Any, Dict, Optional


class DirectiveError(RuntimeError):
    """Base class for errors whose message is safe to show to the caller."""

    error_type = "directive"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.user_message = message

    def to_metadata(self) -> Dict[str, Any]:
        return {"type": self.error_type, "reason": self.user_message}


class ConflictingInput(DirectiveError):
    """Two mutually exclusive options were supplied together."""

    error_type = "conflict"

    def __init__(self, message: str, *, options: tuple = ()) -> None:
        super().__init__(message)
        self.options = tuple(options)

    def to_metadata(self) -> Dict[str, Any]:
        payload = super().to_metadata()
        if self.options:
            payload["options"] = list(self.options)
        return payload


class UnrecognizedResidue(DirectiveError):
    """Text was left over after every declared directive was stripped."""

    error_type = "residue"

    def __init__(self, residue: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"I don't understand `{residue}`. Check the usage of this command and try again.")
        self.residue = residue


class MissingArgument(DirectiveError):
    error_type = "missing"


class InvalidChoice(DirectiveError):
    error_type = "choice"


class UnknownCommand(DirectiveError):
    error_type = "command"

    def __init__(self, name: str) -> None:
        super().__init__(f"Hmm.. I don't recognize the command `{name}`.")
        self.name = name


class CommandConfigError(RuntimeError):
    """Raised when the command definition document is missing or invalid."""


__all__ = [
    "CommandConfigError",
    "ConflictingInput",
    "DirectiveError",
    "InvalidChoice",
    "MissingArgument",
    "UnknownCommand",
    "UnrecognizedResidue",
]
