"""Failure kinds raised by collaborators around the subtitle core.

WHY: Reading files, asking the host for a duration and importing the
result fail in ways the core knows nothing about. Reporting them as their
own kinds lets the CLI and the HTTP service give actionable guidance
(re-save the script as UTF-16, open a sequence first) per failure.

RULES:
- ScriptDecodeError is an InputError: it means "no readable text"
- Everything else derives from CollaboratorError, not from ValueError
- None of these are retried
"""

from __future__ import annotations

from script_captions.errors import InputError


class ScriptDecodeError(InputError):
    """No supported text encoding could decode the script."""

    def __init__(self, message: str = (
        "Could not read the selected script file. "
        "Please save it as UTF-16 LE or UTF-8 if using non-English text."
    )) -> None:
        super().__init__(message)


class CollaboratorError(RuntimeError):
    """Base class for failures outside the subtitle core."""


class ScriptNotFoundError(CollaboratorError):
    """The script file does not exist."""


class DurationUnavailableError(CollaboratorError):
    """Automatic timing was requested but the host cannot report a duration."""


class ImportFailedError(CollaboratorError):
    """The generated subtitle file could not be imported into the host."""
