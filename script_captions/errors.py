"""Error taxonomy for subtitle generation.

WHY: The invoking layer (CLI, HTTP service, host panel) must show a
different message for "your script is empty" than for "your time range is
backwards". Distinct exception classes let callers branch on the failure
kind without parsing message strings.

HOW: Every core failure derives from SubtitleError, which is a ValueError
so existing ``except ValueError`` handlers keep working. InputError covers
problems with the script text itself; ValidationError covers bad numeric or
time-range parameters.

RULES:
- All errors are terminal for the current run; nothing retries
- No partial subtitle document is produced when any of these is raised
- EmptyDocumentError is an alias of DocumentEmptyError
"""


class SubtitleError(ValueError):
    """Base class for all subtitle generation failures."""


class InputError(SubtitleError):
    """The script text cannot produce subtitles (unreadable, empty, no words)."""


class EmptyInputError(InputError):
    """No non-blank line remains after parsing the script."""

    def __init__(self, message: str = "No valid subtitle lines found in the script.") -> None:
        super().__init__(message)


class NoWordsError(InputError):
    """The script lines contain no words at all."""

    def __init__(self, message: str = "No words found in the script.") -> None:
        super().__init__(message)


class ValidationError(SubtitleError):
    """A timing parameter is malformed, out of range, or inverted."""


class DocumentEmptyError(SubtitleError):
    """The assembled subtitle document would be empty.

    Unreachable when the parser and allocator guards hold; kept so the
    encoder never hands an empty file to an importer.
    """

    def __init__(self, message: str = "No valid lines found in the script.") -> None:
        super().__init__(message)


EmptyDocumentError = DocumentEmptyError
