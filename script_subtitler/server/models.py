"""Pydantic response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for response serialization
and automatic OpenAPI documentation. The editor panel reads these fields
to import the file and to report what was generated.

HOW: One model per response shape. All fields carry descriptions for the
/docs UI.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Times are float seconds; formatted timestamps only appear inside cues
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class CueInfo(BaseModel):
    """One cue of the generated track."""

    index: int = Field(description="1-based cue number.")
    start: str = Field(description="Start timestamp, HH:MM:SS,mmm.")
    end: str = Field(description="End timestamp, HH:MM:SS,mmm.")
    text: str = Field(description="Cue text after word spacing.")


class SubtitleResponse(BaseModel):
    """Generated subtitle track.

    WHY: The panel needs the file location to import it as a caption
    track, and the content/cues to show a preview.

    RULES:
    - filename and path are None for previews (nothing written)
    - content is the exact SRT text that was (or would be) written
    """

    filename: Optional[str] = Field(
        default=None,
        description="Name of the written SRT file; absent for previews.",
    )
    path: Optional[str] = Field(
        default=None,
        description="Absolute path of the written SRT file; absent for previews.",
    )
    content: str = Field(description="The SRT document text.")
    cue_count: int = Field(description="Number of cues in the document.")
    total_duration_s: float = Field(description="Seconds distributed across the cues.")
    start_offset_s: float = Field(description="Start time of the first cue in seconds.")
    cues: List[CueInfo] = Field(description="The cues, in order.")

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "filename": "subtitles_1739959200000000000.srt",
                "path": "/Users/editor/Desktop/subtitles_1739959200000000000.srt",
                "content": "1\n00:00:00,000 --> 00:00:20,000\nHello there\n\n",
                "cue_count": 1,
                "total_duration_s": 20.0,
                "start_offset_s": 0.0,
                "cues": [
                    {"index": 1, "start": "00:00:00,000", "end": "00:00:20,000",
                     "text": "Hello there"},
                ],
            }
        ]
    }}


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
