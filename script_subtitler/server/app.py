"""FastAPI application exposing subtitle generation to editor panels.

WHY: The editor panel runs inside the host application and cannot run
Python itself. Instead of registering functions on a shared host namespace,
the generator is offered as a small local HTTP service: the panel uploads
the script with its options and a snapshot of the active sequence, and gets
back the written SRT file's path to import as a caption track.

HOW: A single FastAPI app exposes POST /subtitles (generate and save),
GET /subtitles/{filename} (download a written file),
POST /subtitles/preview (generate only) and GET /health. Both subtitle
endpoints share one request shape: a multipart script upload plus form
fields. Domain errors are mapped to HTTP status codes.

RULES:
- All endpoints have OpenAPI descriptions on every parameter and response
- Error responses use a consistent ErrorResponse schema
- 422: unreadable/empty script, malformed or inverted time range
- 409: automatic timing requested but no sequence duration available
- 500: the SRT file could not be written to the output directory
- Files are written to app.state.output_dir under unique names
- Python 3.9+ compatible (no match/case, no PEP 604 unions)
"""

from __future__ import annotations

import json
import logging
from typing import Annotated, Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from script_captions import SubtitleError
from script_subtitler import __version__
from script_subtitler.config import API_HOST, API_PORT, FILE_PREFIX, OUTPUT_DIR, SRT_MEDIA_TYPE
from script_subtitler.errors import DurationUnavailableError
from script_subtitler.generation import (
    GenerationOptions,
    GenerationResult,
    generate,
    run_generation,
)
from script_subtitler.host import (
    DurationResolver,
    FixedDurationResolver,
    SessionDurationResolver,
)
from script_subtitler.script_source import decode_script_bytes
from script_subtitler.server.models import (
    CueInfo,
    ErrorResponse,
    HealthResponse,
    SubtitleResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Script Subtitler API",
    description=(
        "Generate SRT caption tracks from plain-text scripts. Each script "
        "line becomes one cue, timed by its share of the script's words "
        "across the sequence duration or a manual start/end range."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)
app.state.output_dir = OUTPUT_DIR

_ERROR_RESPONSES = {
    409: {"model": ErrorResponse, "description": "Sequence duration unavailable"},
    422: {"model": ErrorResponse, "description": "Unusable script or invalid timing options"},
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _build_resolver(
    duration: Optional[float],
    session: Optional[str],
) -> Optional[DurationResolver]:
    """Pick the duration source: explicit seconds first, then the session snapshot."""
    if duration is not None:
        return FixedDurationResolver(duration)
    if not session:
        return None
    try:
        snapshot = json.loads(session)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=422, detail="Session is not valid JSON: {}".format(exc))
    if not isinstance(snapshot, dict):
        raise HTTPException(status_code=422, detail="Session must be a JSON object.")
    return SessionDurationResolver(snapshot)


def _to_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, DurationUnavailableError):
        return HTTPException(status_code=409, detail=str(exc))
    return HTTPException(status_code=422, detail=str(exc))


def _to_response(result: GenerationResult) -> SubtitleResponse:
    document = result.document
    return SubtitleResponse(
        filename=result.path.name if result.path else None,
        path=str(result.path) if result.path else None,
        content=document.content,
        cue_count=document.cue_count,
        total_duration_s=result.total_duration_s,
        start_offset_s=result.start_offset_s,
        cues=[
            CueInfo(index=cue.index, start=cue.start, end=cue.end, text=cue.text)
            for cue in document.cues
        ],
    )


async def _read_request(
    script: UploadFile,
    word_spacing: Optional[float],
    timing_mode: Optional[str],
    start_time: Optional[str],
    end_time: Optional[str],
    duration: Optional[float],
    session: Optional[str],
):
    """Decode the upload and turn the form fields into generation inputs."""
    script_text = decode_script_bytes(await script.read())
    options = GenerationOptions.from_mapping({
        "word_spacing": word_spacing,
        "timing_mode": timing_mode,
        "start_time": start_time,
        "end_time": end_time,
    })
    return script_text, options, _build_resolver(duration, session)


ScriptField = Annotated[
    UploadFile,
    File(description="Script text file, one caption per line (UTF-8 or UTF-16)."),
]
WordSpacingField = Annotated[
    Optional[float],
    Form(description="Spacing between words, clamped to 1-15. Fractions add a thin space."),
]
TimingModeField = Annotated[
    Optional[str],
    Form(description="'auto' (sequence duration, offset 0) or 'manual' (start/end times)."),
]
StartTimeField = Annotated[
    Optional[str],
    Form(description="Manual mode start time, HH:MM:SS[,mmm]."),
]
EndTimeField = Annotated[
    Optional[str],
    Form(description="Manual mode end time, HH:MM:SS[,mmm]."),
]
DurationField = Annotated[
    Optional[float],
    Form(description="Auto mode: sequence duration in seconds, if the panel already knows it."),
]
SessionField = Annotated[
    Optional[str],
    Form(description="Auto mode: JSON snapshot of the host session with an 'active_sequence'."),
]


# ---------------------------------------------------------------------------
# Endpoints: Subtitles
# ---------------------------------------------------------------------------


@app.post(
    "/subtitles",
    response_model=SubtitleResponse,
    status_code=201,
    tags=["subtitles"],
    summary="Generate and save a subtitle track",
    description=(
        "Upload a script and timing options. The SRT file is written under a "
        "unique name in the service's output directory; import the returned "
        "path as a caption track."
    ),
    responses={
        **_ERROR_RESPONSES,
        500: {"model": ErrorResponse, "description": "Output directory not writable"},
    },
)
async def create_subtitle_file(
    script: ScriptField,
    word_spacing: WordSpacingField = None,
    timing_mode: TimingModeField = None,
    start_time: StartTimeField = None,
    end_time: EndTimeField = None,
    duration: DurationField = None,
    session: SessionField = None,
) -> SubtitleResponse:
    try:
        script_text, options, resolver = await _read_request(
            script, word_spacing, timing_mode, start_time, end_time, duration, session,
        )
        result = run_generation(
            script_text,
            options,
            resolver,
            output_dir=app.state.output_dir,
            prefix=FILE_PREFIX,
        )
    except (SubtitleError, DurationUnavailableError) as exc:
        logger.info("Subtitle generation rejected: %s", exc)
        raise _to_http_error(exc)
    except OSError as exc:
        logger.exception("Could not write subtitle file to %s", app.state.output_dir)
        raise HTTPException(
            status_code=500,
            detail="Could not write the subtitle file: {}".format(exc),
        )

    return _to_response(result)


@app.post(
    "/subtitles/preview",
    response_model=SubtitleResponse,
    tags=["subtitles"],
    summary="Preview a subtitle track",
    description=(
        "Same inputs as POST /subtitles, but nothing is written. Returns the "
        "SRT content and cues for display."
    ),
    responses=_ERROR_RESPONSES,
)
async def preview_subtitles(
    script: ScriptField,
    word_spacing: WordSpacingField = None,
    timing_mode: TimingModeField = None,
    start_time: StartTimeField = None,
    end_time: EndTimeField = None,
    duration: DurationField = None,
    session: SessionField = None,
) -> SubtitleResponse:
    try:
        script_text, options, resolver = await _read_request(
            script, word_spacing, timing_mode, start_time, end_time, duration, session,
        )
        result = generate(script_text, options, resolver)
    except (SubtitleError, DurationUnavailableError) as exc:
        raise _to_http_error(exc)

    return _to_response(result)


@app.get(
    "/subtitles/{filename}",
    tags=["subtitles"],
    summary="Download a written subtitle file",
    description=(
        "Download an SRT file previously written by POST /subtitles, for "
        "panels that cannot read the service's output directory directly."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Invalid filename"},
        404: {"model": ErrorResponse, "description": "File not found"},
    },
)
async def download_subtitle_file(filename: str) -> Response:
    # Ensure filename doesn't contain path separators
    if "/" in filename or "\\" in filename or ".." in filename:
        raise HTTPException(status_code=400, detail="Invalid filename")
    if not filename.lower().endswith(".srt"):
        raise HTTPException(status_code=400, detail="Only .srt files can be downloaded.")

    fpath = app.state.output_dir / filename
    if not fpath.is_file():
        raise HTTPException(
            status_code=404,
            detail="File '{}' not found.".format(filename),
        )

    return Response(
        content=fpath.read_bytes(),
        media_type=SRT_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="{}"'.format(filename)},
    )


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness check for the panel before it sends a request.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the script-subtitler-api console script."""
    import uvicorn
    uvicorn.run(app, host=API_HOST, port=API_PORT)
