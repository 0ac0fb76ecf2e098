"""Script Subtitler: build caption tracks for a video editor from a plain script.

WHY: Editors often have the narration script before they have any timing
information. This package produces a usable first-pass SRT track from the
script alone, spreading the sequence duration across lines by word count,
so the captions can be imported and fine-tuned in the editor.

HOW: Thin application layer around the pure script_captions library:
read and decode the script, resolve the total duration (host session
snapshot or a manual start/end range), generate the document, write it
under a unique file name, and optionally hand it to an importer. Exposed
as a CLI and as a small FastAPI service a host panel can call.

RULES:
- All timing and formatting logic lives in script_captions
- Host and file access stay in this package, never in the library
- Each run is stateless; nothing is persisted between runs
"""

__version__ = "0.1.0"
