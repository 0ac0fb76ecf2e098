"""Package entry point for ``python -m script_subtitler``.

WHY: Users run the generator as ``python -m script_subtitler script.txt``
for CLI mode, or ``python -m script_subtitler --serve`` to start the HTTP
service an editor panel talks to.

HOW: Checks sys.argv for the ``--serve`` flag. If present, starts the
FastAPI app under uvicorn. Otherwise, delegates to the CLI's main().
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from script_subtitler.server.app import run_api
        run_api()
    else:
        from script_subtitler.cli import main
        main()
