import sys

from jarvis.config import API_HOST, API_PORT
from jarvis.logui import ui_state, error, info, UI_MODE


def run_api():
    import uvicorn

    from jarvis.api import create_app

    info(f"API: http://{API_HOST}:{API_PORT}")
    uvicorn.run(create_app(), host=API_HOST, port=API_PORT)


def main():
    try:
        ui_state("STARTING")
        if "--api" in sys.argv:
            run_api()
            return
        from jarvis.assistant import Jarvis

        Jarvis(text_only="--text" in sys.argv).run()
    except Exception as e:
        ui_state("ERROR")
        error(f"Failed to start: {e}")
        if not UI_MODE and sys.stdin.isatty():
            input("Press Enter to exit...")
        sys.exit(1)


if __name__ == "__main__":
    main()
