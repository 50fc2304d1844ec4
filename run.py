import os
import sys

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from opstracker.config import reload_config
from opstracker.logger import configure_logging, log


def _print_usage() -> None:
    usage = (
        "Usage:\n"
        "  python run.py api [--host HOST] [--port PORT]\n"
        "  python run.py worker [celery worker options]\n"
    )
    print(usage.strip())


def _option(args: list[str], name: str, default: str) -> str:
    if name in args:
        index = args.index(name)
        if index + 1 < len(args):
            return args[index + 1]
    return default


def run_api(args: list[str]) -> int:
    import uvicorn

    host = _option(args, "--host", os.getenv("HOST", "127.0.0.1"))
    port = int(_option(args, "--port", os.getenv("PORT", "8000")))
    log("[dispatcher] starting API", host=host, port=port)
    uvicorn.run("opstracker.api.main:app", host=host, port=port, reload=False)
    return 0


def run_worker(args: list[str]) -> int:
    from opstracker.worker import celery_app

    log("[dispatcher] starting deletion worker")
    celery_app.worker_main(["worker", "--loglevel=INFO", *args])
    return 0


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    if not args:
        _print_usage()
        return 1

    reload_config()
    configure_logging(os.getenv("LOG_LEVEL", "INFO").upper())

    command, extra_args = args[0], args[1:]
    if command == "api":
        return run_api(extra_args)
    if command == "worker":
        return run_worker(extra_args)

    print(f"[dispatcher error] Unknown command '{command}'.", file=sys.stderr)
    _print_usage()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
