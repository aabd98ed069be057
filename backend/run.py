"""
Start the Notify Core API with uvicorn.

Usage:
    python run.py                  # host/port from API_HOST / API_PORT
    python run.py --reload         # auto-reload while developing
    python run.py --port 8080 --log-level debug
"""
import argparse
import uvicorn

from notify_core.config.settings import settings


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Notify Core API server")
    parser.add_argument("--host", default=settings.api_host, help=f"Bind address (default: {settings.api_host})")
    parser.add_argument("--port", type=int, default=settings.api_port, help=f"Port (default: {settings.api_port})")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument("--workers", type=int, default=1, help="Worker processes, ignored with --reload")
    parser.add_argument("--log-level", default=settings.log_level.lower(), help="uvicorn log level")
    return parser.parse_args()


def main():
    args = parse_args()
    workers = 1 if args.reload else args.workers

    print(f"Starting Notify Core on {args.host}:{args.port} (reload={args.reload}, workers={workers})")

    uvicorn.run(
        "notify_core.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=workers,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
