"""Local launcher that serves the agent API."""

import argparse

import uvicorn

from infra.logger import configure_logging, get_logger


def main():
    parser = argparse.ArgumentParser(description="Serve the city survival agent over HTTP.")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port for the API (default: 8000)")
    parser.add_argument(
        "--reload",
        dest="reload",
        action="store_true",
        default=False,
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--no-reload",
        dest="reload",
        action="store_false",
        help="Disable auto-reload (default)",
    )
    parser.add_argument("--log-level", default="INFO", help="Agent log level (default: INFO)")
    parser.add_argument("--log-file", default=None, help="Also log to this file (relative to storage/logs)")
    args = parser.parse_args()

    configure_logging(level=args.log_level, json=True, log_file=args.log_file)
    log = get_logger(__name__)

    url = f"http://{args.host}:{args.port}"
    log.info("Starting agent API at %s", url)
    uvicorn.run(
        "api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
