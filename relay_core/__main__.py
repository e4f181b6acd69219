"""命令行入口：python -m relay_core [--host HOST] [--port PORT]"""

import argparse

import uvicorn

from relay_core.config.settings import settings


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Run the chat relay HTTP service")
    parser.add_argument("--host", default=settings.host, help="bind address")
    parser.add_argument("--port", type=int, default=settings.port, help="bind port")
    parser.add_argument("--reload", action="store_true", help="auto-reload on code changes")
    args = parser.parse_args(argv)
    uvicorn.run("relay_core.api.app:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
