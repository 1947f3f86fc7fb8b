"""
Board en mode console.

Usage:
    python -m app.frontend watch --base-url http://localhost:8000
    python -m app.frontend delete 3 --base-url http://localhost:8000
"""

import argparse
import logging
import time

from app.core.config import settings
from app.frontend.api_client import ContentApiClient
from app.frontend.console import ConsoleView
from app.frontend.controller import BoardController


def main(argv=None):
    parser = argparse.ArgumentParser(prog="python -m app.frontend", description="Content board console client")
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)
    sub = parser.add_subparsers(dest="command", required=True)

    watch = sub.add_parser("watch", help="Poll the board and print it on change")
    watch.add_argument("--interval", type=float, default=settings.POLL_INTERVAL_SECONDS)

    delete = sub.add_parser("delete", help="Delete a content block after confirmation")
    delete.add_argument("content_id", type=int)

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level)

    controller = BoardController(ContentApiClient(args.base_url), ConsoleView(),
                                 interval=getattr(args, "interval", None))

    if args.command == "delete":
        controller.load_contents(show_loading=False)
        return 0 if controller.delete(args.content_id) else 1

    controller.start()
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        controller.stop_polling()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
