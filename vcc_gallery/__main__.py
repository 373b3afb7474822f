# vcc_gallery/__main__.py
#
# Run:  python -m vcc_gallery [--root photos] [--port 3000]
# Open: http://127.0.0.1:3000
import argparse
import logging
from pathlib import Path

import uvicorn

from vcc_gallery.core.config import load_settings
from vcc_gallery.core.logs import setup_logging
from vcc_gallery.main import create_app


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve a folder of photos and videos as a web gallery.")
    parser.add_argument("--config", default=None, help="Path to gallery.toml (default: GALLERY_CONFIG or ./gallery.toml)")
    parser.add_argument("--root", dest="media_root", default=None, help="Media root directory (default: photos)")
    parser.add_argument("--host", default=None, help="Bind address (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Port (default: PORT or 3000)")
    parser.add_argument("--title", default=None, help="Gallery title")
    parser.add_argument("--author", default=None, help="Author shown under the title")
    parser.add_argument("--logs-dir", default=None, help="Also write rotating log files here")
    parser.add_argument("--json-logs", action="store_true", default=None,
                        help="Write JSON-formatted logs to the file handler")
    parser.add_argument("--log-level", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Force log level (overrides -v/-q)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Warnings and errors only")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    level = args.log_level or ("DEBUG" if args.verbose else "WARNING" if args.quiet else None)
    settings = load_settings(
        Path(args.config) if args.config else None,
        media_root=args.media_root,
        host=args.host,
        port=args.port,
        title=args.title,
        author=args.author,
        logs_dir=args.logs_dir,
        json_logs=args.json_logs,
        log_level=level,
    )
    logger = setup_logging(settings.log_level, settings.logs_dir, settings.json_logs)
    if not settings.media_root.is_dir():
        logger.warning(f"media root {settings.media_root} does not exist; pages will fail until it does")
    logger.info(f"Server is running on http://localhost:{settings.port} (media root: {settings.media_root})")

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port,
                log_level=logging.getLevelName(logger.level).lower())


if __name__ == "__main__":
    main()
