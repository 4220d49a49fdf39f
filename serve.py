#!/usr/bin/env python3
"""
Simple HTTP server to preview a generated site.
Run this after building the site so relative links resolve as they will when published.
"""

from __future__ import annotations

import argparse
import functools
import http.server
import logging
import socketserver
import webbrowser
from pathlib import Path
from typing import List, Optional

from site_errors import SiteBuildError

logger = logging.getLogger(__name__)


def make_handler(site_path: Path):
    """Request handler serving files from `site_path` without changing the working directory."""
    return functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(site_path))


def make_server(site_dir: Path, port: int = 8000) -> socketserver.TCPServer:
    site_path = Path(site_dir)
    if not site_path.is_dir():
        raise SiteBuildError("Site directory doesn't exist, build it first", site_path)
    return socketserver.TCPServer(("", port), make_handler(site_path))


def serve_site(site_dir: Path = Path("site"), port: int = 8000, open_browser: bool = True) -> None:
    with make_server(site_dir, port) as httpd:
        url = f"http://localhost:{httpd.server_address[1]}"
        logger.info("Serving %s at %s", site_dir, url)
        logger.info("Press Ctrl+C to stop")

        if open_browser:
            webbrowser.open(url)

        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Server stopped.")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Preview a generated site over HTTP.")
    parser.add_argument("--site", type=Path, default=Path("./site"), help="Folder holding the generated site")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    parser.add_argument("--no-browser", action="store_true", help="Don't open a browser window")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        serve_site(args.site, port=args.port, open_browser=not args.no_browser)
    except SiteBuildError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
