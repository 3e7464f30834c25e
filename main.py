#!/usr/bin/env python3
"""
Todo list driver — load the server-rendered list, bind it, replay gestures.

Usage:
    python main.py --print                              # fetch and show the list
    python main.py --toggle 42 --print                  # click checkbox 42
    python main.py --edit 42 "Buy <b>oat</b> milk"      # inline edit + Enter
    python main.py --delete 42 --yes                    # delete without prompting
    python main.py --conventions markup.json --print    # non-default class names
    python main.py --base-url http://127.0.0.1:3000 --log-format json --toggle 7

Gestures run in the order toggle, edit, delete and all requests are awaited
before the resulting markup is printed.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from api.client import TodoApiClient, TodoApiError
from ui.bindings import bind_all
from ui.page import TodoPage
from utils.config import AppConfig, MarkupConventions
from utils.logging import configure_logging


def prompt_confirm(message: str) -> bool:
    """Blocking y/N prompt on the terminal."""
    try:
        answer = input(f"{message} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def build_parser(cfg: AppConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Drive the todo list page against a running backend.",
    )
    parser.add_argument(
        "--base-url", default=cfg.base_url,
        help=f"Backend origin (default: {cfg.base_url} or TODO_API_BASE_URL env var)",
    )
    parser.add_argument(
        "--page-path", default=cfg.page_path,
        help=f"Path of the rendered list page (default: {cfg.page_path})",
    )
    parser.add_argument(
        "--conventions", type=Path, default=None, metavar="FILE",
        help="JSON object overriding markup class and attribute names",
    )
    parser.add_argument(
        "--toggle", action="append", default=[], metavar="ID",
        help="Click the checkbox of todo ID (repeatable)",
    )
    parser.add_argument(
        "--edit", action="append", nargs=2, default=[], metavar=("ID", "MARKUP"),
        help="Edit the label of todo ID and press Enter (repeatable)",
    )
    parser.add_argument(
        "--delete", action="append", default=[], metavar="ID",
        help="Click the delete button of todo ID (repeatable)",
    )
    parser.add_argument(
        "--yes", action="store_true",
        help="Confirm deletes without prompting",
    )
    parser.add_argument(
        "--print", dest="print_markup", action="store_true",
        help="Print the page markup once all requests have settled",
    )
    parser.add_argument(
        "--log-format", choices=("text", "json"), default=cfg.log_format,
        help="Log output format (default: text or APP_LOG_FORMAT env var)",
    )
    return parser


async def run(args: argparse.Namespace, page: TodoPage) -> None:
    for item_id in args.toggle:
        page.click_checkbox(item_id)
    for item_id, markup in args.edit:
        page.edit_label(item_id, markup)
    for item_id in args.delete:
        page.hover(item_id)
        page.click_delete(item_id)
    await page.drain()


def main(argv: list[str] | None = None) -> int:
    cfg = AppConfig.from_env()
    args = build_parser(cfg).parse_args(argv)
    configure_logging(args.log_format, cfg.log_level)

    try:
        conventions = (MarkupConventions.load_json(args.conventions)
                       if args.conventions else MarkupConventions())
    except (OSError, ValueError) as exc:
        print(f"Error: could not read conventions: {exc}", file=sys.stderr)
        return 1

    cfg.base_url = args.base_url.rstrip("/")
    client = TodoApiClient.from_config(cfg)
    try:
        markup = client.fetch_page(args.page_path)
    except TodoApiError as exc:
        print(f"Error: could not load {args.page_path}: {exc}", file=sys.stderr)
        client.close()
        return 1

    page = TodoPage.from_html(
        markup, client,
        conventions=conventions,
        confirm=(lambda message: True) if args.yes else prompt_confirm,
    )
    bind_all(page)
    try:
        asyncio.run(run(args, page))
    except KeyError as exc:
        print(f"Error: {exc.args[0]}", file=sys.stderr)
        return 1
    finally:
        page.close()
        client.close()

    if args.print_markup:
        print(page.document.to_html())
    return 0


if __name__ == "__main__":
    sys.exit(main())
