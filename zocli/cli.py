"""CLI entry point for zocli."""

from __future__ import annotations

import argparse
import asyncio
import logging
import random
import sys
from datetime import date, datetime, time
from pathlib import Path

from dotenv import load_dotenv

from . import display
from .config import clear_cookie, load_config, resolve_cookie, save_cookie
from .db import OrdersNotFoundError, OrderStore
from .export import to_csv, to_json
from .sample import sample_orders
from .stats import (
    InvalidGroupingError,
    calculate_inflation,
    compute_summary,
    filter_orders_by_date,
    find_top_inflation_trends,
    group_orders,
    orders_by_time_window,
    orders_by_weekday,
    spend_by_weekday,
    suggest_restaurant,
    top_items,
    top_restaurants,
    wrapped_summary,
)
from .zomato import ZomatoClient, ZomatoError

logger = logging.getLogger(__name__)

_VIEWS = ("basic", "spend", "patterns", "personal", "all")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="zocli",
        description="Unofficial Zomato order tracker: sync your orders and see where the money goes",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to the config file (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # auth
    auth_parser = sub.add_parser("auth", help="Save or check the session cookie")
    auth_parser.add_argument("action", nargs="?", choices=["status", "logout"])
    auth_parser.add_argument("--cookie", type=str, default=None, help="Cookie header value")
    auth_parser.add_argument(
        "--cookie-file", type=str, default=None,
        help="File containing the Cookie header value",
    )
    auth_parser.add_argument(
        "--offline", action="store_true",
        help="status: only check that a cookie is saved",
    )

    # sync
    sync_parser = sub.add_parser("sync", help="Fetch orders and store them locally")
    sync_parser.add_argument(
        "--mock", action="store_true", help="Store bundled sample orders instead"
    )

    # orders
    orders_parser = sub.add_parser("orders", help="List stored orders")
    orders_parser.add_argument("--limit", type=int, default=20, help="Max orders to show")

    # stats
    stats_parser = sub.add_parser("stats", help="Summarize spend")
    stats_parser.add_argument(
        "--group", type=str, default=None, help="Group by: none, month, year"
    )
    stats_parser.add_argument(
        "--view", type=str, default="basic", help=f"View: {', '.join(_VIEWS)}"
    )
    stats_parser.add_argument("--top", type=int, default=None, help="Top N restaurants/items")
    stats_parser.add_argument("--since", type=_parse_date, default=None, help="YYYY-MM-DD")
    stats_parser.add_argument("--until", type=_parse_date, default=None, help="YYYY-MM-DD")

    # inflation
    inflation_parser = sub.add_parser("inflation", help="Track unit price history")
    inflation_parser.add_argument(
        "query", nargs="*",
        help="Item name to show detailed history for (default: top trends)",
    )
    inflation_parser.add_argument("--top", type=int, default=5, help="Number of trends")

    # suggest
    suggest_parser = sub.add_parser("suggest", help="Suggest what to order")
    suggest_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    # wrapped
    wrapped_parser = sub.add_parser("wrapped", help="Year in review")
    wrapped_parser.add_argument("--year", type=int, default=None, help="Calendar year")

    # export
    export_parser = sub.add_parser("export", help="Export stored orders")
    export_parser.add_argument("--format", choices=["csv", "json"], default="csv")
    export_parser.add_argument(
        "--output", "-o", type=str, default=None, help="Output file (default: stdout)"
    )

    # config
    sub.add_parser("config", help="Show config and data paths")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    load_dotenv()
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    config = load_config(args.config)

    try:
        match args.command:
            case "auth":
                _cmd_auth(config, args)
            case "sync":
                asyncio.run(_cmd_sync(config, args))
            case "orders":
                _cmd_orders(config, args)
            case "stats":
                _cmd_stats(config, args)
            case "inflation":
                _cmd_inflation(config, args)
            case "suggest":
                _cmd_suggest(config, args)
            case "wrapped":
                _cmd_wrapped(config, args)
            case "export":
                _cmd_export(config, args)
            case "config":
                _cmd_config(config)
    except OrdersNotFoundError:
        print("Error: no stored orders yet; run 'zocli sync' first", file=sys.stderr)
        sys.exit(1)
    except (ZomatoError, InvalidGroupingError, ValueError, OSError) as e:
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date (want YYYY-MM-DD): {value}")


def _load_orders(config):
    with OrderStore(config.storage.db_path) as store:
        return store.load()


def _cmd_auth(config, args) -> None:
    if args.action == "logout":
        if clear_cookie(config):
            print("Logged out (saved cookie removed).")
        else:
            print("No saved cookie.")
        return

    if args.action == "status":
        asyncio.run(_auth_status(config, args.offline))
        return

    value = (args.cookie or "").strip()
    if not value and args.cookie_file:
        value = Path(args.cookie_file).expanduser().read_text(encoding="utf-8").strip()
    if not value:
        raise ValueError("cookie value is required; use --cookie or --cookie-file")

    path = save_cookie(config, value)
    print(f"Saved cookie to {path}")


async def _auth_status(config, offline: bool) -> None:
    cookie = resolve_cookie(config)
    if not cookie:
        print("Not logged in (no saved cookie). Run `zocli auth --cookie ...`.")
        return
    if offline:
        print("Saved cookie found. Run `zocli auth status` to validate it.")
        return

    async with ZomatoClient(
        cookie, base_url=config.sync.base_url, timeout=config.sync.timeout
    ) as client:
        ok = await client.check_auth()
    if ok:
        print("Logged in.")
    else:
        print("Not logged in (cookie invalid or expired). Run `zocli auth --cookie ...`.")


async def _cmd_sync(config, args) -> None:
    if args.mock:
        orders = sample_orders()
        with OrderStore(config.storage.db_path) as store:
            store.save(orders)
            print(f"Stored {len(orders)} sample orders in {store.path}")
        return

    cookie = resolve_cookie(config)
    if not cookie:
        raise ValueError("no cookie found; run 'zocli auth --cookie ...' first")

    terminal = sys.stdout.isatty()

    def progress(page: int, total_pages: int, total_orders: int) -> None:
        total = str(total_pages) if total_pages > 0 else "?"
        line = f"Fetched page {page}/{total} (orders: {total_orders})"
        if terminal:
            print(f"\r{line}", end="", flush=True)
        else:
            print(line)

    async with ZomatoClient(
        cookie,
        base_url=config.sync.base_url,
        page_delay=config.sync.page_delay,
        max_pages=config.sync.max_pages,
        timeout=config.sync.timeout,
    ) as client:
        try:
            orders = await client.fetch_all_orders(progress=progress)
        finally:
            if terminal:
                print()

    with OrderStore(config.storage.db_path) as store:
        store.save(orders)
        print(f"Stored {len(orders)} orders in {store.path}")


def _cmd_orders(config, args) -> None:
    orders = _load_orders(config)
    if args.limit > 0:
        orders = orders[: args.limit]
    print(display.format_orders(orders))


def _cmd_stats(config, args) -> None:
    orders = _load_orders(config)

    view = (args.view or "basic").strip().lower()
    if view not in _VIEWS:
        raise ValueError(f"unknown view: {view} (want one of {', '.join(_VIEWS)})")

    if args.since or args.until:
        start = datetime.combine(args.since, time.min) if args.since else None
        end = datetime.combine(args.until, time.max) if args.until else None
        orders = filter_orders_by_date(orders, start, end)

    group = args.group if args.group is not None else config.stats.group
    top = args.top if args.top is not None else config.stats.top
    summary = compute_summary(orders)

    if view in ("basic", "spend", "all"):
        groups = group_orders(orders, group)
        print(display.format_groups(groups, summary.currency))
        print()
        print(display.format_summary(summary))

    if view == "basic":
        print()
        print("More views: zocli stats --view spend | patterns | personal")
        return

    if view in ("spend", "all"):
        print()
        print("Spend by weekday")
        print(display.format_spend_buckets(spend_by_weekday(orders), summary.currency))
        print()

    if view in ("patterns", "all"):
        print("Ordering patterns")
        print(display.format_buckets("Day", orders_by_weekday(orders)))
        print()
        print(display.format_buckets("Time", orders_by_time_window(orders)))
        print()

    if view in ("personal", "all"):
        print("Personal stats")
        print(display.format_buckets("Restaurant", top_restaurants(orders, top)))
        print()
        items = top_items(orders, top)
        if items:
            print(display.format_buckets("Item", items))
        else:
            print("No item data to display.")
        print()


def _cmd_inflation(config, args) -> None:
    orders = _load_orders(config)
    query = " ".join(args.query).strip()

    if not query:
        trends = find_top_inflation_trends(orders, args.top)
        print("Top inflation trends (per restaurant)")
        print(display.format_trends(trends))
        print("\nTip: run 'zocli inflation <item name>' for detailed history.")
        return

    print(display.format_inflation(calculate_inflation(orders, query)))


def _cmd_suggest(config, args) -> None:
    orders = _load_orders(config)
    suggestion = suggest_restaurant(orders, random.Random(args.seed))
    if suggestion is None:
        print("No restaurants in your order history to suggest from.")
        return
    print(f"🍽  How about {suggestion.restaurant}?")
    if suggestion.item:
        print(f"   Your usual there: {suggestion.item}")


def _cmd_wrapped(config, args) -> None:
    orders = _load_orders(config)
    year = args.year
    if year is None:
        summary = compute_summary(orders)
        year = summary.latest.year if summary.latest else date.today().year
    print(display.format_wrapped(wrapped_summary(orders, year)))


def _cmd_export(config, args) -> None:
    orders = _load_orders(config)
    write = to_csv if args.format == "csv" else to_json

    if args.output is None:
        write(orders, sys.stdout)
        return

    with open(Path(args.output).expanduser(), "w", encoding="utf-8", newline="") as f:
        write(orders, f)
    print(f"Exported {len(orders)} orders to {args.output}", file=sys.stderr)


def _cmd_config(config) -> None:
    print(f"Config:  {config.path}")
    print(f"Cookie:  {Path(config.auth.cookie_file).expanduser()}")
    print(f"Orders:  {Path(config.storage.db_path).expanduser()}")


if __name__ == "__main__":
    main()
