#!/usr/bin/env python3
"""
Storm Impact Report CLI — download, report generation, category diagnostics, API server.

USAGE:
  python -m storm_report.cli download                        # Fetch dataset unless cached
  python -m storm_report.cli download --force                # Re-download

  python -m storm_report.cli report                          # Workbook + charts, all years
  python -m storm_report.cli report --since 1996             # Only events from 1996 on
  python -m storm_report.cli report --top 10 --no-chart

  python -m storm_report.cli categories                      # Rule table
  python -m storm_report.cli categories --unmatched 30        # Most common unmatched labels

  python -m storm_report.cli serve --port 8000               # Start API server
"""
from __future__ import annotations

import argparse
import json
import os
from datetime import datetime
from pathlib import Path

import requests

from storm_report.config import DATA_URL, REPORTS_FOLDER, TOP_N
from storm_report.data.download import dataset_path, fetch_dataset
from storm_report.data.store import EventStore
from storm_report.data.schemas import YearRange


def _banner(title: str) -> None:
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def _build_year_range(args) -> YearRange | None:
    """Build a YearRange from CLI args."""
    since = getattr(args, "since", None)
    until = getattr(args, "until", None)
    if since is None and until is None:
        return None
    return YearRange(since, until)


def _load_store(args) -> EventStore:
    """Load from --data when given (never downloaded), else the cached or fetched default."""
    if getattr(args, "data", None):
        path = Path(args.data)
        if not path.exists():
            raise FileNotFoundError(f"No dataset at {path} (fetch it with: storm-report download --data {path})")
        return EventStore().load(path)
    return EventStore().load()


def cmd_download(args):
    """Download the raw dataset."""
    _banner("STORM IMPACT REPORT — DOWNLOAD")
    dest = Path(args.data) if args.data else dataset_path()
    path = fetch_dataset(args.url, dest, force=args.force)
    print(f"\n  Dataset: {path}\n")


def cmd_report(args):
    """Generate the workbook, chart PNG and JSON summary."""
    _banner("STORM IMPACT REPORT")
    print(f"  Started: {datetime.now():%Y-%m-%d %H:%M:%S}")

    year_range = _build_year_range(args)
    store = _load_store(args)

    from storm_report.reports.impact_report import generate_json, write_excel

    output_folder = Path(args.output) if args.output else REPORTS_FOLDER / datetime.now().strftime("%Y%m%d_%H%M%S")
    output_folder.mkdir(parents=True, exist_ok=True)

    data = generate_json(store, year_range, args.top)
    print(f"\n  Period: {data['period']}  ({data['date_range']})")
    print(f"  Uncategorized events: {data['uncategorized_pct']:.2f}%")
    print("  Generating outputs...\n")

    write_excel(data, output_folder / "Storm_Impact_Report.xlsx")
    print("   Storm_Impact_Report.xlsx")

    if not args.no_chart:
        from storm_report.reports.figures import render_charts
        render_charts(data, output_folder / "Storm_Impact_Charts.png")
        print("   Storm_Impact_Charts.png")

    with open(output_folder / "storm_impact_summary.json", "w") as f:
        json.dump(data, f, indent=2)
    print("   storm_impact_summary.json")

    for key, label, field in [
        ("by_fatalities", "FATALITIES", "fatalities"),
        ("by_injuries", "INJURIES", "injuries"),
        ("by_damage", "ECONOMIC DAMAGE (USD)", "total_damage_usd"),
    ]:
        print(f"\n  TOP {args.top} BY {label}")
        for r in data[key]:
            print(f"  {r['rank']:>4}  {r['category'][:34]:<36}{r[field]:>20,.0f}")

    print(f"\n  Reports saved to: {output_folder}")
    print("=" * 70 + "\n")


def cmd_categories(args):
    """Print the classification rules, or the most frequent unmatched labels."""
    from storm_report.data.classify import category_legend, uncategorized_labels

    if not args.unmatched:
        print(f"\nCATEGORY RULES ({len(category_legend())}, first match wins):\n")
        for i, (category, keywords) in enumerate(category_legend(), 1):
            print(f"{i:<4}{category:<28}{keywords}")
        print()
        return

    store = _load_store(args)
    labels = uncategorized_labels(store.get_events(), args.unmatched)
    print(f"\nUNMATCHED LABELS ({store.uncategorized_pct():.2f}% of events):\n")
    for i, row in enumerate(labels.itertuples(index=False), 1):
        print(f"{i:<4}{row.label[:40]:<42}{row.events:>10,}")
    print()


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Storm Impact Report API on port {args.port}...")
    uvicorn.run("storm_report.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Storm Impact Report — harm and damage of U.S. severe weather by event category",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    download_parser = subparsers.add_parser("download", help="Download the raw dataset")
    download_parser.add_argument("--url", default=DATA_URL, help="Source URL")
    download_parser.add_argument("--data", help="Where to save the compressed CSV (default: cache folder)")
    download_parser.add_argument("--force", action="store_true", help="Re-download even if cached")
    download_parser.set_defaults(func=cmd_download)

    report_parser = subparsers.add_parser("report", help="Generate the impact report")
    report_parser.add_argument("--data", help="Existing local copy of the compressed CSV (no download)")
    report_parser.add_argument("--since", type=int, help="First event year (inclusive)")
    report_parser.add_argument("--until", type=int, help="Last event year (inclusive)")
    report_parser.add_argument("--top", type=int, default=TOP_N, help=f"Categories per chart (default {TOP_N})")
    report_parser.add_argument("--output", help="Output directory (default: timestamped folder)")
    report_parser.add_argument("--no-chart", action="store_true", help="Skip the PNG chart")
    report_parser.set_defaults(func=cmd_report)

    categories_parser = subparsers.add_parser("categories", help="Show classification rules")
    categories_parser.add_argument("--data", help="Existing local copy of the compressed CSV (no download)")
    categories_parser.add_argument("--unmatched", type=int, default=0,
                                   help="List the N most frequent labels no rule matched")
    categories_parser.set_defaults(func=cmd_categories)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    if getattr(args, "top", 1) < 1:
        parser.error("--top must be at least 1")
    try:
        _build_year_range(args)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        args.func(args)
    except (FileNotFoundError, requests.RequestException) as e:
        print(f"\n  ERROR: storm data unavailable: {e}")
        print("  Run `storm-report download` first, or pass --data PATH.\n")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
