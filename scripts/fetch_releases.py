#!/usr/bin/env python3
"""CLI entry point for fetching releases of your starred GitHub repositories."""

import argparse
import os
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv

from starred_releases import StarredReleasesFetcher


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description="Fetch releases of your starred GitHub repositories using GraphQL API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Release feed of every starred repository
  python fetch_releases.py -o releases.parquet

  # First 3 pages of 50 repos, newest 200 releases with descriptions
  python fetch_releases.py --max-pages 3 --page-size 50 --limit 200 \\
      --with-descriptions -o releases.parquet

  # Stable releases only, as CSV
  python fetch_releases.py --no-prereleases -o releases.csv
        """
    )

    fetch_group = parser.add_argument_group("Fetch options")
    fetch_group.add_argument(
        "--max-pages",
        type=int,
        default=None,
        help="Maximum pages of starred repositories (default: all)"
    )
    fetch_group.add_argument(
        "--page-size",
        type=int,
        default=20,
        help="Starred repositories per request, 1-100 (default: 20)"
    )
    fetch_group.add_argument(
        "--with-descriptions",
        action="store_true",
        help="Also fetch the rendered HTML description of each release"
    )

    filter_group = parser.add_argument_group("Filters")
    filter_group.add_argument(
        "--include-drafts",
        action="store_true",
        help="Include draft releases (excluded by default)"
    )
    filter_group.add_argument(
        "--no-prereleases",
        action="store_true",
        help="Exclude prereleases"
    )
    filter_group.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Keep only the newest N releases (default: all)"
    )

    output_group = parser.add_argument_group("Output options")
    output_group.add_argument(
        "--output", "-o",
        type=str,
        required=True,
        help="Output file path (.parquet or .csv)"
    )

    auth_group = parser.add_argument_group("Authentication")
    auth_group.add_argument(
        "--token",
        type=str,
        help="GitHub Personal Access Token (or set GITHUB_TOKEN env var)"
    )

    return parser


def save(fetcher: StarredReleasesFetcher, output_path: Path) -> None:
    """Save fetched releases in the format given by the file suffix."""
    if output_path.suffix == ".csv":
        fetcher.save_to_csv(output_path)
    else:
        fetcher.save_to_parquet(output_path)


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    load_dotenv()

    token = args.token or os.environ.get("GITHUB_TOKEN")
    if not token:
        print("Error: GitHub token required. Set GITHUB_TOKEN env var or use --token")
        print("Get a token at: https://github.com/settings/tokens")
        sys.exit(1)

    if args.limit is not None and args.limit < 0:
        print(f"Error: --limit must not be negative, got {args.limit}")
        sys.exit(1)

    output_path = Path(args.output)
    if not output_path.suffix:
        output_path = output_path.with_suffix(".parquet")

    try:
        fetcher = StarredReleasesFetcher(token, page_size=args.page_size)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    try:
        fetcher.fetch_release_feed(
            max_pages=args.max_pages,
            include_drafts=args.include_drafts,
            include_prereleases=not args.no_prereleases,
            with_descriptions=args.with_descriptions,
            limit=args.limit
        )

        save(fetcher, output_path)
        print(f"\nDone! Output saved to: {output_path}")

    except KeyboardInterrupt:
        print("\n\nInterrupted by user. Saving progress...")
        save(fetcher, output_path)
        sys.exit(0)

    except Exception as e:
        print(f"\nError: {e}")
        if fetcher.releases:
            print("Saving partial results...")
            save(fetcher, output_path)
        sys.exit(1)


if __name__ == "__main__":
    main()
