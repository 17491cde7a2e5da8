#!/usr/bin/env python3
"""
CLI tool for analyzing a cleaned app dataset.
Usage: python -m app_analytics.analyze_apps APPS_CSV [options]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from app_analytics.analysis_job import run_analysis
from app_analytics.config import LOG_LEVELS, AnalyticsConfig


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    try:
        config = AnalyticsConfig.from_env()
    except ValueError as e:
        print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
        return 1

    parser = argparse.ArgumentParser(
        description='Compute store analytics for a cleaned app dataset',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m app_analytics.analyze_apps data/clean/apps.csv
  python -m app_analytics.analyze_apps data/clean/apps.csv --reviews data/clean/reviews.csv
  python -m app_analytics.analyze_apps data/clean/apps.csv --top-n 5 --output out/analytics.json
        """
    )

    parser.add_argument('apps_csv', type=Path, help='Cleaned apps CSV')
    parser.add_argument('--reviews',
                        type=Path,
                        help='Cleaned reviews CSV (optional)')
    parser.add_argument('--output',
                        type=Path,
                        default=config.default_output_path,
                        help=f'Output JSON file path (default: {config.default_output_path})')
    parser.add_argument('--top-n',
                        type=int,
                        default=config.top_n,
                        help=f'Entries in ranked lists (default: {config.top_n})')
    parser.add_argument('--log-level',
                        default=config.log_level,
                        choices=LOG_LEVELS,
                        type=str.upper,
                        help=f'Logging level (default: {config.log_level})')
    parser.add_argument('--quiet', '-q',
                        action='store_true',
                        help='Minimal output (just success/failure)')

    args = parser.parse_args(argv)

    if args.top_n <= 0:
        parser.error('--top-n must be positive')

    logging.basicConfig(
        level=logging.WARNING if args.quiet else args.log_level,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    if not args.quiet:
        print(f"Analyzing {args.apps_csv}")
        if args.reviews:
            print(f"Reviews: {args.reviews}")
        print()

    result = run_analysis(
        apps_path=args.apps_csv,
        output_path=args.output,
        reviews_path=args.reviews,
        top_n=args.top_n
    )

    if result['status'] != 'completed':
        print(f"ERROR: Analysis failed: {result['error_message']}", file=sys.stderr)
        return 1

    if args.quiet:
        print(result['output_path'])
    else:
        print(f"Apps analyzed: {result['apps_loaded']} ({result['apps_skipped']} skipped)")
        print(f"Reviews analyzed: {result['reviews_loaded']} ({result['reviews_skipped']} skipped)")
        print(f"Categories: {result['total_categories']}")
        print(f"Output: {result['output_path']}")
        print(f"Duration: {result['duration_seconds']:.2f}s")

    return 0


if __name__ == '__main__':
    sys.exit(main())
