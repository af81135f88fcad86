#!/usr/bin/env python3
"""
Unfollow Checker CLI

Compare a followers export with a following export from the terminal.
When the two files are omitted, commands use the last saved session.

Usage:
    python -m unfollow_checker.main stats [followers following]
    python -m unfollow_checker.main list <set> [followers following]
    python -m unfollow_checker.main search <set> <query> [followers following]
    python -m unfollow_checker.main export <set> [followers following] -f csv
    python -m unfollow_checker.main clear

Sets:
    unfollowers, not_following_back, mutual, followers, following
"""

import argparse
import asyncio
import logging
import sys

from unfollow_checker.core.errors import AnalysisError
from unfollow_checker.core.exporters import EXPORT_FORMATS, export_collection
from unfollow_checker.core.pipeline import Analyzer, summarize
from unfollow_checker.core.session import (
    FileKeyValueStore,
    Session,
    SessionStore,
    default_session_dir,
)
from unfollow_checker.tui.list_window import FilteredList

SET_NAMES = ["unfollowers", "not_following_back", "mutual", "followers", "following"]


def get_collection(session: Session, set_name: str) -> list[str]:
    """Return the named collection from a session."""
    if set_name == "followers":
        return session.followers
    if set_name == "following":
        return session.following
    return getattr(session.sets, set_name)


def build_analyzer(args) -> Analyzer:
    session_dir = args.session_dir or default_session_dir()
    return Analyzer(
        SessionStore(FileKeyValueStore(session_dir)),
        allow_empty=args.allow_empty,
    )


def get_session(args) -> Session:
    """Analyze the given files, or fall back to the saved session.

    Exits with status 1 if neither is available.
    """
    analyzer = build_analyzer(args)

    if args.followers or args.following:
        if not (args.followers and args.following):
            print("Error: both followers and following files are required", file=sys.stderr)
            sys.exit(1)
        try:
            return asyncio.run(analyzer.analyze_files(args.followers, args.following))
        except AnalysisError as e:
            print(f"Error [{e.kind.value}]: {e}", file=sys.stderr)
            sys.exit(1)

    session = analyzer.restore()
    if session is None:
        print(
            "Error: no saved session. Pass the followers and following files.",
            file=sys.stderr,
        )
        sys.exit(1)
    return session


# ============== Commands ==============

def cmd_stats(args):
    """Show counts and rates."""
    summary = summarize(get_session(args))

    print("=" * 60)
    print("RELATIONSHIP STATISTICS")
    print("=" * 60)
    print(f"  Analyzed at:             {summary.timestamp}")
    print(f"  Followers:               {summary.followers:,}")
    print(f"  Following:               {summary.following:,}")
    print(f"  Unfollowers:             {summary.unfollowers:,} ({summary.unfollower_rate}% of followers)")
    print(f"  Not following back:      {summary.not_following_back:,} ({summary.not_following_back_rate}% of following)")
    print(f"  Mutual:                  {summary.mutual:,} ({summary.mutual_rate}% of followers)")
    print("=" * 60)


def cmd_list(args):
    """List the usernames in one collection."""
    usernames = get_collection(get_session(args), args.set)

    count = 0
    for username in usernames:
        print(username)
        count += 1
        if args.limit and count >= args.limit:
            print(f"\n... (limited to {args.limit} of {len(usernames):,})", file=sys.stderr)
            break


def cmd_search(args):
    """Search a collection for a substring."""
    view = FilteredList(get_collection(get_session(args), args.set))
    view.set_query(args.query)

    for username in view.items[: args.limit] if args.limit else view.items:
        print(username)

    print("-" * 60, file=sys.stderr)
    print(
        f"Found {view.filtered_count:,} of {view.total_count:,} matching '{args.query}'",
        file=sys.stderr,
    )


def cmd_export(args):
    """Export a collection to a file."""
    usernames = get_collection(get_session(args), args.set)
    try:
        path = export_collection(usernames, args.output_dir, args.set, args.format)
    except OSError as e:
        print(f"Error: cannot write export: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Exported {len(usernames):,} usernames to {path}")


def cmd_clear(args):
    """Delete the saved session."""
    try:
        build_analyzer(args).clear()
    except OSError as e:
        print(f"Error: cannot clear session: {e}", file=sys.stderr)
        sys.exit(1)
    print("Session cleared")


def main():
    parser = argparse.ArgumentParser(
        description="Unfollow Checker - compare followers and following JSON exports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        '--session-dir',
        default=None,
        help='Directory the last session is saved in (default: $UNFOLLOW_CHECKER_HOME or ~/.unfollow_checker)',
    )
    parser.add_argument('--allow-empty', action='store_true', help='Accept an export with no usernames')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log progress to stderr')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    def add_file_arguments(subparser):
        subparser.add_argument('followers', nargs='?', help='Followers export (e.g. followers_1.json)')
        subparser.add_argument('following', nargs='?', help='Following export (e.g. following.json)')

    # Stats command
    stats_parser = subparsers.add_parser('stats', help='Show counts and rates')
    add_file_arguments(stats_parser)
    stats_parser.set_defaults(func=cmd_stats)

    # List command
    list_parser = subparsers.add_parser('list', help='List usernames in a set')
    list_parser.add_argument('set', choices=SET_NAMES, help='Which set to list')
    add_file_arguments(list_parser)
    list_parser.add_argument('-n', '--limit', type=int, help='Limit number of usernames')
    list_parser.set_defaults(func=cmd_list)

    # Search command
    search_parser = subparsers.add_parser('search', help='Search a set for a substring')
    search_parser.add_argument('set', choices=SET_NAMES, help='Which set to search')
    search_parser.add_argument('query', help='Case-insensitive substring')
    add_file_arguments(search_parser)
    search_parser.add_argument('-n', '--limit', type=int, help='Limit results')
    search_parser.set_defaults(func=cmd_search)

    # Export command
    export_parser = subparsers.add_parser('export', help='Export a set to a file')
    export_parser.add_argument('set', choices=SET_NAMES, help='Which set to export')
    add_file_arguments(export_parser)
    export_parser.add_argument(
        '-f', '--format',
        choices=sorted(EXPORT_FORMATS),
        default='csv',
        help='Export format (default: csv)',
    )
    export_parser.add_argument(
        '-O', '--output-dir',
        default='exports',
        help='Output directory (default: exports)',
    )
    export_parser.set_defaults(func=cmd_export)

    # Clear command
    clear_parser = subparsers.add_parser('clear', help='Delete the saved session')
    clear_parser.set_defaults(func=cmd_clear)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    args.func(args)


if __name__ == "__main__":
    main()
