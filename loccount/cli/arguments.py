import argparse

from loccount.analyzers.loc.counter import DEFAULT_WORKERS
from loccount.analyzers.loc.models import DEFAULT_MAX_LINE_LENGTH

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="loccount",
        description="Count code, comment and blank lines per file and language"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Count lines under a file or directory")
    analyze.add_argument("path", help="File or directory to scan")
    analyze.add_argument("--json", action="store_true", help="Output JSON")
    analyze.add_argument("--output", help="Write output to file")
    analyze.add_argument("--verbose", action="store_true", help="Log every classification decision")
    analyze.add_argument("--by-file", action="store_true", help="Report each file instead of each language")
    analyze.add_argument("--line-numbers", action="store_true", help="Include line numbers per category")
    analyze.add_argument("--whitelist", help="Only report files listed in this file")
    analyze.add_argument("--exclude", action="append", default=[], metavar="DIR",
                         help="Directory name to skip (repeatable)")
    analyze.add_argument("--workers", type=int, default=DEFAULT_WORKERS)
    analyze.add_argument("--max-line-length", type=int, default=DEFAULT_MAX_LINE_LENGTH)

    return parser
