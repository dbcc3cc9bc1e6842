"""
CLI entry point — argument parsing and the replace/stats commands.
"""

import argparse
import sys

from .api import replace_in_file
from .cli_display import print_error, print_note, print_success, setup_logger
from .config import Config
from .diff_display import format_colored_diff, prompt_diff_approval
from .editing.errors import PatchError
from .editing.line_range import parse_path_with_range
from .editing.metrics import read_edit_stats
from .security import AccessDeniedError

_USAGE_EXAMPLE = (
    "Example: spekta replace src/file.ts[10,50] 'blocks content'\n"
    "         cat blocks.txt | spekta replace src/file.ts"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spekta",
        description="spekta — apply LLM SEARCH/REPLACE edits to files",
    )
    parser.add_argument("--config", default=None,
                        help="Path to .spekta.yaml config file")
    parser.add_argument("--verbose", action="store_true",
                        help="Echo log records to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    rep = sub.add_parser(
        "replace",
        help="Apply SEARCH/REPLACE blocks to a file",
        epilog=_USAGE_EXAMPLE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    rep.add_argument("file", help="Target file, optionally with a line range: "
                                  "file.py[start,end]")
    rep.add_argument("blocks", nargs="*",
                     help="SEARCH/REPLACE blocks (read from stdin when "
                          "omitted or '-')")
    rep.add_argument("--dry-run", action="store_true",
                     help="Show the diff without writing the file")
    rep.add_argument("--review", action="store_true",
                     help="Review the diff interactively before writing")

    stats = sub.add_parser("stats", help="Show edit metrics")
    stats.add_argument("--last", type=int, default=50,
                       help="Number of recent edits to include")
    return parser


def _read_blocks(args: argparse.Namespace) -> str:
    if not args.blocks or args.blocks == ["-"]:
        return sys.stdin.read()
    return " ".join(args.blocks)


def run_replace(args: argparse.Namespace, cfg: Config) -> int:
    path, line_range = parse_path_with_range(args.file)
    blocks_input = _read_blocks(args)
    if not blocks_input.strip():
        print_error("Replace failed: no SEARCH/REPLACE blocks provided.")
        return 1

    approve = prompt_diff_approval if args.review and not args.dry_run else None
    try:
        report = replace_in_file(
            path, blocks_input,
            line_range=line_range,
            dry_run=args.dry_run,
            approve=approve,
            config=cfg,
        )
    except (PatchError, AccessDeniedError) as exc:
        print_error(f"Replace failed: {exc}")
        return 1

    if args.dry_run and report.diff:
        print(format_colored_diff(report.diff) if sys.stdout.isatty()
              else report.diff)
    print_success(report.message)
    return 0


def run_stats(args: argparse.Namespace, cfg: Config) -> int:
    stats = read_edit_stats(last_n=args.last, metrics_dir=cfg.METRICS_DIR)
    if not stats["total_edits"]:
        print_note("No edits recorded yet.")
        return 0
    print(f"Edits:        {stats['total_edits']}")
    print(f"Success rate: {stats['success_rate']:.1f}%")
    print(f"Avg blocks:   {stats['avg_blocks']:.1f}")
    for kind, pct in stats["error_kinds"].items():
        print(f"  {kind}: {pct:.1f}%")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    cfg = Config.load(args.config)
    setup_logger(cfg.LOG_DIR, verbose=args.verbose)

    if args.command == "replace":
        return run_replace(args, cfg)
    return run_stats(args, cfg)


if __name__ == "__main__":
    sys.exit(main())
