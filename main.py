# main.py
"""
Entry point for the crawl log summarizer.
Wires up: parse args -> build Config -> seed map (pass 1) -> resolve -> summarize (pass 2) -> JSON.

Exit codes:
    0  summary written
    1  a record had no seed after resolution (nothing is written)
    2  missing input or bad options
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from crawlsummary.config import Config
from crawlsummary.crawllog import CrawlLog
from crawlsummary.domains import make_extractor
from crawlsummary.errors import SeedNotFoundError
from crawlsummary.grouping import GroupBy
from crawlsummary.logs import setup_logging
from crawlsummary.output import write_json
from crawlsummary.seeds import SeedResolver
from crawlsummary.summary import summarize, to_dict

logger = logging.getLogger("crawlsummary")


def ensure_parent_dir(filepath: str) -> None:
    """Create the parent directory for a file if it does not exist."""
    parent = os.path.dirname(os.path.abspath(filepath))
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Summarize a crawl.log by status, mime type, size, registered domain and seed."
    )
    p.add_argument("crawl_log", help="Path to crawl.log (plain or .gz).")
    p.add_argument("-g", "--group-by", default="none", choices=[g.value for g in GroupBy],
                   help="Split the summary by host, registered domain or seed.")
    p.add_argument("-n", "--top", type=int, default=0,
                   help="Keep only the top N status codes, mime types, domains and seeds (0 = all).")
    p.add_argument("-o", "--output", default=None, help="Write JSON here instead of stdout.")
    p.add_argument("--max-depth", type=int, default=None,
                   help="Max seed-resolution steps per URL before giving up (default: 50).")
    p.add_argument("--fetch-suffix-list", action="store_true",
                   help="Download the current public suffix list instead of using the bundled snapshot.")
    p.add_argument("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR).")
    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> Config:
    overrides = dict(
        group_by=GroupBy(args.group_by),
        top_n=args.top,
        output_path=args.output,
        fetch_suffix_list=args.fetch_suffix_list,
        log_level=args.log_level,
    )
    if args.max_depth is not None:
        overrides["max_resolve_depth"] = args.max_depth
    cfg = Config().with_overrides(**overrides)
    cfg.validate()
    return cfg


def run(cfg: Config, log_path: str) -> int:
    log = CrawlLog(log_path)
    extract = make_extractor(cfg.include_private_suffixes, cfg.fetch_suffix_list)

    # 1) Pass one: who discovered whom
    seeds = SeedResolver(cfg.max_resolve_depth)
    logger.info("Building seed map from %s", log_path)
    seeds.build(log)

    # 2) Collapse every chain to its seed, in memory
    logger.info("Starting seed detection")
    seeds.resolve()

    # 3) Pass two: fold records into statistics
    try:
        result = summarize(log, seeds, cfg.group_by, extract, cfg.top_n)
    except SeedNotFoundError as e:
        print(f"Did not find seed for item {e.key}", file=sys.stderr)
        return 1

    # 4) Emit, only once everything above succeeded
    if cfg.output_path:
        ensure_parent_dir(cfg.output_path)
        with open(cfg.output_path, "w", encoding="utf-8") as f:
            write_json(to_dict(result), f, cfg.indent)
        logger.info("Wrote %s", cfg.output_path)
    else:
        write_json(to_dict(result), sys.stdout, cfg.indent)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        cfg = build_config(args)
    except ValueError as e:
        print(f"Invalid options: {e}", file=sys.stderr)
        return 2
    setup_logging(cfg.log_level)

    if not os.path.isfile(args.crawl_log):
        print(f"Crawl log not found: {args.crawl_log}", file=sys.stderr)
        return 2

    try:
        return run(cfg, args.crawl_log)
    except OSError as e:
        print(f"Could not read {args.crawl_log}: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
