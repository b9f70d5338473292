"""
Crawl summary report generator.

Inputs
------
One or more summary JSON files written by main.py, e.g.

    python3 main.py crawl.log -o out/summary.json
    python3 main.py crawl.log -g seed -o out/by_seed.json

Outputs (for each input)
------------------------
- reports/<json_basename>.md : Human-readable Markdown report

What it summarizes
------------------
  - totals (records, unique records, bytes, unique bytes, fetch time, first/last fetch)
  - status codes with their labels
  - top mime types
  - the size histogram, smallest bucket first
  - top registered domains
  - top seeds

Grouped summaries (-g host / registered-domain / seed) get one section per group.

Usage
-----
    python3 tools/report.py out/summary.json
    python3 tools/report.py out/summary.json out/by_seed.json
"""

from __future__ import annotations

import json
import os
import sys
from datetime import datetime
from typing import Dict, List, TextIO

from crawlsummary.sizes import human_size

TOP = 10


# -------------------------------- Utilities ----------------------------------

def _pct(x: int, y: int) -> float:
    return (100.0 * x / y) if y else 0.0

def _top(buckets: Dict[str, dict], n: int = TOP) -> List[tuple]:
    return sorted(buckets.items(), key=lambda kv: -kv[1].get("count", 0))[:n]

def is_grouped(data: dict) -> bool:
    """An ungrouped summary has a "totals" Stats object at the top level."""
    totals = data.get("totals")
    return not (isinstance(totals, dict) and "count" in totals)


# --------------------------------- Writers -----------------------------------

def _write_table(md: TextIO, title: str, key_header: str, rows: List[tuple],
                 total: int, with_label: bool = False) -> None:
    md.write(f"### {title}\n\n")
    if not rows:
        md.write("_Nothing recorded._\n\n")
        return
    if with_label:
        md.write(f"| {key_header} | Label | Count | Share | Bytes |\n|---|---|---:|---:|---:|\n")
    else:
        md.write(f"| {key_header} | Count | Share | Bytes |\n|---|---:|---:|---:|\n")
    for key, s in rows:
        cnt = s.get("count", 0)
        cells = [str(key)]
        if with_label:
            cells.append(s.get("label", ""))
        cells += [str(cnt), f"{_pct(cnt, total):.2f}%", human_size(s.get("bytes", 0))]
        md.write("| " + " | ".join(cells) + " |\n")
    md.write("\n")


def write_summary_section(md: TextIO, summary: dict, heading: str) -> None:
    totals = summary.get("totals", {})
    total = totals.get("count", 0)

    md.write(f"## {heading}\n\n")
    md.write("| Metric | Value |\n|---|---:|\n")
    md.write(f"| Records | {total} |\n")
    md.write(f"| Unique records | {totals.get('uniqueCount', 0)} |\n")
    md.write(f"| Bytes | {totals.get('bytes', 0)} ({human_size(totals.get('bytes', 0))}) |\n")
    md.write(f"| Unique bytes | {totals.get('uniqueBytes', 0)} ({human_size(totals.get('uniqueBytes', 0))}) |\n")
    md.write(f"| Fetch time | {totals.get('millis', 0) / 1000:.1f} s |\n")
    md.write(f"| First fetch | {totals.get('firstTime', '-')} |\n")
    md.write(f"| Last fetch | {totals.get('lastTime', '-')} |\n\n")

    statuses = sorted(summary.get("statusCodes", {}).items(), key=lambda kv: int(kv[0]))
    _write_table(md, "Status codes", "Status", statuses, total, with_label=True)
    _write_table(md, f"Mime types (top {TOP})", "Mime type", _top(summary.get("mimeTypes", {})), total)

    sizes = sorted(summary.get("sizeHisto", {}).items(), key=lambda kv: int(kv[0]))
    _write_table(md, "Size histogram", "Bucket", sizes, total, with_label=True)
    _write_table(md, f"Registered domains (top {TOP})", "Domain",
                 _top(summary.get("registeredDomains", {})), total)
    _write_table(md, f"Seeds (top {TOP})", "Seed", _top(summary.get("seeds", {})), total)


def write_markdown(data: dict, source: str, out_md: str) -> None:
    os.makedirs(os.path.dirname(out_md) or ".", exist_ok=True)
    base = os.path.basename(source)
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    with open(out_md, "w", encoding="utf-8") as md:
        md.write(f"# Crawl Summary Report: {base}\n\n")
        md.write(f"_Generated: {ts}_\n\n")

        if is_grouped(data):
            groups = sorted(data.items(), key=lambda kv: -kv[1].get("totals", {}).get("count", 0))
            md.write(f"{len(groups)} groups.\n\n")
            for key, summary in groups:
                write_summary_section(md, summary, key or "(none)")
        else:
            write_summary_section(md, data, "Summary")

        md.write("## Source\n\n")
        md.write(f"- Summary file: `{source}`\n")

    print(f"✓ Wrote {out_md}")


# ---------------------------------- Driver -----------------------------------

def generate_for_summary(path: str, out_dir: str = "reports") -> str:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    base = os.path.splitext(os.path.basename(path))[0]
    md_path = os.path.join(out_dir, f"{base}.md")
    write_markdown(data, path, md_path)
    return md_path

def main(argv: List[str]) -> int:
    if len(argv) < 2:
        print("Usage: python3 tools/report.py <summary.json> [<summary2.json> ...]", file=sys.stderr)
        return 2
    failed = 0
    for p in argv[1:]:
        try:
            generate_for_summary(p)
        except (OSError, ValueError) as e:
            failed += 1
            print(f"✗ Failed to process {p}: {e}", file=sys.stderr)
    return 1 if failed else 0

if __name__ == "__main__":
    sys.exit(main(sys.argv))
