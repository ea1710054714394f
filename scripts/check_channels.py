from __future__ import annotations

"""
Validate channel URIs and print their canonical form.

Usage examples:
  # Check every line of a file (or every file in a directory), write a JSONL report
  PYTHONPATH=. python scripts/check_channels.py --input channels.txt --out reports/channels.jsonl

  # Check the "channels" section of config.yaml
  PYTHONPATH=. python scripts/check_channels.py --config config.yaml

  # Check URIs given on the command line
  PYTHONPATH=. python scripts/check_channels.py "aeron:udp?endpoint=224.10.9.8:777" "aeron:ipc"
"""

import argparse
import sys
from typing import List

from channel_uri.ingestion.batch_ingestion import batch_parse_channels, channel_row, parse_channel_map
from channel_uri.uri.parser import MalformedUri
from channel_uri.utils.config import load_config, section, CONFIG_PATH
from channel_uri.utils.logger import setup_logging


def check_uris(uris: List[str]) -> int:
    failures = 0
    for text in uris:
        row = channel_row(text)
        if row["ok"]:
            print(f"OK       {row['canonical']}")
        else:
            failures += 1
            print(f"INVALID  {row['source']}  ({row['error']})")
    return failures


def check_config(path: str) -> int:
    config = load_config(path)
    try:
        channels = parse_channel_map(section(config, "channels"))
    except MalformedUri as exc:
        print(f"INVALID  {exc}")
        return 1
    for name, uri in channels.items():
        print(f"OK       {name}: {uri}")
    return 0


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("uris", nargs="*", help="Channel URIs to check")
    ap.add_argument("--input", help="File or directory with one channel URI per line")
    ap.add_argument("--out", default="reports/channels.jsonl", help="Report path for --input (.jsonl or .csv)")
    ap.add_argument("--config", nargs="?", const=CONFIG_PATH, help="Check the channels section of a YAML config")
    ap.add_argument("--log_dir", default="logs")
    args = ap.parse_args()

    if not (args.uris or args.input or args.config):
        ap.error("nothing to check: give URIs, --input or --config")

    setup_logging(args.log_dir)
    failures = 0
    if args.uris:
        failures += check_uris(args.uris)
    if args.input:
        counts = batch_parse_channels(args.input, args.out)
        failures += counts["invalid"]
        print(f"Checked {counts['total']} channels: {counts['valid']} valid, {counts['invalid']} invalid")
        print(f"Wrote: {args.out}")
    if args.config:
        failures += check_config(args.config)
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
