"""
Batch ingestion of channel URIs.

Features:
- Read one channel URI per line from a file or a directory of files
- Skip blank lines and '#' comments
- Report every line as a row (valid or not) instead of stopping at the first error
- Output structured JSONL or CSV
- Parse the name -> URI mapping found in the config "channels" section
"""

from __future__ import annotations

import csv
import json
import os
from typing import Dict, Iterable, Iterator, Mapping

from ..uri.parser import MalformedUri, ParsedUri, parse_uri
from ..utils.logger import logger


_FIELDNAMES = ["source", "ok", "scheme", "media", "params", "canonical", "error"]


def channel_row(s: str) -> Dict[str, object]:
    """Parse channel URI text as-is into a report row.

    Malformed URIs produce a row with ok=False and the failure reason in "error".
    """
    try:
        uri = parse_uri(s)
    except MalformedUri as exc:
        return {
            "source": s,
            "ok": False,
            "scheme": None,
            "media": None,
            "params": {},
            "canonical": None,
            "error": exc.reason,
        }
    row: Dict[str, object] = {"source": s, "ok": True}
    row.update(uri.to_dict())
    row["canonical"] = str(uri)
    row["error"] = None
    return row


def parse_channel_line(line: str) -> Dict[str, object]:
    """Parse a single line holding a channel URI into a report row.

    Surrounding whitespace is stripped. Returns {} for blank and comment lines.
    """
    s = line.strip()
    if not s or s.startswith("#"):
        return {}
    return channel_row(s)


def parse_channel_map(channels: Mapping[str, str]) -> Dict[str, ParsedUri]:
    """Parse a name -> URI mapping, failing on the first malformed channel."""
    parsed: Dict[str, ParsedUri] = {}
    for name, text in channels.items():
        try:
            parsed[name] = parse_uri(str(text))
        except MalformedUri as exc:
            raise MalformedUri(f"channel {name!r}: {exc.reason}", exc.input, exc.state, exc.position) from exc
    return parsed


def _iter_paths(input_path: str) -> Iterator[str]:
    if os.path.isdir(input_path):
        for root, dirs, files in os.walk(input_path):
            dirs.sort()
            for f in sorted(files):
                yield os.path.join(root, f)
    else:
        yield input_path


def _iter_lines(paths: Iterable[str]) -> Iterator[str]:
    for p in paths:
        try:
            with open(p, "r", encoding="utf-8", errors="replace") as f:
                yield from f
        except FileNotFoundError:
            logger.warning("Channel file not found: {}", p)
            continue


def _ensure_parent(path: str) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)


def _writer(output_path: str):
    ext = os.path.splitext(output_path)[1].lower()
    if ext == ".csv":
        return _csv_writer(output_path)
    # Default to jsonl
    return _jsonl_writer(output_path)


def _jsonl_writer(output_path: str):
    _ensure_parent(output_path)
    f = open(output_path, "w", encoding="utf-8")

    def write_row(row: Dict[str, object]) -> None:
        f.write(json.dumps(row, ensure_ascii=False) + "\n")

    def close() -> None:
        f.close()

    return write_row, close


def _csv_writer(output_path: str):
    _ensure_parent(output_path)
    f = open(output_path, "w", encoding="utf-8", newline="")
    writer = csv.DictWriter(f, fieldnames=_FIELDNAMES)
    writer.writeheader()

    def write_row(row: Dict[str, object]) -> None:
        out = {k: row.get(k) for k in _FIELDNAMES}
        # Params are flattened back to their query form
        out["params"] = "|".join(f"{k}={v}" for k, v in dict(row.get("params") or {}).items())
        writer.writerow(out)

    def close() -> None:
        f.close()

    return write_row, close


def batch_parse_channels(input_path: str, output_path: str) -> Dict[str, int]:
    """Parse channel URIs from a file or directory and write a structured report.

    - Supports file or directory input
    - Streams through input to limit memory usage
    - Output format inferred by output extension (jsonl/csv)

    Returns counts with keys: total, valid, invalid.
    """
    counts = {"total": 0, "valid": 0, "invalid": 0}
    write_row, close = _writer(output_path)
    try:
        for line in _iter_lines(_iter_paths(input_path)):
            row = parse_channel_line(line)
            if not row:
                continue
            counts["total"] += 1
            if row["ok"]:
                counts["valid"] += 1
            else:
                counts["invalid"] += 1
                logger.warning("Rejected channel {!r}: {}", row["source"], row["error"])
            write_row(row)
    finally:
        close()
    logger.debug("Parsed {total} channels ({valid} valid, {invalid} invalid)", **counts)
    return counts


__all__ = [
    "channel_row",
    "parse_channel_line",
    "parse_channel_map",
    "batch_parse_channels",
]
