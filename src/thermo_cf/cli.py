"""Command-line entry point for importing Thermo .CF files.

Usage:
    thermo-cf /data/2016/ --depth 4 --content header --output records.json

Records are written as a JSON array to --output, or stdout when omitted.
Progress and errors are logged to stderr.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from thermo_cf.batch import import_files, normalize_content, normalize_depth, normalize_verbose
from thermo_cf.config import load_settings
from thermo_cf.json_utils import dump_json_str
from thermo_cf.logging import get_logger, setup_logging
from thermo_cf.readers.thermo_cf import ThermoCFReader

logger = get_logger(__name__)

_EXTRA_FIELDS: list[str] = ["file_name", "file_size", "num_scans", "elapsed_s"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="thermo-cf",
        description="Import Thermo .CF chromatography files as JSON",
    )
    parser.add_argument("paths", nargs="+", help=".CF files or directories to search")
    parser.add_argument(
        "--depth",
        type=str,
        default=None,
        help="Subfolder search depth (default THERMO_CF_DEPTH or 1)",
    )
    parser.add_argument(
        "--content",
        type=str,
        default="all",
        help="all, header (metadata only) or data (signal only)",
    )
    parser.add_argument("--verbose", type=str, default="on", help="on or off")
    parser.add_argument("--output", type=str, default=None, help="Write JSON to this file")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the importer.

    Returns:
        0 when at least one file decoded or no files were found, 1 when every
        file failed, 2 on invalid configuration.
    """
    args = _build_parser().parse_args(argv)

    paths_arg: list[str] = args.paths
    depth_arg: str | None = args.depth
    content_arg: str = args.content
    verbose_arg: str = args.verbose
    output_arg: str | None = args.output

    try:
        settings = load_settings()
    except ValueError as e:
        sys.stderr.write(f"thermo-cf: {e}\n")
        return 2

    setup_logging(
        level=settings["log_level"],
        format_mode=settings["log_format"],
        service_name="thermo-cf",
        instance_id=None,
        extra_fields=_EXTRA_FIELDS,
    )

    depth = settings["default_depth"] if depth_arg is None else normalize_depth(depth_arg)
    result = import_files(
        paths_arg,
        depth=depth,
        content=normalize_content(content_arg),
        verbose=normalize_verbose(verbose_arg),
        reader=ThermoCFReader(window=settings["search_window"]),
    )

    payload = dump_json_str(result["records"], indent=2)
    if output_arg is None:
        sys.stdout.write(payload + "\n")
    else:
        Path(output_arg).write_text(payload + "\n", encoding="utf-8")
        logger.info("Wrote %d records to %s", len(result["records"]), output_arg)

    if result["errors"] and not result["records"]:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
