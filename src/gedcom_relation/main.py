"""
Single-file entry point: ``gedcom-relation-file -i tree.ged -o tree.json``.

This module is intentionally thin:
- argument parsing
- configuration setup
- pipeline orchestration

No parsing or business logic lives here.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from gedcom_relation.config import get_config
from gedcom_relation.core.context import ParseContext
from gedcom_relation.core.exceptions import ConversionError
from gedcom_relation.core.pipeline import Pipeline, output_path_for
from gedcom_relation.logging import get_logger, set_debug

log = get_logger("main")


# ---------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------
def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert one GEDCOM file to relationship-schema JSON"
    )
    parser.add_argument(
        "-i",
        "--input",
        required=True,
        help="Path to GEDCOM input file",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output JSON path (default: input path with a .json suffix)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    return parser


# ---------------------------------------------------------
# Pipeline Runner
# ---------------------------------------------------------
def run(input_path: str, output_path: Optional[str], debug_flag: bool) -> ParseContext:
    """
    Prepare context and execute the conversion pipeline.
    """
    cfg = get_config()
    if debug_flag:
        set_debug(True)

    if output_path is None:
        output_path = str(output_path_for(input_path))

    log.info("Loading GEDCOM: %s", input_path)

    ctx = ParseContext(
        config=cfg,
        logger=log,
        input_path=input_path,
        output_path=output_path,
        debug=bool(debug_flag or cfg.debug),
    )

    Pipeline(ctx).run()

    for finding in ctx.findings:
        log.warning("%s: %s", input_path, finding)

    log.info("Conversion complete. Output: %s (%d finding(s))", output_path, len(ctx.findings))
    return ctx


# ---------------------------------------------------------
# Program Entry Point
# ---------------------------------------------------------
def main(argv: Optional[List[str]] = None) -> int:
    ap = build_arg_parser()
    args = ap.parse_args(argv)

    try:
        run(
            input_path=args.input,
            output_path=args.output,
            debug_flag=args.debug,
        )
    except (ConversionError, OSError) as exc:
        log.error("Conversion failed: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
