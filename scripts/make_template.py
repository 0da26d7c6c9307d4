"""Write a pool import template (zero-padded sequential numbers) to an xlsx file.

Usage:
  python scripts/make_template.py --start 1 --end 180 --width 3 --out number_template.xlsx
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from luckydraw.services.spreadsheet_service import template_rows, write_workbook


logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--start", type=int, default=1)
    parser.add_argument("--end", type=int, default=180)
    parser.add_argument("--width", type=int, default=3)
    parser.add_argument("--out", default="number_template.xlsx")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    if args.end < args.start:
        raise SystemExit(f"--end ({args.end}) must be >= --start ({args.start})")

    rows = template_rows(args.start, args.end, args.width)
    out = pathlib.Path(args.out)
    out.write_bytes(write_workbook(rows, "numbers"))

    logger.info("Wrote %s numbers to %s", len(rows) - 1, out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
