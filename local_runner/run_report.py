#!/usr/bin/env python3
"""
Generate a single project report on a workstation, outside the Function host.

How it fits in
──────────────
1. Settings that the Function App keeps in its configuration (template
   folder, log folder, storage connection string) live in a local **.env**.
2. We load that file **before** importing `project_report_core`, because its
   constants are read at import time.
3. The report is written to the output folder and the JSON result is
   printed to **stdout**.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parent.parent

load_dotenv(REPO_ROOT / ".env")

from project_report_core.process_report import run_report  # noqa: E402  (after .env)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Write a project report to disk")
    parser.add_argument("-f", "--format", required=True, help="excel | xlsx | pdf")
    parser.add_argument("-o", "--out", default=str(REPO_ROOT / "out"))
    parser.add_argument("-n", "--name", help="Report name (spaces are removed)")
    parser.add_argument("-p", "--project-id")
    args = parser.parse_args(argv)

    result = run_report(args.format, args.out, args.name, args.project_id)
    print(json.dumps(result))
    return 0 if result["ok"] else 1


if __name__ == "__main__":
    sys.exit(main())
