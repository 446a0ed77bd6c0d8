#!/usr/bin/env python3
"""Launcher for the cost-model scripts in apps/model (repeg, adjust K, price-shock scan)."""

from __future__ import annotations

import argparse
import runpy
import sys
from pathlib import Path


SCRIPT_MAP = {
    "repeg-cost": "apps/model/run_repeg_cost_from_input.py",
    "adjust-k-cost": "apps/model/run_adjust_k_cost_from_input.py",
    "price-shock-scan": "apps/model/run_price_shock_scan_from_input.py",
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run a repeg / adjust-K / price-shock cost script on a market snapshot."
    )
    parser.add_argument("alias", choices=sorted(SCRIPT_MAP.keys()), help="Cost model to run")
    parser.add_argument("script_args", nargs=argparse.REMAINDER, help="Script arguments, e.g. --input markets.json --new-peg 101000")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    root = Path(__file__).resolve().parents[1]
    target = root / SCRIPT_MAP[args.alias]
    sys.argv = [str(target), *args.script_args]
    runpy.run_path(str(target), run_name="__main__")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
