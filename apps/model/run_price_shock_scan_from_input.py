#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Repeg cost under price shocks, for every market in a snapshot file.

For each market the mark -> terminal price gap is split into --steps
deviations; each step trades the curve to the shocked price and prices the
repeg that restores the pre-shock mark price. Markets run concurrently.
"""

import argparse

from amm_repeg import load_markets, scan_markets
from amm_repeg.report import scan_lines
from amm_repeg.scan import DEFAULT_STEPS


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--input", required=True, help="Path to market snapshot JSON")
    p.add_argument("--steps", type=int, default=DEFAULT_STEPS, help="Deviation steps per market")
    p.add_argument("--workers", type=int, default=4, help="Markets evaluated concurrently")
    return p.parse_args()


def main() -> int:
    args = parse_args()
    markets = load_markets(args.input)
    scans = scan_markets(markets, args.steps, max_workers=args.workers)
    for scan in scans:
        for line in scan_lines(scan):
            print(line)
        print()
    return 1 if any(s.error for s in scans) else 0


if __name__ == "__main__":
    raise SystemExit(main())
