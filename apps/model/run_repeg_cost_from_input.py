#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Estimate the cost of a repeg on a market snapshot.

Printing policy:
1) Peg, mark price and terminal price before/after.
2) Valuation-based cost (authoritative) and the closed-form estimate.
3) [warn] line when the two disagree beyond tolerance.

With --budget, the peg is solved from the target cost first and the achieved
cost is re-verified with the valuation model.
"""

import argparse
import sys

from amm_repeg import budgeted_peg, load_markets, repeg_cost
from amm_repeg.core import CostTolerance, Peg, QuoteAmount, QUOTE_PRECISION, fmt_amount, fmt_usd
from amm_repeg.core.exc import InvalidInputError, InvalidStateError
from amm_repeg.report import repeg_lines


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--input", required=True, help="Path to market snapshot JSON")
    p.add_argument("--symbol", default=None, help="Pick one market by symbol")
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--new-peg", type=int, help="New peg multiplier, raw (PEG_PRECISION=1e3)")
    g.add_argument("--budget", type=int, help="Target cost, raw quote units (QUOTE_PRECISION=1e6)")
    p.add_argument("--abs-tolerance", type=int, default=None, help="Cross-check slack, raw quote units")
    p.add_argument("--rel-tolerance-bps", type=int, default=None, help="Cross-check slack, bps of cost")
    return p.parse_args()


def _tolerance(args) -> CostTolerance:
    base = CostTolerance()
    return CostTolerance(
        abs_quote=QuoteAmount(args.abs_tolerance) if args.abs_tolerance is not None else base.abs_quote,
        rel_bps=args.rel_tolerance_bps if args.rel_tolerance_bps is not None else base.rel_bps,
    )


def main() -> int:
    args = parse_args()
    markets = load_markets(args.input)
    if args.symbol:
        markets = [m for m in markets if m.symbol == args.symbol]
    if not markets:
        print(f"No market matched in {args.input}", file=sys.stderr)
        return 2

    tolerance = _tolerance(args)
    rc = 0
    for market in markets:
        try:
            if args.budget is not None:
                target = QuoteAmount(args.budget)
                solution = budgeted_peg(market, target)
                print(
                    f"Budget {fmt_usd(target)} -> peg {fmt_amount(market.curve.peg_multiplier, 3)} "
                    f"change by {fmt_amount(-solution.peg_delta, 3)}"
                )
                new_peg = solution.new_peg
            else:
                new_peg = Peg(args.new_peg)
            estimate = repeg_cost(market, new_peg, tolerance=tolerance)
        except (InvalidInputError, InvalidStateError) as exc:
            print(f"[error] {market.label}: {type(exc).__name__}: {exc}")
            rc = 1
            continue
        for line in repeg_lines(market, estimate):
            print(line)
        if args.budget is not None:
            miss = estimate.cost.value - args.budget
            print(f"Achieved vs budget: off by ${miss / QUOTE_PRECISION:.6f}")
        print()
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
