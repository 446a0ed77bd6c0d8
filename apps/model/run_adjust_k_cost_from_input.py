#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Estimate the cost of rescaling curve depth (adjust K) on a market snapshot.

Printing policy:
1) k before/after and the depth ratio.
2) Valuation-based cost (authoritative) and the closed-form estimate.
3) [warn] line when the two disagree beyond tolerance.

With --budget, the ratio comes from the closed-form budgeted-K solver, which
assumes k == base_reserve * quote_reserve; the printed cost is the re-verified one.
"""

import argparse
import sys

from amm_repeg import adjust_k_cost, budgeted_k, load_markets
from amm_repeg.core import QuoteAmount, QUOTE_PRECISION, fmt_usd
from amm_repeg.core.exc import InvalidInputError, InvalidStateError
from amm_repeg.report import adjust_k_lines


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--input", required=True, help="Path to market snapshot JSON")
    p.add_argument("--symbol", default=None, help="Pick one market by symbol")
    p.add_argument("--numerator", type=int, default=None)
    p.add_argument("--denominator", type=int, default=None)
    p.add_argument("--budget", type=int, default=None, help="Target cost, raw quote units (QUOTE_PRECISION=1e6)")
    args = p.parse_args()
    if args.budget is None and (args.numerator is None or args.denominator is None):
        p.error("either --budget or both --numerator and --denominator are required")
    return args


def main() -> int:
    args = parse_args()
    markets = load_markets(args.input)
    if args.symbol:
        markets = [m for m in markets if m.symbol == args.symbol]
    if not markets:
        print(f"No market matched in {args.input}", file=sys.stderr)
        return 2

    rc = 0
    for market in markets:
        try:
            if args.budget is not None:
                ratio = budgeted_k(market, QuoteAmount(args.budget))
                numerator, denominator = ratio.numerator, ratio.denominator
                print(f"Budget {fmt_usd(QuoteAmount(args.budget))} -> ratio {numerator}/{denominator} (approximate)")
            else:
                numerator, denominator = args.numerator, args.denominator
            estimate = adjust_k_cost(market, numerator, denominator)
        except (InvalidInputError, InvalidStateError) as exc:
            print(f"[error] {market.label}: {type(exc).__name__}: {exc}")
            rc = 1
            continue
        for line in adjust_k_lines(market, estimate):
            print(line)
        if args.budget is not None:
            miss = estimate.cost.value - args.budget
            print(f"Achieved vs budget: off by ${miss / QUOTE_PRECISION:.6f}")
        print()
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
