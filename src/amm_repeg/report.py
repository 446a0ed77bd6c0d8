"""
Human-readable lines for cost estimates and scans (display only).

Nothing here feeds back into the math; apps print these lines. Anomalous
cross-checks are prefixed with "[warn]".
"""
from __future__ import annotations

from typing import List

from .core import AdjustKDiagnostics, CostEstimate, MarketState, RepegDiagnostics, fmt_amount, fmt_usd
from .scan import MarketScan

PRICE_PLACES = 4
PEG_PLACES = 3


def _check_lines(estimate: CostEstimate, what: str) -> List[str]:
    check = estimate.diagnostics.check
    lines = [
        f"{what} cost would be {fmt_usd(estimate.cost)}",
        f"closed-form estimate {fmt_usd(check.formula_cost)} "
        f"(gap {fmt_usd(check.discrepancy, places=6)}, tolerance {fmt_usd(check.tolerance, places=6)})",
    ]
    if check.anomalous:
        lines.append(
            f"[warn] {what} closed-form estimate disagrees with valuation by "
            f"{fmt_usd(check.discrepancy, places=6)}"
        )
    return lines


def repeg_lines(market: MarketState, estimate: CostEstimate) -> List[str]:
    diag = estimate.diagnostics
    if not isinstance(diag, RepegDiagnostics):
        raise TypeError("repeg_lines expects a repeg CostEstimate")
    return [
        f"Market: {market.label}",
        f"Peg moves from {fmt_amount(diag.old_peg, PEG_PLACES)} to {fmt_amount(diag.new_peg, PEG_PLACES)}",
        f"Price moves from ${fmt_amount(diag.old_mark_price, PRICE_PLACES)} "
        f"to ${fmt_amount(diag.new_mark_price, PRICE_PLACES)}",
        f"Terminal price moves from ${fmt_amount(diag.old_terminal_price, PRICE_PLACES)} "
        f"to ${fmt_amount(diag.new_terminal_price, PRICE_PLACES)}",
        *_check_lines(estimate, "Repeg"),
    ]


def adjust_k_lines(market: MarketState, estimate: CostEstimate) -> List[str]:
    diag = estimate.diagnostics
    if not isinstance(diag, AdjustKDiagnostics):
        raise TypeError("adjust_k_lines expects an adjust-K CostEstimate")
    return [
        f"Market: {market.label}",
        f"k moves from {diag.old_invariant.value} to {diag.new_invariant.value} "
        f"(depth x{fmt_amount(diag.depth_ratio, PEG_PLACES)})",
        *_check_lines(estimate, "Adjust k"),
    ]


def scan_lines(scan: MarketScan) -> List[str]:
    if scan.error:
        return [f"Market: {scan.market.label} | [warn] skipped: {scan.error}"]
    lines = [
        f"Market: {scan.market.label} | mark ${fmt_amount(scan.mark_price, PRICE_PLACES)} "
        f"| terminal ${fmt_amount(scan.terminal_price, PRICE_PLACES)}"
    ]
    for s in scan.steps:
        flag = " [warn]" if s.estimate.anomalous else ""
        lines.append(
            f"  step {s.step}: deviation {s.deviation_bps / 100:.2f}% | "
            f"{s.trade.direction.value} {fmt_amount(s.trade.amount)} base | "
            f"new peg {fmt_amount(s.new_peg, PEG_PLACES)} | cost {fmt_usd(s.estimate.cost)}{flag}"
        )
    return lines


__all__ = ["repeg_lines", "adjust_k_lines", "scan_lines"]
