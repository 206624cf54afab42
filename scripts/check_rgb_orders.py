#!/usr/bin/env python3
"""
Check the renewal calculator against known RGB order scenarios.

Runs both lease terms for one lease start date per order and compares the
applied percentages with the published figures.  Can be run against the
live API or by importing the engine directly.

Usage:
    # Against live API:
    python3 scripts/check_rgb_orders.py --api http://localhost:8000

    # Direct import (no server needed):
    python3 scripts/check_rgb_orders.py --rent 2000 --preferential 1800
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from datetime import date, datetime

# Add backend to path for direct import mode
SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.join(os.path.dirname(SCRIPT_DIR), "backend")
sys.path.insert(0, BACKEND_DIR)

# ──────────────────────────────────────────────────────────────────
# SCENARIOS
# ──────────────────────────────────────────────────────────────────

SCENARIOS = [
    {
        "name": "Order 56 - Oct 1, 2024",
        "order": 56,
        "date": date(2024, 10, 1),
        "one_year": [2.75],
        "two_year": [5.25],
    },
    {
        "name": "Order 55 - Aug 1, 2024 (split 2-year)",
        "order": 55,
        "date": date(2024, 8, 1),
        "one_year": [3.0],
        "two_year": [2.75, 3.2],
    },
    {
        "name": "Order 54 - Jan 1, 2023",
        "order": 54,
        "date": date(2023, 1, 1),
        "one_year": [3.25],
        "two_year": [5.0],
    },
    {
        "name": "Order 53 - Jan 1, 2022 (split by month)",
        "order": 53,
        "date": date(2022, 1, 1),
        "one_year": [0.0, 1.5],
        "two_year": [2.5],
    },
    {
        "name": "Order 52 - Jan 1, 2021 (freeze year)",
        "order": 52,
        "date": date(2021, 1, 1),
        "one_year": [0.0],
        "two_year": [0.0, 1.0],
    },
    {
        "name": "Order 47 - Oct 1, 2015 (first covered order)",
        "order": 47,
        "date": date(2015, 10, 1),
        "one_year": [0.0],
        "two_year": [2.0],
    },
]


# ──────────────────────────────────────────────────────────────────
# RUNNERS
# ──────────────────────────────────────────────────────────────────

async def run_direct(day: date, term: int, rent: float, preferential: float | None) -> dict:
    """Run the calculation by importing the engine directly."""
    from app.rent_engine.calculator import calculate_rent_increase

    result = calculate_rent_increase(day, term, rent, preferential)
    if result is None:
        return {"error": f"No guideline for {day.isoformat()}"}
    return result.to_dict()


async def run_api(day: date, term: int, rent: float, preferential: float | None, api_base: str) -> dict:
    """Run the calculation via the HTTP API."""
    import httpx
    payload = {"lease_start_date": day.isoformat(), "term": term, "current_rent": rent}
    if preferential is not None:
        payload["preferential_rent"] = preferential
    async with httpx.AsyncClient(timeout=30) as client:
        resp = await client.post(f"{api_base}/api/calculate", json=payload)
        if resp.status_code != 200:
            return {"error": f"API returned {resp.status_code}: {resp.text[:500]}"}
        return resp.json()


def check_result(scenario: dict, term: int, result: dict) -> list[str]:
    """Return a list of mismatches between ``result`` and the published rates."""
    if "error" in result:
        return [result["error"]]
    problems = []
    if result["order"] != scenario["order"]:
        problems.append(f"expected order {scenario['order']}, got {result['order']}")
    expected = scenario["one_year" if term == 1 else "two_year"]
    actual = [step["percent_increase"] for step in result["increases"]]
    if actual != expected:
        problems.append(f"{term}-year rates: expected {expected}, got {actual}")
    return problems


def format_result(term: int, result: dict) -> str:
    lines = [f"  {term}-Year Lease:"]
    if "error" in result:
        lines.append(f"    ERROR: {result['error']}")
        return "\n".join(lines)
    lines.append(f"    Rule:      {result['applied_rule']}")
    for step in result["increases"]:
        lines.append(
            f"    {step['period']:<12} ${step['old_rent']:,.2f} → ${step['new_rent']:,.2f}"
            f"  (+{step['percent_increase']}%, +${step['dollar_increase']:,.2f})"
        )
    pref = result.get("preferential_result")
    if pref:
        lines.append(f"    Tenant pays: ${pref['final_tenant_pay']:,.2f}  {pref['explanation']}")
    lines.append(f"    Lease ends: {result['lease_end_date']}")
    return "\n".join(lines)


# ──────────────────────────────────────────────────────────────────
# MAIN
# ──────────────────────────────────────────────────────────────────

async def main():
    parser = argparse.ArgumentParser(description="Check the renewal calculator against RGB orders")
    parser.add_argument("--api", default=None, help="API base URL (e.g., http://localhost:8000)")
    parser.add_argument("--rent", type=float, default=2000.0, help="Current legal rent")
    parser.add_argument("--preferential", type=float, default=None, help="Preferential rent")
    args = parser.parse_args()

    print(f"\nRGB Order Calculation Check")
    print(f"Date: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
    print(f"Mode: {'API' if args.api else 'Direct Import'}")
    print(f"Scenarios: {len(SCENARIOS)} configured")

    failures = []
    failed_runs = 0
    for scenario in SCENARIOS:
        print(f"\n>>> {scenario['name']}")
        for term in (1, 2):
            if args.api:
                result = await run_api(scenario["date"], term, args.rent, args.preferential, args.api)
            else:
                result = await run_direct(scenario["date"], term, args.rent, args.preferential)
            print(format_result(term, result))
            problems = check_result(scenario, term, result)
            if problems:
                failed_runs += 1
            for problem in problems:
                failures.append(f"{scenario['name']}: {problem}")

    print(f"\n{'='*70}")
    print("SUMMARY")
    print(f"{'='*70}")
    print(f"  Passed: {len(SCENARIOS) * 2 - failed_runs}/{len(SCENARIOS) * 2}")
    for failure in failures:
        print(f"    - {failure}")
    print()
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
