# -*- coding: utf-8 -*-
"""
Interactive Till Console

Purpose:
- Demonstrates the change-making engine against one till.
- Provides:
  1) Change preview for an amount
  2) Payment validation (amount due vs. tendered)
  3) Predefined session scenarios replayed through the cash flow simulator
  4) Restock report

Outputs:
- Prints human-readable tables with key metrics.
- Writes simulation results to ./reports/cash_flow_results.csv for reproducibility.
"""


from __future__ import annotations

from typing import Dict, List, Tuple
import csv
import logging
import os
from datetime import datetime, timezone

from till.errors import InvalidAmount
from till.metrics import dispense_efficiency, split_by_kind
from till.money import fmt_money
from till.payment_validator import suggest_tender_amounts
from till.restock import restock_delta
from till.till_session import TillSession
import till.config as cfg

# ---------- Formatting & I/O ----------
REPORTS_DIR = os.path.join(os.getcwd(), "reports")
REPORT_CSV = os.path.join(REPORTS_DIR, "cash_flow_results.csv")

def pause() -> None:
    """Pause for user input (safe in case of non-interactive piping)."""
    try:
        input("\nPress Enter to continue... ")
    except (EOFError, KeyboardInterrupt):
        print("")

def ensure_reports_dir() -> None:
    if not os.path.isdir(REPORTS_DIR):
        os.makedirs(REPORTS_DIR, exist_ok=True)

def write_csv_row(row: Dict[str, object]) -> None:
    ensure_reports_dir()
    is_new = not os.path.exists(REPORT_CSV)
    fieldnames = [
        "timestamp","scenario","till_id","transactions",
        "attempted","dispensed","failed","failed_inexact_change",
        "total_change_given","total_change_received","net_change",
        "efficiency","currency","pool_total_before","pool_total_after"
    ]
    with open(REPORT_CSV, mode="a", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        if is_new:
            w.writeheader()
        w.writerow(row)

def print_breakdown(breakdown) -> None:
    for line in breakdown.lines:
        print(f"  {line.name:<12} x{line.count:<4} {fmt_money(line.amount):>12}")
    print(f"  {'Pieces':<18}: {breakdown.piece_count}")
    print(f"  {'Covered':<18}: {fmt_money(breakdown.total_covered)} of {fmt_money(breakdown.requested_amount)}")
    if breakdown.is_exact:
        eff = dispense_efficiency(breakdown)
        split = split_by_kind(breakdown)
        print(f"  {'Coins / Notes':<18}: {split.total_coins} ({fmt_money(split.coin_value)}) / "
              f"{split.total_notes} ({fmt_money(split.note_value)})")
        print(f"  {'Dispense efficiency':<18}: {eff.efficiency}% (avg piece {fmt_money(eff.average_value)})")
        return
    print(f"  {'Shortfall':<18}: {fmt_money(breakdown.shortfall)}")
    for i, alt in enumerate(breakdown.alternatives, 1):
        body = ", ".join(f"{l.value}x{l.count}" for l in alt.lines)
        print(f"  Alternative {i}: {body} ({alt.piece_count} pieces)")

def print_results_table(summary) -> None:
    print("\n  --- Session Results ---")
    print("  " + "=" * 45)
    print(f"  {'Dispensed / Attempted':<28}: {summary.dispensed:,}/{summary.attempted:,}")
    print(f"  {'':<30}  (Transactions that needed change and got it exactly.)")
    print(f"  {'Failed (inexact change)':<28}: {summary.failed_by_reason.get('inexact_change', 0):,}")
    print(f"  {'Change Given':<28}: {fmt_money(summary.total_change_given)}")
    print(f"  {'Change Received':<28}: {fmt_money(summary.total_change_received)}")
    print(f"  {'Net Change':<28}: {fmt_money(summary.net_change)}")
    print(f"  {'Given/Received Ratio':<28}: {summary.efficiency}%")
    print(f"  {'':<30}  (Share of cash movement that was change paid out.)")
    print("  " + "=" * 45)
    for value, count in summary.per_denomination_usage.items():
        print(f"  {fmt_money(value):>12} x{count}")

def read_amount(prompt: str):
    s = input(prompt).strip().replace(",", ".")
    if not s:
        return None
    return s

# ---------- Menus ----------
def change_preview_menu(session: TillSession) -> None:
    amount = read_amount("Change amount (blank=cancel): ")
    if amount is None:
        return
    try:
        breakdown = session.preview_change(amount)
    except InvalidAmount as e:
        print(f"Invalid amount: {e}")
        return
    print_breakdown(breakdown)

def payment_menu(session: TillSession) -> None:
    due = read_amount("Amount due (blank=cancel): ")
    if due is None:
        return
    try:
        quick = ", ".join(fmt_money(a) for a in suggest_tender_amounts(due))
        print(f"Quick tender: {quick}")
        tendered = read_amount("Tendered: ")
        if tendered is None:
            return
        result = session.validate_payment(due, tendered)
    except InvalidAmount as e:
        print(f"Invalid amount: {e}")
        return
    print(f"\n{'VALID' if result.is_valid else 'NOT VALID'}: {result.message}")
    if result.breakdown is not None:
        print_breakdown(result.breakdown)
    if result.is_valid and result.breakdown is not None:
        if input("Pay out and update the till? [y/N]: ").strip().lower() == "y":
            session.dispense(result.change)
            print(f"Till now holds {fmt_money(session.pool.total_value())}")

SCENARIOS: List[Tuple[str, str, List[Tuple[str, str]]]] = [
    (
        "Lunch Rush: Small Purchases Paid With Notes",
        "Twenty snack-sized purchases, each paid with a 10 or 20 euro note.",
        [(f"{3 + (i % 7)}.{(i * 37) % 100:02d}", "10.00" if i % 2 else "20.00") for i in range(20)],
    ),
    (
        "Coin Drain: Repeated Awkward Change",
        "Forty purchases of 0.01 paid with 2.00 against a till low on small coins.",
        [("0.01", "2.00")] * 40,
    ),
    (
        "Mixed Shift: Overpayments, Exact Payments and Shortfalls",
        "A shift with every kind of payment, including short tenders.",
        [("9.50", "10.00"), ("12.00", "12.00"), ("7.30", "5.00"), ("48.25", "50.00"),
         ("19.99", "20.00"), ("3.10", "3.00"), ("99.00", "100.00"), ("0.70", "1.00")],
    ),
]

def run_scenario(session: TillSession, title: str, explanation: str, transactions) -> None:
    print(f"\n--- {title} ---")
    print(explanation)
    print("-> Simulation in progress... Please wait.")
    summary = session.simulate(transactions)
    print_results_table(summary)

    write_csv_row({
        'timestamp': datetime.now(timezone.utc).isoformat(timespec='seconds'),
        'scenario': title,
        'till_id': session.till_id,
        'transactions': len(transactions),
        'attempted': summary.attempted,
        'dispensed': summary.dispensed,
        'failed': summary.failed,
        'failed_inexact_change': summary.failed_by_reason.get('inexact_change', 0),
        'total_change_given': str(summary.total_change_given),
        'total_change_received': str(summary.total_change_received),
        'net_change': str(summary.net_change),
        'efficiency': str(summary.efficiency),
        'currency': cfg.CURRENCY,
        'pool_total_before': str(session.pool.total_value()),
        'pool_total_after': str(summary.final_pool.total_value()),
    })
    print(f"\nCSV updated → {REPORT_CSV}")
    pause()

def menu_session_scenarios(session: TillSession) -> None:
    while True:
        try:
            print("\n=== Session Scenarios ===")
            for i, (title, _, _) in enumerate(SCENARIOS, 1):
                print(f"{i}) {title}")
            print("0) Back to Main Menu")
            choice = input("Choice: ").strip()

            if choice == "0":
                break
            if choice.isdigit() and 1 <= int(choice) <= len(SCENARIOS):
                title, explanation, transactions = SCENARIOS[int(choice) - 1]
                target = session
                if title.startswith("Coin Drain"):
                    target = TillSession.open("DRAIN", [
                        ("1.00", 20, "coin", "1 Euro"),
                        ("0.50", 10, "coin", "50 Cent"),
                        ("0.20", 10, "coin", "20 Cent"),
                        ("0.10", 5, "coin", "10 Cent"),
                        ("0.05", 5, "coin", "5 Cent"),
                        ("0.02", 5, "coin", "2 Cent"),
                        ("0.01", 5, "coin", "1 Cent"),
                    ])
                run_scenario(target, title, explanation, transactions)
            else:
                print("Invalid choice.")
        except KeyboardInterrupt:
            print("\nReturning to main menu...")
            break

def restock_menu(session: TillSession) -> None:
    s = input(f"Low-stock threshold (blank={cfg.RESTOCK_THRESHOLD}): ").strip()
    try:
        threshold = int(s) if s else cfg.RESTOCK_THRESHOLD
    except ValueError:
        print("Invalid value.")
        return
    suggestions = session.suggest_restock(threshold)
    if not suggestions:
        print("No denomination is running low.")
        return
    for sug in suggestions:
        print(f"  {sug.denomination.name:<12} has {sug.current_count:<4} -> restock {sug.suggested_restock}")
    if input("Apply restock to the till? [y/N]: ").strip().lower() == "y":
        session.restock(restock_delta(suggestions))
        print(f"Till now holds {fmt_money(session.pool.total_value())}")

def main() -> None:
    logging.basicConfig(level=cfg.LOG_LEVEL, format='%(asctime)s - %(levelname)s - %(name)s - %(message)s')
    symbol = cfg.CURRENCY_SYMBOLS.get(cfg.CURRENCY, '$')
    session = TillSession.open("T01")
    print("== Till Change Console ==")
    print(f"Currency: {cfg.CURRENCY} ({symbol})")
    print(f"Opening float: {fmt_money(session.pool.total_value())}\n")

    while True:
        try:
            print("\n=== Main Menu ===")
            print("1) Preview Change")
            print("2) Validate Payment")
            print("3) Run Session Scenarios")
            print("4) Restock Report")
            print("0) Quit")
            sel = input("Choice: ").strip()

            if sel == "0":
                print("Goodbye.")
                break
            elif sel == "1":
                change_preview_menu(session)
                pause()
            elif sel == "2":
                payment_menu(session)
                pause()
            elif sel == "3":
                menu_session_scenarios(session)
            elif sel == "4":
                restock_menu(session)
                pause()
            else:
                print("Invalid choice.")
                pause()
        except KeyboardInterrupt:
            print("\nGoodbye.")
            break

if __name__ == "__main__":
    main()
