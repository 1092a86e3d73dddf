"""Pure aggregations over domain records.

Nothing here returns NaN or infinity: empty inputs sum to ``Decimal(0)`` and
ratios with a zero denominator are 0.
"""
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Iterator, Optional, Sequence, Tuple

import pandas as pd

from finboard.domain import Asset, AssetCategory, Goal, Transaction, TransactionCategory
from finboard.filters import DateInterval
from finboard.lazy import iter_records, lazy_top_categories
from finboard.transforms import expense_transactions, income_transactions

ZERO = Decimal(0)

SeriesPoint = Tuple[date, Decimal]


def total_of(records: Iterable, selector: Callable[[object], Decimal]) -> Decimal:
    return sum((selector(r) for r in records), ZERO)


def _default_value(record) -> Decimal:
    if hasattr(record, "amount"):
        return record.amount
    return record.value


def sum_by_category(records: Iterable, value: Optional[Callable] = None) -> dict:
    """Group records by ``category`` and sum their values.

    Categories without records are left out rather than zero-filled. Keys
    keep first-seen order.
    """
    value = value or _default_value
    totals: dict = {}
    for r in records:
        totals[r.category] = totals.get(r.category, ZERO) + value(r)
    return totals


def total_income(transactions: Iterable[Transaction]) -> Decimal:
    return total_of(income_transactions(transactions), lambda t: t.amount)


def total_expenses(transactions: Iterable[Transaction]) -> Decimal:
    """Outflows as a positive magnitude."""
    return -total_of(expense_transactions(transactions), lambda t: t.amount)


def net_cash_flow(transactions: Sequence[Transaction]) -> Decimal:
    return total_income(transactions) - total_expenses(transactions)


def savings_rate(transactions: Sequence[Transaction]) -> float:
    income = total_income(transactions)
    if income <= 0:
        return 0.0
    return float((income - total_expenses(transactions)) / income * 100)


def goal_progress(goal: Goal) -> float:
    return goal.progress


def completed_goals(goals: Iterable[Goal]) -> Tuple[Goal, ...]:
    return tuple(g for g in goals if g.is_completed)


def average_goal_progress(goals: Sequence[Goal]) -> float:
    if not goals:
        return 0.0
    return sum(g.progress for g in goals) / len(goals)


def total_assets(assets: Iterable[Asset]) -> Decimal:
    return total_of(assets, lambda a: a.value)


@dataclass(frozen=True)
class AssetCategoryTotal:
    category: AssetCategory
    total_value: Decimal
    item_count: int

    def percentage(self, total: Decimal) -> float:
        if total <= 0:
            return 0.0
        return float(self.total_value / total * 100)


def aggregate_assets(assets: Iterable[Asset]) -> Tuple[AssetCategoryTotal, ...]:
    """Per-category totals, largest first."""
    totals: dict = defaultdict(lambda: [ZERO, 0])
    for a in assets:
        entry = totals[a.category]
        entry[0] += a.value
        entry[1] += 1
    rows = (AssetCategoryTotal(cat, value, count) for cat, (value, count) in totals.items())
    return tuple(sorted(rows, key=lambda row: row.total_value, reverse=True))


def time_series(
    records: Iterable,
    date_selector: Callable[[object], date],
    value_selector: Callable[[object], Decimal],
    interval: DateInterval,
) -> Tuple[SeriesPoint, ...]:
    """Daily buckets across ``interval`` (both ends included).

    Every day gets a point; days without records are zero so a chart keeps a
    continuous date axis.
    """
    buckets: dict = defaultdict(lambda: ZERO)
    for r in records:
        d = date_selector(r)
        if interval.contains(d):
            buckets[d] += value_selector(r)

    days = pd.date_range(start=interval.start, end=interval.end, freq="D")
    return tuple((day.date(), buckets.get(day.date(), ZERO)) for day in days)


def income_expense_series(
    transactions: Sequence[Transaction], interval: DateInterval
) -> Tuple[Tuple[SeriesPoint, ...], Tuple[SeriesPoint, ...]]:
    income = time_series(
        iter_records(transactions, lambda t: t.amount > 0),
        lambda t: t.due_date, lambda t: t.amount, interval,
    )
    expenses = time_series(
        iter_records(transactions, lambda t: t.amount < 0),
        lambda t: t.due_date, lambda t: -t.amount, interval,
    )
    return income, expenses


def top_categories(transactions: Iterable[Transaction], k: int = 5) -> Iterator[Tuple[TransactionCategory, Decimal]]:
    return lazy_top_categories(transactions, k)
