from datetime import date, timedelta
from decimal import Decimal

import pytest

from finboard import aggregates
from finboard.domain import (
    Asset,
    AssetCategory,
    Goal,
    GoalCategory,
    Transaction,
    TransactionCategory,
    TransactionStatus,
)
from finboard.filters import DateInterval

TODAY = date(2026, 3, 10)


def make_tx(id, category, amount, days_ago=0):
    return Transaction(
        id=id,
        category=category,
        sub_category="",
        amount=Decimal(amount),
        due_date=TODAY - timedelta(days=days_ago),
        status=TransactionStatus.PAID,
    )


def make_asset(id, category, value):
    return Asset(id=id, name=id, category=category, value=Decimal(value), last_updated=TODAY)


def make_goal(id, target, current):
    return Goal(id, id, Decimal(target), Decimal(current), None, GoalCategory.OTHER, created_at=TODAY)


TRANSACTIONS = (
    make_tx("t1", TransactionCategory.INCOME, "4500", 3),
    make_tx("t2", TransactionCategory.HOUSING, "-2500", 2),
    make_tx("t3", TransactionCategory.FOOD, "-120.50", 1),
    make_tx("t4", TransactionCategory.FOOD, "-79.50", 1),
)


def test_sum_by_category_assets():
    assets = [
        make_asset("a1", AssetCategory.STOCKS, 100),
        make_asset("a2", AssetCategory.STOCKS, 50),
        make_asset("a3", AssetCategory.BONDS, 25),
    ]
    totals = aggregates.sum_by_category(assets)
    assert totals == {AssetCategory.STOCKS: Decimal(150), AssetCategory.BONDS: Decimal(25)}
    # empty categories are left out
    assert AssetCategory.CRYPTO not in totals


def test_category_sums_add_up_to_total():
    totals = aggregates.sum_by_category(TRANSACTIONS)
    assert sum(totals.values()) == aggregates.total_of(TRANSACTIONS, lambda t: t.amount)
    assert totals[TransactionCategory.FOOD] == Decimal("-200.00")


def test_empty_inputs_are_zero():
    assert aggregates.total_of([], lambda r: r.amount) == Decimal(0)
    assert aggregates.sum_by_category([]) == {}
    assert aggregates.total_income([]) == 0
    assert aggregates.savings_rate([]) == 0.0
    assert aggregates.average_goal_progress([]) == 0.0
    assert aggregates.aggregate_assets([]) == ()


def test_income_expenses_and_net():
    assert aggregates.total_income(TRANSACTIONS) == Decimal(4500)
    assert aggregates.total_expenses(TRANSACTIONS) == Decimal(2700)
    assert aggregates.net_cash_flow(TRANSACTIONS) == Decimal(1800)
    assert aggregates.savings_rate(TRANSACTIONS) == 40.0


def test_goal_aggregates():
    goals = [make_goal("g1", 1000, 250), make_goal("g2", 500, 500), make_goal("g3", 0, 10)]
    assert aggregates.goal_progress(goals[0]) == 0.25
    assert [g.id for g in aggregates.completed_goals(goals)] == ["g2"]
    assert aggregates.average_goal_progress(goals) == (0.25 + 1.0 + 0.0) / 3


def test_aggregate_assets_sorted_by_value():
    assets = [
        make_asset("a1", AssetCategory.CASH, 300),
        make_asset("a2", AssetCategory.STOCKS, 1000),
        make_asset("a3", AssetCategory.CASH, 200),
    ]
    rows = aggregates.aggregate_assets(assets)
    assert [r.category for r in rows] == [AssetCategory.STOCKS, AssetCategory.CASH]
    assert rows[1].total_value == Decimal(500)
    assert rows[1].item_count == 2
    assert rows[1].percentage(Decimal(1500)) == pytest.approx(100 / 3)
    assert rows[0].percentage(Decimal(0)) == 0.0


def test_time_series_zero_fills_every_day():
    interval = DateInterval(TODAY - timedelta(days=4), TODAY)
    income, expenses = aggregates.income_expense_series(TRANSACTIONS, interval)
    assert len(income) == 5
    assert [d for d, _ in income] == [TODAY - timedelta(days=n) for n in range(4, -1, -1)]
    assert income[1] == (TODAY - timedelta(days=3), Decimal(4500))
    assert income[0][1] == 0
    assert expenses[3] == (TODAY - timedelta(days=1), Decimal("200.00"))


def test_time_series_ignores_points_outside_interval():
    interval = DateInterval(TODAY, TODAY)
    series = aggregates.time_series(TRANSACTIONS, lambda t: t.due_date, lambda t: t.amount, interval)
    assert series == ((TODAY, Decimal(0)),)


def test_top_categories():
    top = list(aggregates.top_categories(TRANSACTIONS, 1))
    assert top == [(TransactionCategory.HOUSING, Decimal(2500))]
