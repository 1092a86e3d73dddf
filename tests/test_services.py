from datetime import date, timedelta
from decimal import Decimal

from finboard.domain import FinanceState, Transaction, TransactionCategory, TransactionStatus
from finboard.filters import DataFilter, DateRange
from finboard.mock_data import MockDataGenerator
from finboard.services import SummaryService, calc_cash_flow, default_summary_service

TODAY = date(2026, 2, 1)


def make_tx(id, category, amount, days_ago):
    return Transaction(id, category, "", Decimal(amount), TODAY - timedelta(days=days_ago), TransactionStatus.PAID)


STATE = FinanceState(transactions=(
    make_tx("t1", TransactionCategory.INCOME, "3000", 2),
    make_tx("t2", TransactionCategory.FOOD, "-150", 5),
    make_tx("t3", TransactionCategory.HOUSING, "-1200", 20),
    make_tx("t4", TransactionCategory.FOOD, "-99", 60),
))


def test_summary_respects_filter():
    report = default_summary_service().summary(STATE, DataFilter(DateRange.MONTH), TODAY)
    result = report["result"]
    assert report["date_range"] == "Month"
    assert report["errors"] == []
    assert result["transaction_count"] == 3
    assert result["total_income"] == Decimal(3000)
    assert result["total_expenses"] == Decimal(1350)
    assert result["spending_by_category"] == {
        TransactionCategory.FOOD: Decimal(-150),
        TransactionCategory.HOUSING: Decimal(-1200),
    }
    assert result["goal_count"] == 0


def test_summary_over_generated_data():
    state = MockDataGenerator(seed=5, today=TODAY).dataset()
    # generated bills fall up to 15 days either side of the generator's today
    later = TODAY + timedelta(days=15)
    result = default_summary_service().summary(state, DataFilter(DateRange.ALL_TIME), later)["result"]
    assert result["transaction_count"] == len(state.transactions)
    assert result["total_assets"] == sum(a.value for a in state.assets)
    assert 0.0 <= result["average_goal_progress"] <= 1.0


def test_failing_calculator_is_reported_not_raised():
    def calc_broken(state, flt, today, acc):
        raise RuntimeError("boom")

    def calc_uses_previous(state, flt, today, acc):
        return {"doubled": acc["transaction_count"] * 2}

    service = SummaryService([calc_cash_flow, calc_broken, calc_uses_previous])
    report = service.summary(STATE, DataFilter(DateRange.QUARTER), TODAY)
    assert report["errors"] == [{"calculator": "calc_broken", "error": "boom"}]
    assert [s["calculator"] for s in report["steps"]] == ["calc_cash_flow", "calc_uses_previous"]
    assert report["result"]["doubled"] == 8
