from datetime import date, timedelta
from decimal import Decimal

import pytest

from finboard import events
from finboard.domain import (
    Asset,
    AssetCategory,
    FinanceState,
    Goal,
    GoalCategory,
    Transaction,
    TransactionCategory,
    TransactionStatus,
)
from finboard.exceptions import StoreError, ValidationError
from finboard.filters import DataFilter, DateRange
from finboard.memo import _cached_apply
from finboard.mock_data import MockDataGenerator
from finboard.store import FinanceStore

TODAY = date(2026, 8, 10)


def make_tx(id, amount="-50", status=TransactionStatus.PAID, days_ago=1):
    return Transaction(
        id=id,
        category=TransactionCategory.FOOD,
        sub_category="Takeout",
        amount=Decimal(amount),
        due_date=TODAY - timedelta(days=days_ago),
        status=status,
        payee="Dragon Express",
    )


def make_goal(id="g1", target=1000, current=250):
    return Goal(id, "Trip", Decimal(target), Decimal(current), None, GoalCategory.VACATION)


@pytest.fixture
def store():
    state = FinanceState(
        transactions=(make_tx("t1"),),
        assets=(
            Asset("a1", "Checking", AssetCategory.CHECKING, Decimal(1000), last_updated=TODAY),
            Asset("a2", "Index", AssetCategory.STOCKS, Decimal(5000), last_updated=TODAY),
        ),
        goals=(make_goal(),),
    )
    return FinanceStore(state=state, generator=MockDataGenerator(seed=1, today=TODAY))


def test_add_transaction_replaces_state(store):
    before = store.get_state()
    seen = []
    store.subscribe(seen.append)

    store.add_transaction(make_tx("t2"))

    assert [t.id for t in store.transactions] == ["t1", "t2"]
    assert [t.id for t in before.transactions] == ["t1"]
    assert seen == [store.get_state()]


def test_update_replaces_by_id(store):
    store.update_transaction(make_tx("t1", amount="-75"))
    assert store.transactions[0].amount == Decimal(-75)


def test_update_and_delete_unknown_ids_are_noops(store):
    before = store.get_state()
    seen = []
    store.subscribe(seen.append)

    assert store.update_transaction(make_tx("missing")) == []
    assert store.delete_asset("missing") == []

    assert store.get_state() is before
    assert seen == []


def test_delete_by_record_or_id(store):
    store.delete_transaction(store.transactions[0])
    store.delete_asset("a1")
    assert store.transactions == ()
    assert [a.id for a in store.assets] == ["a2"]


def test_unsubscribe(store):
    seen = []
    unsubscribe = store.subscribe(seen.append)
    unsubscribe()
    store.add_transaction(make_tx("t2"))
    assert seen == []


def test_late_transaction_raises_alert(store):
    results = store.add_transaction(make_tx("t9", status=TransactionStatus.LATE, days_ago=9))
    alerts = [r["alert"] for r in results if r]
    assert len(alerts) == 1
    assert "Dragon Express" in alerts[0]


def test_goal_completion_is_published(store):
    completed = []
    store.bus.subscribe(events.GOAL_COMPLETED, lambda event, payload: completed.append(payload["goal"].id))

    store.update_goal_progress("g1", Decimal(500))
    assert completed == []
    store.update_goal_progress("g1", Decimal(1000))
    assert completed == ["g1"]
    assert store.goals[0].is_completed
    # already complete, no second event
    store.update_goal_progress("g1", Decimal(1200))
    assert completed == ["g1"]


def test_goal_progress_rejects_nan(store):
    before = store.get_state()
    with pytest.raises(ValidationError):
        store.update_goal_progress("g1", Decimal("NaN"))
    assert store.get_state() is before
    assert store.average_goal_progress == 0.25


def test_dispatch(store):
    store.dispatch("add_goal", make_goal("g2"))
    assert [g.id for g in store.goals] == ["g1", "g2"]
    with pytest.raises(StoreError):
        store.dispatch("drop_everything")


def test_unsupported_record_type(store):
    with pytest.raises(StoreError):
        store.add_transaction({"id": "t5"})


def test_derived_figures(store):
    assert store.total_assets == Decimal(6000)
    assert store.net_worth == Decimal(6000)
    assert store.available_balance == Decimal(1000)
    assert store.total_expenses == Decimal(50)
    assert store.net_cash_flow == Decimal(-50)
    assert store.average_goal_progress == 0.25
    assert store.aggregated_assets[0].category is AssetCategory.STOCKS


def test_filtered_views(store):
    flt = DataFilter(DateRange.WEEK, "index")
    assert store.filtered_transactions(DataFilter(DateRange.WEEK), TODAY) == store.transactions
    assert [a.id for a in store.filtered_assets(flt, TODAY)] == ["a2"]
    assert store.filtered_goals(DataFilter(search_query="trip"), TODAY) == store.goals


def test_refresh_publishes_and_regenerates(store):
    refreshed = []
    store.bus.subscribe(events.DATA_REFRESHED, lambda event, payload: refreshed.append(payload["state"]))
    state = store.refresh()
    assert refreshed == [state]
    assert len(state.transactions) == 30
    income, expenses = store.filtered_history(DataFilter(DateRange.WEEK), TODAY)
    assert len(income) == len(expenses) == 8


def test_refresh_with_same_state_is_silent(store):
    refreshed = []
    store.bus.subscribe(events.DATA_REFRESHED, lambda event, payload: refreshed.append(payload["state"]))
    before = store.get_state()
    assert store.refresh(before) is before
    assert refreshed == []


def test_refresh_drops_cached_views(store):
    store.filtered_transactions(DataFilter(DateRange.WEEK), TODAY)
    assert _cached_apply.cache_info().currsize > 0
    store.refresh()
    assert _cached_apply.cache_info().currsize == 0


@pytest.mark.asyncio
async def test_refresh_async():
    store = FinanceStore(generator=MockDataGenerator(seed=3, today=TODAY), counts={"transactions": 5})
    state = await store.refresh_async(delay=0)
    assert len(state.transactions) == 5
