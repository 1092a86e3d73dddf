"""State container for the dashboard data.

``FinanceStore`` owns one immutable ``FinanceState``. Every change builds a
new state and swaps the reference, then notifies subscribers, so a reader
never sees a half-updated collection.
"""
import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Callable, List, Optional

from finboard import aggregates
from finboard import events
from finboard.async_reports import load_dataset
from finboard.domain import Asset, AssetCategory, FinanceState, Goal, Transaction
from finboard.events import EventBus
from finboard.exceptions import StoreError
from finboard.filters import DataFilter
from finboard.functional import find_by_id
from finboard.memo import clear_cache, memoized_apply
from finboard.mock_data import MockDataGenerator
from finboard.transforms import add_record, delete_record, update_record

logger = logging.getLogger(__name__)

Listener = Callable[[FinanceState], None]

LIQUID_CATEGORIES = (AssetCategory.CHECKING, AssetCategory.SAVINGS, AssetCategory.CASH)

# collection name -> (state field, event prefix)
_COLLECTIONS = {
    Transaction: ("transactions", "TRANSACTION"),
    Asset: ("assets", "ASSET"),
    Goal: ("goals", "GOAL"),
}


class FinanceStore:

    def __init__(self, state: Optional[FinanceState] = None,
                 generator: Optional[MockDataGenerator] = None,
                 bus: Optional[EventBus] = None, counts: Optional[dict] = None):
        self._generator = generator or MockDataGenerator()
        self._counts = counts or {}
        self._state = state if state is not None else self._generate()
        self._listeners: List[Listener] = []
        self.bus = bus or EventBus()
        self.bus.subscribe(events.GOAL_COMPLETED, events.goal_completed_handler)
        self.bus.subscribe(events.TRANSACTION_ADDED, events.late_transaction_handler)

    # state access

    def get_state(self) -> FinanceState:
        return self._state

    @property
    def transactions(self):
        return self._state.transactions

    @property
    def assets(self):
        return self._state.assets

    @property
    def goals(self):
        return self._state.goals

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, new_state: FinanceState) -> bool:
        if new_state == self._state:
            return False
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)
        return True

    # generic CRUD

    def _field(self, record) -> tuple:
        try:
            return _COLLECTIONS[type(record)]
        except KeyError:
            raise StoreError(f"Unsupported record type: {type(record).__name__}") from None

    def _add(self, record) -> List:
        field, prefix = self._field(record)
        records = getattr(self._state, field)
        self._commit(replace(self._state, **{field: add_record(records, record)}))
        logger.debug("added %s %s", field, record.id)
        return self.bus.publish(f"{prefix}_ADDED", {prefix.lower(): record})

    def _update(self, record) -> List:
        field, prefix = self._field(record)
        records = getattr(self._state, field)
        if find_by_id(records, record.id).is_none():
            logger.debug("update ignored, no %s with id %s", field, record.id)
            return []
        self._commit(replace(self._state, **{field: update_record(records, record)}))
        logger.debug("updated %s %s", field, record.id)
        return self.bus.publish(f"{prefix}_UPDATED", {prefix.lower(): record})

    def _delete(self, record_type, record_id: str) -> List:
        field, prefix = _COLLECTIONS[record_type]
        records = getattr(self._state, field)
        remaining = delete_record(records, record_id)
        if remaining is records:
            logger.debug("delete ignored, no %s with id %s", field, record_id)
            return []
        self._commit(replace(self._state, **{field: remaining}))
        logger.debug("deleted %s %s", field, record_id)
        return self.bus.publish(f"{prefix}_DELETED", {"id": record_id})

    @staticmethod
    def _id_of(record_or_id) -> str:
        return record_or_id if isinstance(record_or_id, str) else record_or_id.id

    def add_transaction(self, transaction: Transaction) -> List:
        return self._add(transaction)

    def update_transaction(self, transaction: Transaction) -> List:
        return self._update(transaction)

    def delete_transaction(self, transaction) -> List:
        return self._delete(Transaction, self._id_of(transaction))

    def add_asset(self, asset: Asset) -> List:
        return self._add(asset)

    def update_asset(self, asset: Asset) -> List:
        return self._update(asset)

    def delete_asset(self, asset) -> List:
        return self._delete(Asset, self._id_of(asset))

    def add_goal(self, goal: Goal) -> List:
        return self._add(goal)

    def update_goal(self, goal: Goal) -> List:
        previous = find_by_id(self._state.goals, goal.id).get_or_else(None)
        results = self._update(goal)
        if previous is not None and not previous.is_completed and goal.is_completed:
            results += self.bus.publish(events.GOAL_COMPLETED, {"goal": goal})
        return results

    def delete_goal(self, goal) -> List:
        return self._delete(Goal, self._id_of(goal))

    def update_goal_progress(self, goal_id: str, current_amount: Decimal) -> List:
        goal = find_by_id(self._state.goals, goal_id).get_or_else(None)
        if goal is None:
            logger.debug("progress edit ignored, no goal with id %s", goal_id)
            return []
        return self.update_goal(goal.with_progress(current_amount))

    _ACTIONS = {
        "add_transaction", "update_transaction", "delete_transaction",
        "add_asset", "update_asset", "delete_asset",
        "add_goal", "update_goal", "delete_goal",
        "update_goal_progress", "refresh",
    }

    def dispatch(self, action: str, *args, **kwargs):
        if action not in self._ACTIONS:
            raise StoreError(f"Unknown action: {action}")
        return getattr(self, action)(*args, **kwargs)

    # refresh

    def _dataset_counts(self) -> dict:
        return dict(
            transaction_count=self._counts.get("transactions", 30),
            asset_count=self._counts.get("assets", 15),
            goal_count=self._counts.get("goals", 8),
        )

    def _generate(self) -> FinanceState:
        return self._generator.dataset(**self._dataset_counts())

    def refresh(self, state: Optional[FinanceState] = None) -> FinanceState:
        if not self._commit(state if state is not None else self._generate()):
            logger.debug("refresh left the data unchanged")
            return self._state
        # filtered views of the old records can no longer be hit
        clear_cache()
        logger.info("demo data refreshed")
        self.bus.publish(events.DATA_REFRESHED, {"state": self._state})
        return self._state

    async def refresh_async(self, delay: float = 1.0) -> FinanceState:
        state = await load_dataset(self._generator, delay, **self._dataset_counts())
        return self.refresh(state)

    # derived figures

    @property
    def total_assets(self) -> Decimal:
        return aggregates.total_assets(self._state.assets)

    @property
    def net_worth(self) -> Decimal:
        return self.total_assets

    @property
    def available_balance(self) -> Decimal:
        return aggregates.total_of(
            (a for a in self._state.assets if a.category in LIQUID_CATEGORIES),
            lambda a: a.value,
        )

    @property
    def total_income(self) -> Decimal:
        return aggregates.total_income(self._state.transactions)

    @property
    def total_expenses(self) -> Decimal:
        return aggregates.total_expenses(self._state.transactions)

    @property
    def net_cash_flow(self) -> Decimal:
        return aggregates.net_cash_flow(self._state.transactions)

    @property
    def completed_goals(self):
        return aggregates.completed_goals(self._state.goals)

    @property
    def average_goal_progress(self) -> float:
        return aggregates.average_goal_progress(self._state.goals)

    @property
    def aggregated_assets(self):
        return aggregates.aggregate_assets(self._state.assets)

    # filtered views

    def filtered_transactions(self, flt: DataFilter, today: Optional[date] = None):
        return memoized_apply(self._state.transactions, flt, today)

    def filtered_assets(self, flt: DataFilter, today: Optional[date] = None):
        return memoized_apply(self._state.assets, flt, today, match_dates=False)

    def filtered_goals(self, flt: DataFilter, today: Optional[date] = None):
        return memoized_apply(self._state.goals, flt, today, match_dates=False)

    def filtered_history(self, flt: DataFilter, today: Optional[date] = None):
        """Daily income and expense history across the filter's interval,
        zero-filled."""
        interval = flt.interval(today)
        income = aggregates.time_series(
            self._state.income_history, lambda p: p[0], lambda p: p[1], interval)
        expenses = aggregates.time_series(
            self._state.expense_history, lambda p: p[0], lambda p: p[1], interval)
        return income, expenses
