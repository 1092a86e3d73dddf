import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, NamedTuple

from finboard.domain import TransactionStatus

__all__ = [
    'Event', 'EventBus',
    'THEME_CHANGED', 'DATA_REFRESHED', 'GOAL_COMPLETED',
    'TRANSACTION_ADDED', 'TRANSACTION_UPDATED', 'TRANSACTION_DELETED',
    'ASSET_ADDED', 'ASSET_UPDATED', 'ASSET_DELETED',
    'GOAL_ADDED', 'GOAL_UPDATED', 'GOAL_DELETED',
    'goal_completed_handler', 'late_transaction_handler',
]

logger = logging.getLogger(__name__)


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], Any]


class EventBus:
    """Synchronous publish/subscribe: handlers run in subscription order
    before ``publish`` returns."""

    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> Callable[[], None]:
        self._subscribers.setdefault(name, []).append(handler)
        return lambda: self.unsubscribe(name, handler)

    def publish(self, name: str, payload: dict) -> List[Any]:
        handlers = list(self._subscribers.get(name, ()))
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        logger.debug("publish %s to %d handler(s)", name, len(handlers))
        return [handler(event, payload) for handler in handlers]

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(name)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def subscriber_count(self, name: str) -> int:
        return len(self._subscribers.get(name, ()))


THEME_CHANGED = "THEME_CHANGED"
DATA_REFRESHED = "DATA_REFRESHED"
GOAL_COMPLETED = "GOAL_COMPLETED"

TRANSACTION_ADDED = "TRANSACTION_ADDED"
TRANSACTION_UPDATED = "TRANSACTION_UPDATED"
TRANSACTION_DELETED = "TRANSACTION_DELETED"
ASSET_ADDED = "ASSET_ADDED"
ASSET_UPDATED = "ASSET_UPDATED"
ASSET_DELETED = "ASSET_DELETED"
GOAL_ADDED = "GOAL_ADDED"
GOAL_UPDATED = "GOAL_UPDATED"
GOAL_DELETED = "GOAL_DELETED"


def goal_completed_handler(event: Event, payload: dict) -> dict:
    goal = payload.get("goal")
    if goal is None:
        return {}
    return {
        "alert": f"Goal reached: {goal.name} ({goal.current_amount:,.2f} / {goal.target_amount:,.2f})",
        "goal_id": goal.id,
    }


def late_transaction_handler(event: Event, payload: dict) -> dict:
    transaction = payload.get("transaction")
    if transaction is None or transaction.status is not TransactionStatus.LATE:
        return {}
    return {
        "alert": f"Late payment: {transaction.payee or transaction.sub_category} "
                 f"({abs(transaction.amount):,.2f}) was due {transaction.due_date.isoformat()}",
        "transaction_id": transaction.id,
    }
