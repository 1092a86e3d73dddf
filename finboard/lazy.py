from collections import defaultdict
from decimal import Decimal
from typing import Callable, Iterable, Iterator, Tuple, TypeVar

from finboard.domain import Transaction, TransactionCategory

R = TypeVar('R')


def iter_records(records: Iterable[R], pred: Callable[[R], bool]) -> Iterator[R]:
    for r in records:
        if pred(r):
            yield r


def lazy_top_categories(
    trans: Iterable[Transaction], k: int
) -> Iterator[Tuple[TransactionCategory, Decimal]]:
    """Yield the ``k`` categories with the largest outflows, biggest first."""
    totals_by_category: dict = defaultdict(Decimal)

    for t in trans:
        if t.amount < 0:
            totals_by_category[t.category] += -t.amount

    ordered = sorted(totals_by_category.items(), key=lambda item: item[1], reverse=True)

    for category, total in ordered[: max(0, k)]:
        yield category, total
