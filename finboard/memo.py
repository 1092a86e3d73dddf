from datetime import date
from functools import lru_cache
from typing import Optional

from finboard.filters import DataFilter, apply


@lru_cache(maxsize=128)
def _cached_apply(records: tuple, flt: DataFilter, today: date, match_dates: bool) -> tuple:
    return apply(records, flt, today=today, match_dates=match_dates)


def memoized_apply(records: tuple, flt: DataFilter, today: Optional[date] = None,
                   match_dates: bool = True) -> tuple:
    # the day is part of the key so results roll over at midnight
    return _cached_apply(tuple(records), flt, today or date.today(), match_dates)


def clear_cache() -> None:
    _cached_apply.cache_clear()
