import logging
from dataclasses import dataclass, replace
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Callable, Iterable, NamedTuple, Optional, TypeVar

from finboard.domain import Asset, Goal, Transaction

logger = logging.getLogger(__name__)

R = TypeVar('R')

# "All Time" is deliberately bounded: it reaches back this many calendar years.
ALL_TIME_YEARS = 5


class DateInterval(NamedTuple):
    start: date
    end: date

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


def _years_back(d: date, years: int) -> date:
    try:
        return d.replace(year=d.year - years)
    except ValueError:
        if d.month == 2 and d.day == 29:
            return d.replace(year=d.year - years, day=28)
        raise


class DateRange(Enum):
    WEEK = ("Week", "7D", 7)
    MONTH = ("Month", "30D", 30)
    QUARTER = ("Quarter", "90D", 90)
    YEAR = ("Year", "1Y", 365)
    ALL_TIME = ("All Time", "All", 365 * ALL_TIME_YEARS)

    def __init__(self, title: str, short_label: str, days: int):
        self.title = title
        self.short_label = short_label
        self.days = days

    @classmethod
    def from_name(cls, name: str) -> "DateRange":
        key = (name or "").strip().upper().replace(" ", "_")
        for member in cls:
            if key in (member.name, member.title.upper().replace(" ", "_"), member.short_label.upper()):
                return member
        raise ValueError(f"Unknown date range: {name}")

    def interval(self, relative_to: Optional[date] = None) -> DateInterval:
        end = relative_to or date.today()
        try:
            if self is DateRange.ALL_TIME:
                start = _years_back(end, ALL_TIME_YEARS)
            else:
                start = end - timedelta(days=self.days)
        except (OverflowError, ValueError):
            logger.debug("date math failed for %s relative to %s, using end date", self.title, end)
            start = end
        return DateInterval(start, end)


def transaction_texts(t: Transaction) -> tuple:
    return (t.sub_category, t.category.value, t.description, t.payee)


def asset_texts(a: Asset) -> tuple:
    return (a.name, a.category.value, a.institution)


def goal_texts(g: Goal) -> tuple:
    return (g.name, g.category.value, g.notes)


SEARCH_FIELDS = {
    Transaction: transaction_texts,
    Asset: asset_texts,
    Goal: goal_texts,
}

DATE_FIELDS = {
    Transaction: lambda t: t.due_date,
    Asset: lambda a: a.last_updated,
    Goal: lambda g: g.target_date,
}


@dataclass(frozen=True)
class DataFilter:
    date_range: DateRange = DateRange.MONTH
    search_query: str = ""

    @property
    def is_active(self) -> bool:
        return self.date_range is not DateRange.ALL_TIME or bool(self.search_query.strip())

    def interval(self, today: Optional[date] = None) -> DateInterval:
        return self.date_range.interval(today)

    def contains(self, d: Optional[date], today: Optional[date] = None) -> bool:
        if d is None:
            return False
        return self.interval(today).contains(d)

    def matches(self, *texts: Optional[str]) -> bool:
        query = self.search_query.strip().casefold()
        if not query:
            return True
        return any(query in (text or "").casefold() for text in texts)

    def with_range(self, date_range: DateRange) -> "DataFilter":
        return replace(self, date_range=date_range)

    def with_query(self, search_query: str) -> "DataFilter":
        return replace(self, search_query=search_query)


def apply(
    records: Iterable[R],
    flt: DataFilter,
    today: Optional[date] = None,
    match_dates: bool = True,
    date_of: Optional[Callable[[R], date]] = None,
    texts_of: Optional[Callable[[R], tuple]] = None,
) -> tuple:
    """Return the records that pass ``flt``, in their original order.

    A record passes when its date lies in the filter's interval (unless
    ``match_dates`` is off) and the search query is empty or found in one of
    its text fields. Field selectors default to the ones registered for the
    record's type.
    """
    interval = flt.interval(today)
    result = []
    for record in records:
        get_date = date_of or DATE_FIELDS[type(record)]
        get_texts = texts_of or SEARCH_FIELDS[type(record)]
        if match_dates:
            d = get_date(record)
            if d is None or not interval.contains(d):
                continue
        if not flt.matches(*get_texts(record)):
            continue
        result.append(record)
    return tuple(result)


def by_category(category):
    def _filter(record) -> bool:
        return record.category == category

    return _filter


def by_date_range(start: date, end: date):
    def _filter(t: Transaction) -> bool:
        return start <= t.due_date <= end

    return _filter


def by_amount_range(min: Decimal, max: Decimal):
    def _filter(t: Transaction) -> bool:
        return min <= t.amount <= max

    return _filter
