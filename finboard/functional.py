from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterable, TypeVar

from finboard.domain import Asset, Goal, Transaction, TransactionCategory

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Maybe[U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Maybe[U]']) -> 'Maybe[U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    def is_some(self) -> bool:
        return isinstance(self, Some)

    def is_none(self) -> bool:
        return not self.is_some()


class Some(Maybe[T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f):
        return Some(f(self._value))

    def bind(self, f):
        return f(self._value)

    def get_or_else(self, default):
        return self._value

    def __repr__(self) -> str:
        return f"Some({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self._value == other._value


class Nothing(Maybe[T]):

    def map(self, f):
        return self

    def bind(self, f):
        return self

    def get_or_else(self, default):
        return default

    def __repr__(self) -> str:
        return "Nothing()"

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)


class Either(Generic[E, T], ABC):

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def get_error(self) -> E:
        pass

    def is_right(self) -> bool:
        return isinstance(self, Right)

    def is_left(self) -> bool:
        return not self.is_right()


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f):
        return Right(f(self._value))

    def bind(self, f):
        return f(self._value)

    def get_or_else(self, default):
        return self._value

    def get_error(self):
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f):
        return self

    def bind(self, f):
        return self

    def get_or_else(self, default):
        return default

    def get_error(self):
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def find_by_id(records: Iterable[T], record_id: str) -> Maybe[T]:
    for record in records:
        if record.id == record_id:
            return Some(record)
    return Nothing()


def _duplicate(record, existing) -> Either[dict, object]:
    if find_by_id(existing, record.id).is_some():
        return Left({
            "error": "duplicate_id",
            "message": f"A record with ID {record.id} already exists",
            "id": record.id,
        })
    return Right(record)


def validate_transaction(
    t: Transaction,
    existing: tuple[Transaction, ...] = ()
) -> Either[dict, Transaction]:
    """Check a transaction against the signed-amount convention.

    Income is positive; every other category is an outflow and must not be
    positive.
    """
    if t.category is TransactionCategory.INCOME and t.amount <= 0:
        return Left({
            "error": "category_sign_mismatch",
            "message": "Income transactions must have a positive amount",
            "category": t.category.value,
            "amount": t.amount,
        })
    if t.category is not TransactionCategory.INCOME and t.amount > 0:
        return Left({
            "error": "category_sign_mismatch",
            "message": f"{t.category.value} transactions cannot have a positive amount",
            "category": t.category.value,
            "amount": t.amount,
        })

    return _duplicate(t, existing)


def validate_asset(a: Asset, existing: tuple[Asset, ...] = ()) -> Either[dict, Asset]:
    if not a.name.strip():
        return Left({"error": "missing_name", "message": "Asset name is required"})
    return _duplicate(a, existing)


def validate_goal(g: Goal, existing: tuple[Goal, ...] = ()) -> Either[dict, Goal]:
    if not g.name.strip():
        return Left({"error": "missing_name", "message": "Goal name is required"})
    if g.target_amount < 0 or g.current_amount < 0:
        return Left({
            "error": "negative_amount",
            "message": f"Goal {g.name} cannot have negative amounts",
            "target_amount": g.target_amount,
            "current_amount": g.current_amount,
        })
    return _duplicate(g, existing)

