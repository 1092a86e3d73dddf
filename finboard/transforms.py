import json
from pathlib import Path
from typing import Iterable, Tuple, TypeVar, Union

from finboard.domain import Asset, Goal, Transaction
from finboard.exceptions import ValidationError

R = TypeVar('R')


def load_seed(
    path: Union[str, Path],
) -> Tuple[
    Tuple[Transaction, ...],
    Tuple[Asset, ...],
    Tuple[Goal, ...],
]:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in seed file {path}: {e}") from e

    try:
        transactions = tuple(Transaction.from_dict(t) for t in data.get("transactions", []))
        assets = tuple(Asset.from_dict(a) for a in data.get("assets", []))
        goals = tuple(Goal.from_dict(g) for g in data.get("goals", []))
    except (KeyError, ValueError, ArithmeticError) as e:
        raise ValidationError(f"Malformed record in seed file {path}: {e!r}") from e

    return transactions, assets, goals


def dump_seed(path: Union[str, Path], transactions, assets, goals) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {
        "transactions": [t.to_dict() for t in transactions],
        "assets": [a.to_dict() for a in assets],
        "goals": [g.to_dict() for g in goals],
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    return path


def add_record(records: Tuple[R, ...], record: R) -> Tuple[R, ...]:
    return records + (record,)


def update_record(records: Tuple[R, ...], record: R) -> Tuple[R, ...]:
    """Replace the record with the same id; unknown ids leave the tuple as is."""
    if not any(r.id == record.id for r in records):
        return records
    return tuple(record if r.id == record.id else r for r in records)


def delete_record(records: Tuple[R, ...], record_id: str) -> Tuple[R, ...]:
    remaining = tuple(r for r in records if r.id != record_id)
    return records if len(remaining) == len(records) else remaining


def income_transactions(trans: Iterable[Transaction]) -> Tuple[Transaction, ...]:
    return tuple(t for t in trans if t.is_income)


def expense_transactions(trans: Iterable[Transaction]) -> Tuple[Transaction, ...]:
    """Outflows only; zero-amount bills count as neither side."""
    return tuple(t for t in trans if t.is_expense)


def sort_by_status(trans: Tuple[Transaction, ...]) -> Tuple[Transaction, ...]:
    """Late first, then due, then paid; earliest due date first within a status."""
    return tuple(sorted(trans, key=lambda t: (t.status.priority, t.due_date)))
