from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Tuple
from uuid import uuid4

from finboard.exceptions import ValidationError


def new_id() -> str:
    return str(uuid4())


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _require_finite(record, *names: str) -> None:
    for name in names:
        value = getattr(record, name)
        if not _to_decimal(value).is_finite():
            raise ValidationError(f"{type(record).__name__}.{name} must be a finite number, got {value}")


def _to_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class TransactionCategory(str, Enum):
    HOUSING = "Housing"
    TRANSPORTATION = "Transportation"
    FOOD = "Food"
    UTILITIES = "Utilities"
    HEALTHCARE = "Healthcare"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    INCOME = "Income"
    SAVINGS = "Savings"
    OTHER = "Other"


class TransactionStatus(str, Enum):
    PAID = "Paid"
    DUE = "Due"
    LATE = "Late"

    @property
    def priority(self) -> int:
        # late bills sort first
        return {"Late": 0, "Due": 1, "Paid": 2}[self.value]


class AssetCategory(str, Enum):
    CHECKING = "Checking"
    SAVINGS = "Savings"
    STOCKS = "Stocks"
    BONDS = "Bonds"
    RETIREMENT = "Retirement"
    REAL_ESTATE = "Real Estate"
    CRYPTO = "Crypto"
    CASH = "Cash"
    OTHER = "Other"


class GoalCategory(str, Enum):
    EMERGENCY = "Emergency Fund"
    VACATION = "Vacation"
    HOME = "Home Purchase"
    CAR = "Car"
    EDUCATION = "Education"
    RETIREMENT = "Retirement"
    DEBT = "Debt Payoff"
    INVESTMENT = "Investment"
    WEDDING = "Wedding"
    BUSINESS = "Business"
    OTHER = "Other"


class GoalStatus(str, Enum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    ON_TRACK = "On Track"
    AT_RISK = "At Risk"
    COMPLETED = "Completed"


@dataclass(frozen=True)
class Transaction:
    id: str
    category: TransactionCategory
    sub_category: str
    amount: Decimal     # + for income, - for expense
    due_date: date
    status: TransactionStatus
    description: str = ""
    payee: str = ""

    def __post_init__(self):
        _require_finite(self, "amount")

    @property
    def is_income(self) -> bool:
        return self.amount > 0

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "category": self.category.value,
            "sub_category": self.sub_category,
            "amount": str(self.amount),
            "due_date": self.due_date.isoformat(),
            "status": self.status.value,
            "description": self.description,
            "payee": self.payee,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        return cls(
            id=data.get("id") or new_id(),
            category=TransactionCategory(data["category"]),
            sub_category=data.get("sub_category", ""),
            amount=_to_decimal(data["amount"]),
            due_date=_to_date(data["due_date"]),
            status=TransactionStatus(data.get("status", TransactionStatus.DUE.value)),
            description=data.get("description", ""),
            payee=data.get("payee", ""),
        )


@dataclass(frozen=True)
class Asset:
    id: str
    name: str
    category: AssetCategory
    value: Decimal
    institution: str = ""
    last_updated: date = field(default_factory=date.today)

    def __post_init__(self):
        _require_finite(self, "value")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "value": str(self.value),
            "institution": self.institution,
            "last_updated": self.last_updated.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Asset":
        return cls(
            id=data.get("id") or new_id(),
            name=data["name"],
            category=AssetCategory(data["category"]),
            value=_to_decimal(data["value"]),
            institution=data.get("institution") or "",
            last_updated=_to_date(data.get("last_updated") or date.today()),
        )


@dataclass(frozen=True)
class Goal:
    id: str
    name: str
    target_amount: Decimal
    current_amount: Decimal
    target_date: Optional[date]
    category: GoalCategory
    notes: str = ""
    created_at: date = field(default_factory=date.today)

    def __post_init__(self):
        _require_finite(self, "target_amount", "current_amount")

    @property
    def progress(self) -> float:
        """Fraction of the target reached, clamped to [0, 1].

        A non-positive target counts as no progress, so the result is
        always a finite number.
        """
        if self.target_amount <= 0 or not _to_decimal(self.current_amount).is_finite():
            return 0.0
        ratio = float(self.current_amount / self.target_amount)
        return min(max(ratio, 0.0), 1.0)

    @property
    def progress_percentage(self) -> float:
        return self.progress * 100

    @property
    def is_completed(self) -> bool:
        return self.progress >= 1.0

    @property
    def remaining_amount(self) -> Decimal:
        return max(self.target_amount - self.current_amount, Decimal(0))

    def days_remaining(self, today: Optional[date] = None) -> Optional[int]:
        if self.target_date is None:
            return None
        return (self.target_date - (today or date.today())).days

    def status(self, today: Optional[date] = None) -> GoalStatus:
        """Compare actual progress with the share of time elapsed."""
        if self.is_completed:
            return GoalStatus.COMPLETED
        if self.current_amount <= 0:
            return GoalStatus.NOT_STARTED
        if self.target_date is None:
            return GoalStatus.IN_PROGRESS

        today = today or date.today()
        if self.target_date < today:
            return GoalStatus.AT_RISK

        total_days = (self.target_date - self.created_at).days
        elapsed_days = (today - self.created_at).days
        expected = elapsed_days / total_days if total_days > 0 else 0.0

        if self.progress >= expected * 0.9:
            return GoalStatus.ON_TRACK
        if self.progress >= expected * 0.5:
            return GoalStatus.IN_PROGRESS
        return GoalStatus.AT_RISK

    def with_progress(self, current_amount: Decimal) -> "Goal":
        return replace(self, current_amount=_to_decimal(current_amount))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "target_amount": str(self.target_amount),
            "current_amount": str(self.current_amount),
            "target_date": self.target_date.isoformat() if self.target_date else None,
            "category": self.category.value,
            "notes": self.notes,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Goal":
        target_date = data.get("target_date")
        return cls(
            id=data.get("id") or new_id(),
            name=data["name"],
            target_amount=_to_decimal(data["target_amount"]),
            current_amount=_to_decimal(data.get("current_amount", 0)),
            target_date=_to_date(target_date) if target_date else None,
            category=GoalCategory(data.get("category", GoalCategory.OTHER.value)),
            notes=data.get("notes") or "",
            created_at=_to_date(data.get("created_at") or date.today()),
        )


@dataclass(frozen=True)
class FinanceState:
    """Everything the dashboard shows. Replaced wholesale on every change."""
    transactions: Tuple[Transaction, ...] = ()
    assets: Tuple[Asset, ...] = ()
    goals: Tuple[Goal, ...] = ()
    # daily (date, amount) history for the income/expense chart
    income_history: Tuple[Tuple[date, Decimal], ...] = ()
    expense_history: Tuple[Tuple[date, Decimal], ...] = ()
