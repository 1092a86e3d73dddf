"""Randomised demo data.

Everything is drawn from a ``numpy`` generator, so passing ``seed`` makes the
output (ids included) reproducible.
"""
import logging
import uuid
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

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

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

# category -> [(sub category, payee, description, amount or (low, high))]
TRANSACTION_TEMPLATES = {
    TransactionCategory.HOUSING: [
        ("Rent", "Property Management LLC", "Monthly apartment rent", 2500.0),
        ("Utilities", "City Power & Light", "Electricity bill", (80, 200)),
        ("Internet", "FastNet ISP", "Monthly internet service", 79.99),
        ("Insurance", "Home Guard Insurance", "Renters insurance", 25.0),
    ],
    TransactionCategory.TRANSPORTATION: [
        ("Gas", "Shell Station", "Fuel purchase", (40, 80)),
        ("Car Payment", "Auto Finance Co", "Monthly car loan", 450.0),
        ("Insurance", "SafeDrive Insurance", "Auto insurance", 125.0),
        ("Maintenance", "Quick Lube", "Oil change", 65.0),
    ],
    TransactionCategory.FOOD: [
        ("Groceries", "SuperMarket Plus", "Weekly grocery shopping", (75, 150)),
        ("Restaurant", "Italian Bistro", "Dinner with friends", (45, 120)),
        ("Coffee", "Corner Café", "Morning coffee", (4, 12)),
        ("Takeout", "Dragon Express", "Chinese food delivery", (25, 45)),
    ],
    TransactionCategory.UTILITIES: [
        ("Electricity", "City Power", "Monthly electric bill", (85, 165)),
        ("Water", "Municipal Water", "Water & sewer", (35, 75)),
        ("Gas", "Natural Gas Co", "Heating gas", (45, 125)),
        ("Trash", "Waste Management", "Garbage collection", 35.0),
    ],
    TransactionCategory.HEALTHCARE: [
        ("Insurance", "HealthCare Partners", "Monthly premium", 350.0),
        ("Dentist", "Smile Dental", "Regular cleaning", 125.0),
        ("Pharmacy", "Corner Pharmacy", "Prescription medication", (15, 85)),
        ("Doctor", "Family Medicine", "Check-up visit", 45.0),
    ],
    TransactionCategory.ENTERTAINMENT: [
        ("Streaming", "Netflix", "Monthly subscription", 15.99),
        ("Movies", "Cinema Complex", "Movie tickets", (25, 50)),
        ("Music", "Spotify Premium", "Music streaming", 9.99),
        ("Gaming", "Game Store", "Video game purchase", (30, 70)),
    ],
    TransactionCategory.SHOPPING: [
        ("Clothing", "Fashion Store", "New shirt", (35, 120)),
        ("Electronics", "Tech Mart", "Phone accessory", (20, 150)),
        ("Books", "Bookstore", "Novel purchase", (12, 25)),
        ("Home", "HomeGoods", "Kitchen utensils", (25, 75)),
    ],
    TransactionCategory.INCOME: [
        ("Salary", "Tech Company Inc", "Bi-weekly paycheck", 4500.0),
        ("Freelance", "Client Corp", "Consulting work", (800, 2500)),
        ("Investment", "Brokerage", "Dividend payment", (150, 500)),
        ("Side Gig", "Gig Platform", "Weekend earnings", (200, 800)),
    ],
    TransactionCategory.SAVINGS: [
        ("Emergency Fund", "High Yield Savings", "Monthly transfer", 500.0),
        ("Retirement", "401k Plan", "Contribution", 750.0),
        ("Investment", "Brokerage Account", "Stock purchase", (300, 1000)),
        ("Education", "529 Plan", "College savings", 200.0),
    ],
    TransactionCategory.OTHER: [
        ("Gift", "Various", "Birthday gift", (25, 100)),
        ("Charity", "Local Charity", "Monthly donation", 50.0),
        ("Fees", "Bank", "Account maintenance", 12.0),
        ("Miscellaneous", "Various", "Random expense", (15, 75)),
    ],
}

# (category, name, low, high, institution, max age in days, always included)
ASSET_TEMPLATES = [
    (AssetCategory.CHECKING, "Primary Checking", 2500, 8000, "Chase Bank", 1, True),
    (AssetCategory.CHECKING, "Business Checking", 5000, 15000, "Wells Fargo", 2, False),
    (AssetCategory.SAVINGS, "Emergency Fund", 15000, 35000, "Ally Bank", 3, True),
    (AssetCategory.SAVINGS, "High-Yield Savings", 8000, 25000, "Marcus", 4, True),
    (AssetCategory.SAVINGS, "Vacation Fund", 3000, 12000, "Capital One", 5, False),
    (AssetCategory.STOCKS, "Brokerage Account", 25000, 85000, "Fidelity", 1, True),
    (AssetCategory.STOCKS, "Index Funds", 30000, 95000, "Vanguard", 2, True),
    (AssetCategory.STOCKS, "Tech Stocks", 15000, 50000, "Robinhood", 3, False),
    (AssetCategory.STOCKS, "Dividend Portfolio", 20000, 60000, "Charles Schwab", 4, False),
    (AssetCategory.BONDS, "Treasury Bonds", 10000, 40000, "TreasuryDirect", 7, False),
    (AssetCategory.RETIREMENT, "401(k)", 50000, 250000, "Fidelity", 5, True),
    (AssetCategory.RETIREMENT, "Roth IRA", 25000, 95000, "Vanguard", 6, False),
    (AssetCategory.REAL_ESTATE, "Primary Residence", 250000, 750000, "", 30, False),
    (AssetCategory.REAL_ESTATE, "Rental Property", 150000, 450000, "", 30, False),
    (AssetCategory.CRYPTO, "Bitcoin", 5000, 35000, "Coinbase", 1, False),
    (AssetCategory.CRYPTO, "Ethereum", 3000, 20000, "Coinbase", 1, False),
    (AssetCategory.CASH, "Cash Reserve", 500, 3000, "", 7, False),
    (AssetCategory.OTHER, "Precious Metals", 5000, 25000, "", 7, False),
]

# (name, category, target, current, months until deadline, months since created, notes)
GOAL_TEMPLATES = [
    ("Emergency Fund", GoalCategory.EMERGENCY, 10000, 6500, 6, 4, "6 months of expenses"),
    ("European Vacation", GoalCategory.VACATION, 5000, 2800, 8, 3, "2-week trip to Italy and France"),
    ("House Down Payment", GoalCategory.HOME, 60000, 22000, 24, 8, "20% down on $300k home"),
    ("New Car", GoalCategory.CAR, 15000, 8500, 10, 5, "Used reliable sedan"),
    ("Master's Degree", GoalCategory.EDUCATION, 25000, 12000, 12, 6, "Part-time program"),
    ("Retirement Savings", GoalCategory.RETIREMENT, 1000000, 125000, 240, 36, "Age 65 retirement goal"),
    ("Credit Card Debt", GoalCategory.DEBT, 8000, 5200, 4, 7, "High interest cards first"),
    ("Wedding Fund", GoalCategory.WEDDING, 20000, 4500, 12, 2, "Small ceremony and reception"),
    ("Investment Portfolio", GoalCategory.INVESTMENT, 50000, 18000, 36, 12, "Diversified index funds"),
    ("Start Business", GoalCategory.BUSINESS, 30000, 3000, 24, 1, "Initial capital for side business"),
]


def to_money(value: float) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def add_months(d: date, months: int) -> date:
    return (pd.Timestamp(d) + pd.DateOffset(months=months)).date()


def status_for(due_date: date, today: date, coin: float) -> TransactionStatus:
    """More than 3 days overdue is late, overdue or due today is due, and a
    future bill is paid or due depending on ``coin``."""
    overdue_days = (today - due_date).days
    if overdue_days > 3:
        return TransactionStatus.LATE
    if overdue_days >= 0:
        return TransactionStatus.DUE
    return TransactionStatus.PAID if coin < 0.5 else TransactionStatus.DUE


class MockDataGenerator:

    def __init__(self, seed: Optional[int] = None, today: Optional[date] = None):
        self.seed = seed
        self.today = today or date.today()
        self._rng = np.random.default_rng(seed)

    def _id(self) -> str:
        return str(uuid.UUID(bytes=self._rng.bytes(16), version=4))

    def _pick(self, options):
        return options[int(self._rng.integers(len(options)))]

    def _coin(self) -> bool:
        return bool(self._rng.random() < 0.5)

    def _amount(self, spec) -> Decimal:
        if isinstance(spec, tuple):
            low, high = spec
            return to_money(self._rng.uniform(low, high))
        return to_money(spec)

    def transaction(self, category: Optional[TransactionCategory] = None) -> Transaction:
        category = category or self._pick(list(TransactionCategory))
        sub_category, payee, description, spec = self._pick(TRANSACTION_TEMPLATES[category])
        magnitude = self._amount(spec)
        amount = magnitude if category is TransactionCategory.INCOME else -magnitude

        due_date = self.today + timedelta(days=int(self._rng.integers(-15, 16)))
        status = status_for(due_date, self.today, self._rng.random())

        return Transaction(
            id=self._id(),
            category=category,
            sub_category=sub_category,
            amount=amount,
            due_date=due_date,
            status=status,
            description=description,
            payee=payee,
        )

    def transactions(self, count: int = 30) -> Tuple[Transaction, ...]:
        return tuple(self.transaction() for _ in range(max(0, count)))

    def assets(self, count: int = 15) -> Tuple[Asset, ...]:
        result: List[Asset] = []
        for category, name, low, high, institution, max_age, always in ASSET_TEMPLATES:
            if len(result) >= count:
                break
            if not always and not self._coin():
                continue
            age = int(self._rng.integers(0, max_age + 1))
            result.append(Asset(
                id=self._id(),
                name=name,
                category=category,
                value=to_money(self._rng.uniform(low, high)),
                institution=institution,
                last_updated=self.today - timedelta(days=age),
            ))
        return tuple(result)

    def goals(self, count: int = 8) -> Tuple[Goal, ...]:
        return tuple(
            Goal(
                id=self._id(),
                name=name,
                target_amount=to_money(target),
                current_amount=to_money(current),
                target_date=add_months(self.today, ahead),
                category=category,
                notes=notes,
                created_at=add_months(self.today, -since),
            )
            for name, category, target, current, ahead, since, notes in GOAL_TEMPLATES[:max(0, count)]
        )

    def daily_cash_flow(self, days: int = 30):
        """Daily income and expense history, oldest day first.

        Income spikes on paydays (1st and 15th); rent lands on the 1st and
        bills on the 5th and 20th.
        """
        income, expenses = [], []
        for offset in range(days - 1, -1, -1):
            day = self.today - timedelta(days=offset)
            dom = day.day
            u = self._rng.uniform

            if dom == 1:
                daily_income = 4500 + u(-200, 200)
            elif dom == 15:
                daily_income = 4200 + u(-200, 200)
            elif dom % 7 == 0:
                daily_income = 300 + u(-50, 100)
            else:
                daily_income = u(0, 150)

            if dom == 1:
                daily_expense = 1200 + u(-100, 100)
            elif dom in (5, 20):
                daily_expense = 400 + u(-50, 150)
            elif dom % 7 == 6:
                daily_expense = 250 + u(-50, 100)
            else:
                daily_expense = 120 + u(-30, 80)

            income.append((day, to_money(daily_income)))
            expenses.append((day, to_money(daily_expense)))
        return tuple(income), tuple(expenses)

    def dataset(self, transaction_count: int = 30, asset_count: int = 15,
                goal_count: int = 8, history_days: int = 30) -> FinanceState:
        income, expenses = self.daily_cash_flow(history_days)
        state = FinanceState(
            transactions=self.transactions(transaction_count),
            assets=self.assets(asset_count),
            goals=self.goals(goal_count),
            income_history=income,
            expense_history=expenses,
        )
        logger.debug(
            "generated %d transactions, %d assets, %d goals (seed=%s)",
            len(state.transactions), len(state.assets), len(state.goals), self.seed,
        )
        return state
