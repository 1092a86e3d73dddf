import asyncio
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from finboard.domain import FinanceState, Transaction
from finboard.mock_data import MockDataGenerator


async def load_dataset(generator: Optional[MockDataGenerator] = None, delay: float = 1.0,
                       **counts) -> FinanceState:
    """Generate demo data after an artificial delay, as if fetched remotely."""
    generator = generator or MockDataGenerator()
    await asyncio.sleep(delay)
    return generator.dataset(**counts)


async def monthly_cash_flow(trans: List[Transaction], months: List[str]) -> Dict[str, Tuple[Decimal, Decimal]]:
    """Compute (income, expenses) per month concurrently.

    months: list of YYYY-MM strings (e.g., '2025-01')
    Expenses are a positive magnitude.
    """
    async def month_totals(month: str) -> tuple:
        income = Decimal(0)
        expenses = Decimal(0)
        for t in trans:
            if t.due_date.isoformat().startswith(month):
                if t.amount > 0:
                    income += t.amount
                else:
                    expenses -= t.amount
        await asyncio.sleep(0)  # cooperate
        return month, (income, expenses)

    results = await asyncio.gather(*(month_totals(m) for m in months))
    return {k: v for k, v in results}
