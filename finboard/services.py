import logging
from datetime import date
from typing import Any, Callable, Dict, Optional, Sequence

from finboard import aggregates
from finboard.domain import FinanceState
from finboard.filters import DataFilter, apply

logger = logging.getLogger(__name__)

Calculator = Callable[..., Dict[str, Any]]


class SummaryService:
    """Facade that builds a dashboard summary from injected calculators.

    calculators: sequence of functions taking (state, filter, today, acc) -> dict
    (partial results). ``acc`` holds everything produced so far, so later
    calculators can build on earlier ones.
    """

    def __init__(self, calculators: Sequence[Calculator]):
        self.calculators = calculators

    def summary(self, state: FinanceState, flt: Optional[DataFilter] = None,
                today: Optional[date] = None) -> Dict[str, Any]:
        flt = flt or DataFilter()
        today = today or date.today()
        report = {
            "date_range": flt.date_range.title,
            "search_query": flt.search_query,
            "steps": [],
            "errors": [],
            "result": {},
        }

        acc: Dict[str, Any] = {}
        for calc in self.calculators:
            name = getattr(calc, "__name__", str(calc))
            try:
                out = calc(state, flt, today, acc)
            except Exception as e:
                # one broken calculator must not blank the whole summary
                logger.warning("calculator %s failed: %s", name, e)
                report["errors"].append({"calculator": name, "error": str(e)})
                continue
            report["steps"].append({"calculator": name, "output": out})
            if isinstance(out, dict):
                acc.update(out)

        report["result"] = acc
        return report


def calc_cash_flow(state, flt, today, acc):
    visible = apply(state.transactions, flt, today=today)
    return {
        "transaction_count": len(visible),
        "total_income": aggregates.total_income(visible),
        "total_expenses": aggregates.total_expenses(visible),
        "net_cash_flow": aggregates.net_cash_flow(visible),
        "savings_rate": aggregates.savings_rate(visible),
        "spending_by_category": aggregates.sum_by_category(
            t for t in visible if t.is_expense
        ),
    }


def calc_assets(state, flt, today, acc):
    return {
        "total_assets": aggregates.total_assets(state.assets),
        "aggregated_assets": aggregates.aggregate_assets(state.assets),
    }


def calc_goals(state, flt, today, acc):
    return {
        "completed_goals": len(aggregates.completed_goals(state.goals)),
        "goal_count": len(state.goals),
        "average_goal_progress": aggregates.average_goal_progress(state.goals),
    }


def default_summary_service() -> SummaryService:
    return SummaryService(calculators=[calc_cash_flow, calc_assets, calc_goals])
