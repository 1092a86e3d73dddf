from datetime import date
from decimal import Decimal

import plotly.graph_objects as go
import pytest

from finboard.aggregates import AssetCategoryTotal
from finboard.charts import assets_pie, donut_gauge, gauge_ratio, goals_bar, income_expense_chart
from finboard.domain import AssetCategory, Goal, GoalCategory
from finboard.formatting import format_currency, format_percent
from finboard.themes import NEUTRAL, VIBRANT


@pytest.mark.parametrize("value, expected", [
    (Decimal("1234.5"), "$1,234.50"),
    (Decimal("-1234.5"), "-$1,234.50"),
    (0, "$0.00"),
    ("abc", "$0"),
    (float("nan"), "$0"),
    (None, "$0"),
])
def test_format_currency(value, expected):
    assert format_currency(value) == expected


def test_format_currency_whole_units():
    assert format_currency(Decimal("98765.4"), 0) == "$98,765"


def test_format_percent():
    assert format_percent(0.256) == "26%"
    assert format_percent(0.256, 1) == "25.6%"
    assert format_percent(float("inf")) == "0%"


def test_gauge_ratio_is_bounded():
    assert gauge_ratio(50, 200) == 0.25
    assert gauge_ratio(500, 200) == 1.0
    assert gauge_ratio(-5, 200) == 0.0
    assert gauge_ratio(10, 0) == 0.0
    assert gauge_ratio(float("nan"), 10) == 0.0


def test_donut_gauge_uses_theme_colors():
    fig = donut_gauge(Decimal(50), Decimal(200), VIBRANT, "Budget")
    assert isinstance(fig, go.Figure)
    pie = fig.data[0]
    assert list(pie.values) == [0.25, 0.75]
    assert pie.marker.colors[0] == VIBRANT.colors.primary.hex
    assert fig.layout.title.text == "Budget"


def test_income_expense_chart_has_two_traces():
    income = ((date(2026, 1, 1), Decimal(10)), (date(2026, 1, 2), Decimal(0)))
    expenses = ((date(2026, 1, 1), Decimal(4)), (date(2026, 1, 2), Decimal(6)))
    fig = income_expense_chart(income, expenses, NEUTRAL)
    assert [trace.name for trace in fig.data] == ["Income", "Expenses"]
    assert list(fig.data[1].y) == [4.0, 6.0]
    assert fig.data[0].line.color == NEUTRAL.colors.success.hex


def test_assets_pie_and_goals_bar():
    rows = (
        AssetCategoryTotal(AssetCategory.STOCKS, Decimal(150), 2),
        AssetCategoryTotal(AssetCategory.BONDS, Decimal(25), 1),
    )
    pie = assets_pie(rows, VIBRANT).data[0]
    assert list(pie.labels) == ["Stocks", "Bonds"]

    goals = [
        Goal("g1", "Car", Decimal(1000), Decimal(250), None, GoalCategory.CAR),
        Goal("g2", "Trip", Decimal(500), Decimal(500), None, GoalCategory.VACATION),
    ]
    bar = goals_bar(goals, VIBRANT).data[0]
    assert list(bar.x) == [25.0, 100.0]
    assert list(bar.marker.color) == [VIBRANT.colors.primary.hex, VIBRANT.colors.success.hex]
