import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import asyncio
import logging
from datetime import date
from decimal import Decimal, InvalidOperation

import pandas as pd
import streamlit as st

from finboard import aggregates
from finboard.async_reports import monthly_cash_flow
from finboard.charts import assets_pie, donut_gauge, goals_bar, income_expense_chart
from finboard.config import load_config
from finboard.context import ThemeContext
from finboard.domain import FinanceState, Transaction, TransactionCategory, TransactionStatus, new_id
from finboard.events import GOAL_COMPLETED, TRANSACTION_ADDED
from finboard.exceptions import ConfigError, ValidationError
from finboard.filters import DataFilter, DateRange
from finboard.formatting import format_currency, format_percent
from finboard.functional import validate_transaction
from finboard.log import setup_logging
from finboard.mock_data import MockDataGenerator
from finboard.services import default_summary_service
from finboard.store import FinanceStore
from finboard.themes import THEMES, get_theme, theme_css
from finboard.transforms import load_seed, sort_by_status

st.set_page_config(page_title="Finboard", layout="wide")

logger = logging.getLogger("finboard.app")

if "config" not in st.session_state:
    try:
        st.session_state.config = load_config()
    except ConfigError as e:
        st.error(f"Configuration error: {e}")
        st.stop()
    setup_logging(st.session_state.config.log_level, st.session_state.config.log_file)

config = st.session_state.config


def build_store(cfg) -> FinanceStore:
    generator = MockDataGenerator(seed=cfg.seed)
    counts = {
        "transactions": cfg.transaction_count,
        "assets": cfg.asset_count,
        "goals": cfg.goal_count,
    }
    if cfg.seed_file:
        transactions, assets, goals = load_seed(cfg.seed_file)
        income, expenses = generator.daily_cash_flow(DateRange.MONTH.days)
        state = FinanceState(transactions, assets, goals, income, expenses)
        logger.info("loaded seed data from %s", cfg.seed_file)
        return FinanceStore(state=state, generator=generator, counts=counts)
    with st.spinner("Loading your finances..."):
        return FinanceStore(generator=generator, counts=counts)


if "store" not in st.session_state:
    try:
        st.session_state.store = build_store(config)
    except (OSError, ValidationError) as e:
        st.error(f"Could not load seed data: {e}")
        st.stop()
    st.session_state.alerts = []

store: FinanceStore = st.session_state.store

if "theme_context" not in st.session_state:
    st.session_state.theme_context = ThemeContext(get_theme(config.theme), bus=store.bus)

theme_context: ThemeContext = st.session_state.theme_context


def remember_alerts(results):
    for result in results:
        if isinstance(result, dict) and result.get("alert"):
            st.session_state.alerts.append(result["alert"])


# sidebar

st.sidebar.markdown("### 🎨 Appearance")
theme_names = list(THEMES)
selected_theme = st.sidebar.selectbox(
    "Theme",
    options=theme_names,
    index=theme_names.index(theme_context.current_theme.name),
)
if selected_theme != theme_context.current_theme.name:
    theme_context.set_theme(THEMES[selected_theme])

theme = theme_context.current_theme
st.markdown(f"<style>{theme_css(theme)}</style>", unsafe_allow_html=True)

menu = st.sidebar.radio(
    "Menu",
    ["🏠 Dashboard", "🧾 Transactions", "📈 Income & Expenses", "🎯 Assets & Goals", "📑 Reports", "⚙️ Settings"]
)

if st.session_state.alerts:
    st.sidebar.markdown("### 🔔 Alerts")
    for alert in st.session_state.alerts[-5:]:
        st.sidebar.warning(alert)

# toolbar

ranges = list(DateRange)
try:
    default_range = DateRange.from_name(config.date_range)
except ValueError:
    logger.warning("Unknown date range %r, using %s", config.date_range, DateRange.MONTH.title)
    default_range = DateRange.MONTH
t1, t2, t3 = st.columns([2, 3, 1])
with t1:
    date_range = st.radio(
        "Period",
        options=ranges,
        index=ranges.index(default_range),
        format_func=lambda r: r.short_label,
        horizontal=True,
    )
with t2:
    query = st.text_input("Search", placeholder="Payee, category, asset or goal...")
with t3:
    if st.button("🔄 Refresh"):
        with st.spinner("Refreshing..."):
            asyncio.run(store.refresh_async(config.load_delay_seconds))

flt = DataFilter(date_range=date_range, search_query=query)
today = date.today()

transactions = store.filtered_transactions(flt, today)
assets = store.filtered_assets(flt, today)
goals = store.filtered_goals(flt, today)


def transactions_df(records) -> pd.DataFrame:
    rows = [
        {
            "Due": t.due_date,
            "Payee": t.payee,
            "Category": t.category.value,
            "Sub Category": t.sub_category,
            "Amount": float(t.amount),
            "Status": t.status.value,
            "Description": t.description,
        }
        for t in records
    ]
    return pd.DataFrame(rows, columns=["Due", "Payee", "Category", "Sub Category", "Amount", "Status", "Description"])


if menu == "🏠 Dashboard":
    st.title("🏠 Dashboard")

    k1, k2, k3, k4 = st.columns(4)
    with k1:
        st.metric("Net Worth", format_currency(store.net_worth, 0))
    with k2:
        st.metric("Available", format_currency(store.available_balance, 0))
    with k3:
        st.metric(f"Income ({date_range.short_label})", format_currency(aggregates.total_income(transactions)))
    with k4:
        st.metric(f"Expenses ({date_range.short_label})", format_currency(aggregates.total_expenses(transactions)))

    g1, g2 = st.columns([1, 2])
    with g1:
        spent = aggregates.total_expenses(transactions)
        earned = aggregates.total_income(transactions)
        st.plotly_chart(donut_gauge(spent, earned, theme, "Spent of Income"), use_container_width=True)
    with g2:
        income, expenses = store.filtered_history(flt, today)
        st.plotly_chart(income_expense_chart(income, expenses, theme), use_container_width=True)

    st.subheader("⏰ Due & Late Bills")
    pending = [t for t in sort_by_status(transactions) if t.status is not TransactionStatus.PAID]
    if pending:
        st.dataframe(transactions_df(pending[:8]), use_container_width=True, hide_index=True)
    else:
        st.info("No bills due in this period.")

elif menu == "🧾 Transactions":
    st.title("🧾 Transactions")

    df = transactions_df(sort_by_status(transactions))
    if not df.empty:
        st.dataframe(
            df.assign(Amount=df["Amount"].map(lambda v: format_currency(v))),
            use_container_width=True,
            hide_index=True,
        )
        st.download_button(
            "⬇️ Download CSV",
            df.to_csv(index=False),
            file_name="transactions.csv",
            mime="text/csv",
        )
    else:
        st.info("No transactions match the current filter.")

    st.header("➕ Add Transaction")
    with st.form("add_transaction"):
        c1, c2, c3 = st.columns(3)
        with c1:
            category = st.selectbox("Category", options=list(TransactionCategory), format_func=lambda c: c.value)
            sub_category = st.text_input("Sub Category")
        with c2:
            amount_text = st.text_input("Amount", value="0.00", help="Negative for expenses")
            due_date = st.date_input("Due Date", value=today)
        with c3:
            payee = st.text_input("Payee")
            status = st.selectbox("Status", options=list(TransactionStatus), format_func=lambda s: s.value)
        description = st.text_input("Description")
        submitted = st.form_submit_button("Add")

    if submitted:
        try:
            amount = Decimal(amount_text)
        except InvalidOperation:
            st.error(f"Amount {amount_text!r} is not a number")
        else:
            candidate = Transaction(
                id=new_id(),
                category=category,
                sub_category=sub_category,
                amount=amount,
                due_date=due_date,
                status=status,
                description=description,
                payee=payee,
            )
            checked = validate_transaction(candidate, store.transactions)
            if checked.is_right():
                remember_alerts(store.add_transaction(checked.get_or_else(candidate)))
                st.success("Transaction added")
                st.rerun()
            else:
                st.error(checked.get_error()["message"])

    if transactions:
        st.header("🗑 Delete Transaction")
        labels = {t.id: f"{t.due_date} · {t.payee or t.sub_category} · {format_currency(t.amount)}" for t in transactions}
        chosen = st.selectbox("Transaction", options=list(labels), format_func=labels.get)
        if st.button("Delete"):
            store.delete_transaction(chosen)
            st.rerun()

elif menu == "📈 Income & Expenses":
    st.title("📈 Income & Expenses")

    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric("Net Cash Flow", format_currency(aggregates.net_cash_flow(transactions)))
    with k2:
        st.metric("Savings Rate", format_percent(aggregates.savings_rate(transactions) / 100, 1))
    with k3:
        st.metric("Transactions", len(transactions))

    income, expenses = aggregates.income_expense_series(transactions, flt.interval(today))
    st.plotly_chart(income_expense_chart(income, expenses, theme, "Scheduled Income vs Expenses"),
                    use_container_width=True)

    st.subheader("Top Spending Categories")
    top = list(aggregates.top_categories(transactions, 5))
    if top:
        st.table(pd.DataFrame(
            [{"Category": c.value, "Spent": format_currency(v)} for c, v in top]
        ))
    else:
        st.info("No spending in this period.")

elif menu == "🎯 Assets & Goals":
    st.title("🎯 Assets & Goals")

    aggregated = aggregates.aggregate_assets(assets)
    total = aggregates.total_assets(assets)
    a1, a2 = st.columns([2, 3])
    with a1:
        st.metric("Total Assets", format_currency(total, 0))
        st.table(pd.DataFrame([
            {
                "Category": row.category.value,
                "Value": format_currency(row.total_value, 0),
                "Items": row.item_count,
                "Share": format_percent(row.percentage(total) / 100, 1),
            }
            for row in aggregated
        ]))
    with a2:
        if aggregated:
            st.plotly_chart(assets_pie(aggregated, theme), use_container_width=True)

    st.header("Goals")
    if goals:
        st.plotly_chart(goals_bar(goals, theme), use_container_width=True)
        for goal in goals:
            with st.expander(f"{goal.name} · {goal.status(today).value}"):
                st.progress(goal.progress)
                st.caption(
                    f"{format_currency(goal.current_amount, 0)} of {format_currency(goal.target_amount, 0)}"
                    f" · {format_currency(goal.remaining_amount, 0)} to go"
                )
                new_amount = st.number_input(
                    "Current amount",
                    min_value=0.0,
                    value=float(goal.current_amount),
                    step=100.0,
                    key=f"goal_{goal.id}",
                )
                if st.button("Update", key=f"goal_update_{goal.id}"):
                    remember_alerts(store.update_goal_progress(goal.id, Decimal(str(new_amount))))
                    st.rerun()
    else:
        st.info("No goals match the current search.")

elif menu == "📑 Reports":
    st.title("📑 Reports")

    report = default_summary_service().summary(store.get_state(), flt, today)
    result = report["result"]

    r1, r2, r3 = st.columns(3)
    with r1:
        st.metric("Income", format_currency(result.get("total_income", 0)))
    with r2:
        st.metric("Expenses", format_currency(result.get("total_expenses", 0)))
    with r3:
        st.metric("Goals Completed", f"{result.get('completed_goals', 0)} / {result.get('goal_count', 0)}")

    spending = result.get("spending_by_category", {})
    if spending:
        st.subheader("Spending by Category")
        st.bar_chart(pd.Series({c.value: float(-v) for c, v in spending.items()}, name="Spent"))

    st.subheader("Monthly Cash Flow")
    months = [p.strftime("%Y-%m") for p in pd.period_range(end=pd.Timestamp(today), periods=6, freq="M")]
    monthly = asyncio.run(monthly_cash_flow(store.transactions, months))
    st.table(pd.DataFrame(
        [
            {"Month": m, "Income": format_currency(inc), "Expenses": format_currency(exp),
             "Net": format_currency(inc - exp)}
            for m, (inc, exp) in monthly.items()
        ]
    ))

    if report["errors"]:
        st.warning(f"{len(report['errors'])} report section(s) failed")
        st.json(report["errors"])

    with st.expander("Calculator steps"):
        st.write([step["calculator"] for step in report["steps"]])

elif menu == "⚙️ Settings":
    st.title("⚙️ Settings")
    st.json(config.to_dict())
    st.caption(f"Active theme: {theme.name}")
    st.caption(
        f"Listeners: {store.bus.subscriber_count(TRANSACTION_ADDED)} on {TRANSACTION_ADDED}, "
        f"{store.bus.subscriber_count(GOAL_COMPLETED)} on {GOAL_COMPLETED}"
    )
