"""Streamlit entry point for the Expense Dashboard app."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pandas as pd
import streamlit as st
from expense_dashboard import insights, utils, viz
from expense_dashboard.logger import get_logger, setup_logging
from expense_dashboard.models import ALL, Category, ExpenseValidationError, Filters, Frequency
from expense_dashboard.settings import load_settings
from expense_dashboard.store import ExpenseStore, FileStorage, serialize


@st.cache_resource(show_spinner=False)
def _load_store(data_dir: str, storage_key: str) -> ExpenseStore:
    return ExpenseStore(FileStorage(data_dir), key=storage_key)


def _sidebar_filters(sidebar) -> Filters:
    sidebar.header("Filters")
    search = sidebar.text_input("Search", placeholder="Merchant, notes, category")
    category = sidebar.selectbox("Category", [ALL, *[c.value for c in Category]])
    frequency = sidebar.selectbox("Frequency", [ALL, *[f.value for f in Frequency]])

    use_start = sidebar.checkbox("Filter from date")
    start_date: date | None = None
    if use_start:
        start_date = sidebar.date_input("Start date", value=date.today().replace(day=1))

    use_end = sidebar.checkbox("Filter to date")
    end_date: date | None = None
    if use_end:
        end_date = sidebar.date_input("End date", value=date.today(), min_value=start_date)

    return Filters(
        search=search,
        category=category,
        frequency=frequency,
        start_date=start_date,
        end_date=end_date,
    )


def _add_expense_form(store: ExpenseStore) -> None:
    logger = get_logger("app")
    with st.expander("Add expense", expanded=False):
        with st.form("add-expense", clear_on_submit=True):
            left, right = st.columns(2)
            label = left.text_input("Label", placeholder="e.g. Groceries")
            amount = right.text_input("Amount", placeholder="0.00")
            category = left.selectbox("Category", [c.value for c in Category])
            frequency = right.selectbox("Frequency", [f.value for f in Frequency])
            when = left.date_input("Date", value=datetime.now(timezone.utc).date())
            notes = st.text_area("Notes", placeholder="Optional")
            submitted = st.form_submit_button("Save expense")

        if submitted:
            try:
                record = store.submit(
                    {
                        "label": label,
                        "amount": amount,
                        "category": category,
                        "frequency": frequency,
                        "date": when,
                        "notes": notes,
                    }
                )
            except ExpenseValidationError as exc:
                logger.info(f"Rejected expense input: {exc}")
                st.error(str(exc))
            else:
                st.success(f"Added {record.label}.")


def _records_table(records, currency_symbol: str) -> pd.DataFrame:
    df = utils.records_to_frame(records)
    df["date"] = df["date"].dt.strftime("%Y-%m-%d")
    df["amount"] = df["amount"].apply(lambda value: utils.format_currency(value, currency_symbol))
    df["notes"] = df["notes"].fillna("")
    return df[["label", "category", "frequency", "date", "amount", "notes"]].rename(
        columns=str.capitalize
    )


def main() -> None:
    """Render the Expense Dashboard Streamlit application."""

    settings = load_settings()
    setup_logging(settings)
    currency_symbol = settings.currency_symbol

    st.set_page_config(
        page_title="Expense Dashboard",
        page_icon="💸",
        layout="wide",
    )

    st.markdown(
        """
        <style>
        [data-testid="stAppViewContainer"] {
            background: #f5f7fb;
        }

        [data-testid="stMetric"] {
            background: #ffffff;
            border-radius: 18px;
            border: 1px solid rgba(226, 232, 240, 0.9);
            padding: 1rem 1.25rem;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )

    store = _load_store(str(settings.data_dir), settings.storage_key)

    st.title("Expense Dashboard")
    st.caption("Track personal and business expenses, spot spending trends, and plan ahead.")

    _add_expense_form(store)

    filters = _sidebar_filters(st.sidebar)
    payload = insights.build_dashboard(store.records, filters, tz=settings.timezone)

    cards = st.columns(4)
    cards[0].metric("Total spend", utils.format_currency(payload["total"], currency_symbol))
    cards[1].metric(
        "Avg. monthly",
        utils.format_currency(payload["avg_monthly"], currency_symbol),
        help="Based on filtered range",
    )
    cards[2].metric(
        "Avg. daily",
        utils.format_currency(payload["avg_daily"], currency_symbol),
        help="Helpful for monthly budgeting",
    )
    cards[3].metric(
        "Recurring spend",
        utils.format_currency(payload["recurring_total"], currency_symbol),
        help="Subscriptions & regular bills",
    )

    trend_col, category_col = st.columns([1, 1], gap="large")
    with trend_col:
        trend_fig = viz.plot_monthly_trend(payload["trend_points"], currency_symbol=currency_symbol)
        trend_col.plotly_chart(trend_fig, use_container_width=True, config={"displayModeBar": False})
    with category_col:
        category_fig = viz.plot_category_breakdown(
            payload["category_buckets"], currency_symbol=currency_symbol
        )
        category_col.plotly_chart(category_fig, use_container_width=True, config={"displayModeBar": False})

    filtered = payload["filtered_records"]
    with st.container():
        st.markdown("### Expenses")
        if not filtered:
            st.caption("No matching expenses")
            st.info("Try clearing filters or adding a new expense.")
        else:
            st.caption(f"{len(filtered)} records")
            st.dataframe(_records_table(filtered, currency_symbol), hide_index=True, use_container_width=True)

    st.sidebar.subheader("Exports")
    st.sidebar.download_button(
        "Download filtered JSON",
        data=serialize(filtered),
        file_name="expenses_filtered.json",
        mime="application/json",
        disabled=not filtered,
    )


if __name__ == "__main__":
    main()
