import streamlit as st

from salary_tracker.app.services.expenses_service import summarize, progress_ratio
from salary_tracker.app.utils.formatting import format_currency


def render_summary_cards(salary: float, total_expenses: float) -> None:
    """
    Show the salary, the total expenses and the remaining balance, followed by a bar of how much of the salary is
    spent. The bar is capped at 100% while the numbers are not.
    """
    summary = summarize(salary, total_expenses)

    salary_col, expenses_col, balance_col = st.columns(3)
    salary_col.metric("Monthly Salary", format_currency(salary), border=True)
    expenses_col.metric("Total Expenses", format_currency(total_expenses), border=True)
    balance_col.metric(
        "Remaining Balance",
        format_currency(summary.remaining),
        delta="On budget" if summary.remaining >= 0 else "Over budget",
        delta_color="normal" if summary.remaining >= 0 else "inverse",
        border=True,
    )

    st.progress(
        progress_ratio(summary.percentage) / 100,
        text=f"Expenses: {format_currency(total_expenses)} / {format_currency(salary)} "
             f"({summary.percentage:.1f}%)",
    )
