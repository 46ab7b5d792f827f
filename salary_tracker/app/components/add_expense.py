from datetime import date

import streamlit as st

from salary_tracker.app.components.select import SelectOption, render_select
from salary_tracker.app.services.record_store import RecordStore
from salary_tracker.app.services.expenses_service import validate_expense_inputs, parse_amount
from salary_tracker.app.naming_conventions import DATE_FORMAT


@st.dialog("Add New Expense")
def show_add_expense_dialog(store: RecordStore) -> None:
    """
    Modal form for adding an expense. The form starts empty every time it is opened, with today as the date.
    """
    st.caption("Quickly add a new expense to track your spending.")
    description = st.text_input("Description", placeholder="e.g., Coffee with friends", key="add_expense_description")
    amount_col, date_col = st.columns(2)
    amount = amount_col.number_input(
        "Amount", value=None, step=0.01, format="%.2f", placeholder="0.00", key="add_expense_amount"
    )
    expense_date = date_col.date_input("Date", value=date.today(), key="add_expense_date")
    category = render_select(
        "Category",
        [SelectOption(name, name) for name in store.categories],
        None,
        key="add_expense_category",
        placeholder="Select a category",
    )

    if st.button("Add Expense", key="add_expense_submit", type="primary"):
        date_str = expense_date.strftime(DATE_FORMAT) if expense_date else None
        is_valid, msg = validate_expense_inputs(description, amount, category, date_str)
        if not is_valid:
            st.error(msg)
            return
        if store.add_expense(description, parse_amount(amount), category, date_str):
            st.rerun()
        else:
            st.error("Failed to save the expense, please try again.")
