import streamlit as st

from salary_tracker.app.components.fixed_expenses import FixedExpensesUI
from salary_tracker.app.utils.session import get_record_store

store = get_record_store()
if store is None:
    st.stop()

st.subheader("Monthly Fixed Expenses")
fixed_expenses_ui = FixedExpensesUI(store)
fixed_expenses_ui.render()
