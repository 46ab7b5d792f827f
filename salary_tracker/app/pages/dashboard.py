import streamlit as st

from salary_tracker.app.components.expense_dashboard import ExpenseDashboardUI
from salary_tracker.app.utils.session import get_record_store

store = get_record_store()
if store is None:
    st.stop()

dashboard_ui = ExpenseDashboardUI(store)
dashboard_ui.render()
