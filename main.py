import streamlit as st

from salary_tracker.log import setup_logging
from salary_tracker.app.components.auth_form import render_auth_form
from salary_tracker.app.components.header import Header
from salary_tracker.app.naming_conventions import Pages
from salary_tracker.app.utils.session import get_auth_service, get_record_store

setup_logging()
st.set_page_config(page_title="Salary Tracker", layout='wide')

auth = get_auth_service()
if not auth.has_session:
    render_auth_form(auth)
    st.stop()

store = get_record_store()
if not store.loaded:
    st.error("Failed to load your data, please try again.")
    if st.button("Retry", key="retry_load_button"):
        store.load()
        st.rerun()
    st.stop()

Header(store, auth).render()

pg = st.navigation(
    [
        st.Page("salary_tracker/app/pages/dashboard.py", title=Pages.DASHBOARD.value, default=True),
        st.Page("salary_tracker/app/pages/fixed_expenses.py", title=Pages.FIXED_EXPENSES.value),
    ],
    position="top",
)
pg.run()
