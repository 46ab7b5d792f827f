import streamlit as st

from salary_tracker.app.services.auth_service import AuthService
from salary_tracker.app.services.record_store import RecordStore
from salary_tracker.app.services.expenses_service import validate_salary, validate_category_name, parse_amount
from salary_tracker.app.utils.formatting import format_currency


class Header:
    def __init__(self, store: RecordStore, auth: AuthService):
        self.store = store
        self.auth = auth

    def render(self):
        title_col, salary_col, category_col, user_col = st.columns([4, 2, 2, 2], vertical_alignment="center")
        title_col.title("Salary Tracker")
        with salary_col.popover(f"Salary: {format_currency(self.store.salary)}", width='stretch'):
            self._edit_salary_form()
        with category_col.popover("Add Category", width='stretch'):
            self._add_category_form()
        with user_col:
            user = self.auth.get_user()
            st.caption(user.email if user else "")
            st.button("Sign Out", key="sign_out_button", on_click=self.auth.sign_out, width='stretch')

    def _edit_salary_form(self):
        with st.form("edit_salary_form", border=False):
            new_salary = st.number_input(
                "Monthly Salary", value=self.store.salary, step=100.0, key="edit_salary_input"
            )
            if st.form_submit_button("Save"):
                is_valid, msg = validate_salary(new_salary)
                if not is_valid:
                    st.error(msg)
                    return
                if self.store.update_salary(parse_amount(new_salary)):
                    st.rerun()
                else:
                    st.error("Failed to update the salary.")

    def _add_category_form(self):
        with st.form("add_category_form", border=False, clear_on_submit=True):
            name = st.text_input("New Category Name", key="new_category_input")
            if st.form_submit_button("Add"):
                is_valid, msg = validate_category_name(name)
                if not is_valid:
                    st.error(msg)
                    return
                if name in self.store.categories:
                    st.info(f"Category '{name}' already exists.")
                    return
                if self.store.add_category(name):
                    st.success(f"Category '{name}' added.")
                else:
                    st.error("Failed to add the category.")
