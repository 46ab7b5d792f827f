import streamlit as st

from salary_tracker.app.naming_conventions import FixedExpensesTableFields
from salary_tracker.app.services.expenses_service import (
    fixed_expenses_totals,
    validate_fixed_expense_inputs,
    parse_amount,
)
from salary_tracker.app.services.record_store import RecordStore
from salary_tracker.app.utils.formatting import format_currency

ERROR_KEY = 'fixed_expenses_error'


class FixedExpensesUI:
    """
    The monthly bills checklist: the total of all bills and of the ones already paid, a form for adding a bill and
    one row per bill with a paid checkbox and a delete button.
    """
    id_col = FixedExpensesTableFields.ID.value
    task_col = FixedExpensesTableFields.TASK.value
    amount_col = FixedExpensesTableFields.AMOUNT.value
    is_completed_col = FixedExpensesTableFields.IS_COMPLETED.value

    def __init__(self, store: RecordStore):
        self.store = store

    def render(self) -> None:
        self.totals_header()
        self.add_fixed_expense_form()
        self.fixed_expenses_list()

    def totals_header(self) -> None:
        totals = fixed_expenses_totals(self.store.fixed_expenses)
        total_col, paid_col, left_col = st.columns(3)
        total_col.metric("Total Fixed Expenses", format_currency(totals['total']), border=True)
        paid_col.metric("Paid", format_currency(totals['paid']), border=True)
        left_col.metric("Left to Pay", format_currency(totals['total'] - totals['paid']), border=True)

    def add_fixed_expense_form(self) -> None:
        with st.form("add_fixed_expense_form", clear_on_submit=True):
            task_col, amount_col, submit_col = st.columns([5, 3, 2], vertical_alignment="bottom")
            task = task_col.text_input("Name", placeholder="e.g., Rent", key="fixed_expense_task")
            amount = amount_col.number_input("Amount", value=None, step=0.01, format="%.2f",
                                             key="fixed_expense_amount")
            if submit_col.form_submit_button("Add", width='stretch'):
                is_valid, msg = validate_fixed_expense_inputs(task, amount)
                if not is_valid:
                    st.error(msg)
                elif not self.store.add_fixed_expense(task.strip(), parse_amount(amount)):
                    st.error("Failed to save the fixed expense, please try again.")

    def _toggle(self, id_: str, widget_key: str) -> None:
        if not self.store.toggle_fixed_expense(id_):
            # put the checkbox back in line with the stored flag
            st.session_state.pop(widget_key, None)
            st.session_state[ERROR_KEY] = "Failed to update the fixed expense, please try again."

    def _delete(self, id_: str) -> None:
        if not self.store.delete_fixed_expense(id_):
            st.session_state[ERROR_KEY] = "Failed to delete the fixed expense, please try again."

    def fixed_expenses_list(self) -> None:
        error = st.session_state.pop(ERROR_KEY, None)
        if error:
            st.error(error)

        if self.store.fixed_expenses.empty:
            st.info("No fixed expenses yet! Add your monthly bills above.")
            return

        for _, fixed_expense in self.store.fixed_expenses.iterrows():
            id_ = fixed_expense[self.id_col]
            widget_key = f"fixed_expense_done_{id_}"
            check_col, amount_col, delete_col = st.columns([7, 2, 1], vertical_alignment="center")
            label = fixed_expense[self.task_col]
            if fixed_expense[self.is_completed_col]:
                label = f"~~{label}~~"
            check_col.checkbox(
                label,
                value=bool(fixed_expense[self.is_completed_col]),
                key=widget_key,
                on_change=self._toggle,
                args=(id_, widget_key),
            )
            amount_col.write(f"**{format_currency(fixed_expense[self.amount_col])}**")
            delete_col.button(
                "Delete",
                key=f"delete_fixed_expense_{id_}",
                icon=":material/delete:",
                on_click=self._delete,
                args=(id_,),
                width='stretch',
            )
