import streamlit as st

from salary_tracker.app.components.add_expense import show_add_expense_dialog
from salary_tracker.app.components.select import SelectOption, render_select
from salary_tracker.app.components.summary_cards import render_summary_cards
from salary_tracker.app.naming_conventions import ExpensesTableFields, ALL, DATE_FORMAT
from salary_tracker.app.services.expenses_service import (
    FilterSpec,
    filter_expenses,
    available_months,
    month_long_label,
    aggregate_by_category,
    aggregate_by_month,
    sort_newest_first,
)
from salary_tracker.app.services.record_store import RecordStore
from salary_tracker.app.utils.formatting import format_currency
from salary_tracker.app.utils.plotting import pie_plot_by_category, bar_plot_by_month

FILTERS_KEY = 'expense_filters'
ERROR_KEY = 'expense_dashboard_error'
MONTH_FILTER_KEY = 'month_filter'
CATEGORY_FILTER_KEY = 'category_filter'
DATE_FROM_FILTER_KEY = 'date_from_filter'
DATE_TO_FILTER_KEY = 'date_to_filter'


def clear_filters() -> None:
    st.session_state[FILTERS_KEY] = FilterSpec()
    for key in [MONTH_FILTER_KEY, CATEGORY_FILTER_KEY, DATE_FROM_FILTER_KEY, DATE_TO_FILTER_KEY]:
        st.session_state.pop(key, None)


class ExpenseDashboardUI:
    id_col = ExpensesTableFields.ID.value
    desc_col = ExpensesTableFields.DESCRIPTION.value
    amount_col = ExpensesTableFields.AMOUNT.value
    category_col = ExpensesTableFields.CATEGORY.value
    date_col = ExpensesTableFields.DATE.value

    def __init__(self, store: RecordStore):
        self.store = store
        if FILTERS_KEY not in st.session_state:
            st.session_state[FILTERS_KEY] = FilterSpec()

    @property
    def filters(self) -> FilterSpec:
        return st.session_state[FILTERS_KEY]

    def render(self) -> None:
        render_summary_cards(self.store.salary, self.store.total_expenses)
        self.filters_bar()
        filtered = filter_expenses(self.store.expenses, self.filters)
        self.charts(filtered)
        self.expense_history(filtered)

    def filters_bar(self) -> None:
        """
        Render the month, category and date range filters. The selected values are kept in the session state as a
        single FilterSpec which is rebuilt from the widgets on every rerun.
        """
        filters = self.filters
        month_col, category_col, from_col, to_col, clear_col = st.columns([3, 3, 2, 2, 2],
                                                                          vertical_alignment="bottom")

        month_options = [SelectOption(ALL, "All Months")] + [
            SelectOption(month, month_long_label(month)) for month in available_months(self.store.expenses)
        ]
        category_options = [SelectOption(ALL, "All Categories")] + [
            SelectOption(category, category) for category in self.store.categories
        ]
        with month_col:
            month = render_select("Month", month_options, filters.month, key=MONTH_FILTER_KEY)
        with category_col:
            category = render_select("Category", category_options, filters.category, key=CATEGORY_FILTER_KEY)
        date_from = from_col.date_input("From", value=None, key=DATE_FROM_FILTER_KEY)
        date_to = to_col.date_input("To", value=None, key=DATE_TO_FILTER_KEY)

        filters = FilterSpec(
            month=month or ALL,
            category=category or ALL,
            date_from=date_from.strftime(DATE_FORMAT) if date_from else None,
            date_to=date_to.strftime(DATE_FORMAT) if date_to else None,
        )
        st.session_state[FILTERS_KEY] = filters
        clear_col.button(
            "Clear Filters",
            key="clear_filters_button",
            on_click=clear_filters,
            disabled=not filters.has_active_filters,
            width='stretch',
        )

    @staticmethod
    def charts(filtered) -> None:
        if filtered.empty:
            return
        pie_col, bar_col = st.columns(2)
        pie_col.plotly_chart(pie_plot_by_category(aggregate_by_category(filtered)), width='stretch')
        bar_col.plotly_chart(bar_plot_by_month(aggregate_by_month(filtered)), width='stretch')

    def _delete_expense(self, id_: str) -> None:
        if not self.store.delete_expense(id_):
            st.session_state[ERROR_KEY] = "Failed to delete the expense, please try again."

    def expense_history(self, filtered) -> None:
        title_col, add_col = st.columns([8, 2], vertical_alignment="bottom")
        title_col.subheader("Expense History")
        if add_col.button("Add Expense", key="add_expense_button", type="primary", width='stretch'):
            show_add_expense_dialog(self.store)

        error = st.session_state.pop(ERROR_KEY, None)
        if error:
            st.error(error)

        if self.store.expenses.empty:
            st.info("No expenses yet! Add your first expense to start tracking.")
            return
        if filtered.empty:
            st.info("No expenses match the selected filters.")
            return

        for _, expense in sort_newest_first(filtered).iterrows():
            desc_col, category_col, date_col, amount_col, delete_col = st.columns([4, 2, 2, 2, 1],
                                                                                  vertical_alignment="center")
            desc_col.write(expense[self.desc_col])
            category_col.caption(expense[self.category_col])
            date_col.caption(expense[self.date_col])
            amount_col.write(f"**{format_currency(expense[self.amount_col])}**")
            delete_col.button(
                "Delete",
                key=f"delete_expense_{expense[self.id_col]}",
                icon=":material/delete:",
                on_click=self._delete_expense,
                args=(expense[self.id_col],),
                width='stretch',
            )
