import json

from streamlit.testing.v1 import AppTest


def test_summary_cards_show_overspend():
    def app():
        from salary_tracker.app.components.summary_cards import render_summary_cards
        render_summary_cards(1000, 1200)

    at = AppTest.from_function(app)
    at.run()
    assert not at.exception
    assert [metric.value for metric in at.metric] == ['1,000.00 MAD', '1,200.00 MAD', '-200.00 MAD']
    assert at.metric[2].delta == 'Over budget'


def test_expense_dashboard_filters():
    def app():
        from types import SimpleNamespace

        import pandas as pd

        from salary_tracker.app.components.expense_dashboard import ExpenseDashboardUI

        expenses = pd.DataFrame({
            'id': ['1', '2', '3'],
            'description': ['Groceries', 'Restaurant', 'Bus pass'],
            'amount': [50.0, 30.0, 20.0],
            'category': ['Food', 'Food', 'Transport'],
            'date': ['2024-01-05', '2024-02-01', '2024-01-10'],
            'user_id': ['u1', 'u1', 'u1'],
        })
        store = SimpleNamespace(salary=1000.0, total_expenses=float(expenses['amount'].sum()), expenses=expenses,
                                categories=['Food', 'Transport'], delete_expense=lambda id_: True)
        ExpenseDashboardUI(store).render()

    def delete_buttons(at):
        return [button for button in at.button if button.key and button.key.startswith('delete_expense_')]

    def chart_data(at):
        traces = [json.loads(chart.proto.spec)['data'][0] for chart in at.get('plotly_chart')]
        return {trace['type']: trace for trace in traces}

    at = AppTest.from_function(app)
    at.run()
    assert not at.exception
    assert len(delete_buttons(at)) == 3
    assert at.metric[1].value == '100.00 MAD'
    charts = chart_data(at)
    assert charts['pie']['labels'] == ['Food', 'Transport']
    assert charts['bar']['x'] == ['Jan', 'Feb']
    assert at.button(key='clear_filters_button').disabled

    at.selectbox(key='month_filter').select_index(1).run()
    assert at.session_state['expense_filters'].month == '2024-02'
    assert [button.key for button in delete_buttons(at)] == ['delete_expense_2']
    assert at.metric[1].value == '100.00 MAD'
    charts = chart_data(at)
    assert charts['pie']['labels'] == ['Food']
    assert charts['bar']['x'] == ['Feb']
    assert not at.button(key='clear_filters_button').disabled

    at.button(key='clear_filters_button').click().run()
    assert not at.session_state['expense_filters'].has_active_filters
    assert len(delete_buttons(at)) == 3


def test_expense_dashboard_empty_state():
    def app():
        from types import SimpleNamespace

        import pandas as pd

        from salary_tracker.app.components.expense_dashboard import ExpenseDashboardUI

        expenses = pd.DataFrame(columns=['id', 'description', 'amount', 'category', 'date', 'user_id'])
        store = SimpleNamespace(salary=7000.0, total_expenses=0.0, expenses=expenses,
                                categories=['Food'], delete_expense=lambda id_: True)
        ExpenseDashboardUI(store).render()

    at = AppTest.from_function(app)
    at.run()
    assert not at.exception
    assert at.info[0].value.startswith("No expenses yet!")


def test_auth_form_shows_errors():
    def app():
        from unittest.mock import MagicMock

        from salary_tracker.app.components.auth_form import render_auth_form
        from salary_tracker.app.services.auth_service import AuthError

        auth = MagicMock()
        auth.sign_in.side_effect = AuthError("Invalid login credentials")
        render_auth_form(auth)

    at = AppTest.from_function(app)
    at.run()
    at.text_input(key='auth_email').input('someone@example.com')
    at.text_input(key='auth_password').input('secret-password')
    next(button for button in at.button if button.label == 'Sign In').click().run()
    assert not at.exception
    assert at.error[0].value == "Invalid login credentials"


def test_header_skips_duplicate_category():
    def app():
        from unittest.mock import MagicMock

        import streamlit as st

        from salary_tracker.app.components.header import Header

        if 'store' not in st.session_state:
            store = MagicMock()
            store.salary = 7000.0
            store.categories = ['Food', 'Transport']
            st.session_state['store'] = store
        auth = MagicMock()
        auth.get_user.return_value = None
        Header(st.session_state['store'], auth).render()

    at = AppTest.from_function(app)
    at.run()
    at.text_input(key='new_category_input').input('Food')
    next(button for button in at.button if button.label == 'Add').click().run()
    assert not at.exception
    assert at.info[0].value == "Category 'Food' already exists."
    at.session_state['store'].add_category.assert_not_called()
