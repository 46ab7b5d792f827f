from salary_tracker.app.services.expenses_service import aggregate_by_category, aggregate_by_month
from salary_tracker.app.utils.plotting import pie_plot_by_category, bar_plot_by_month


def test_pie_plot_by_category(sample_expenses):
    fig = pie_plot_by_category(aggregate_by_category(sample_expenses))
    assert list(fig.data[0].labels) == ['Food', 'Transport']
    assert list(fig.data[0].values) == [80.0, 20.0]


def test_bar_plot_by_month(sample_expenses):
    fig = bar_plot_by_month(aggregate_by_month(sample_expenses))
    assert list(fig.data[0].x) == ['Jan', 'Feb']
    assert list(fig.data[0].y) == [70.0, 30.0]
    assert fig.layout.title.text == 'Monthly Expense Trend'
