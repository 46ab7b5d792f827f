import pandas as pd
import plotly.graph_objects as go

from salary_tracker.app.naming_conventions import NAME, VALUE, TOTAL, CURRENCY

COLORS = ['#0088FE', '#00C49F', '#FFBB28', '#FF8042', '#8884d8', '#82ca9d', '#ffc658', '#d0ed57', '#a4de6c']


def pie_plot_by_category(data: pd.DataFrame) -> go.Figure:
    """
    Plot the share of each category in the expenses

    Parameters
    ----------
    data : pd.DataFrame
        The category totals, with ``name`` and ``value`` columns, as returned by ``aggregate_by_category``

    Returns
    -------
    go.Figure
        A pie chart with one slice per category
    """
    fig = go.Figure(
        go.Pie(
            labels=data[NAME],
            values=data[VALUE],
            marker=dict(colors=[COLORS[i % len(COLORS)] for i in range(len(data))]),
            textinfo='percent',
            hovertemplate=f'%{{label}}: %{{value:,.2f}} {CURRENCY}<extra></extra>',
            sort=False,
        )
    )
    fig.update_layout(title_text='Expenses by Category', legend_title_text='Category')
    return fig


def bar_plot_by_month(data: pd.DataFrame) -> go.Figure:
    """
    Plot the monthly expense totals as bars, in the order of the given data

    Parameters
    ----------
    data : pd.DataFrame
        The month totals, with ``name`` and ``total`` columns, as returned by ``aggregate_by_month``

    Returns
    -------
    go.Figure
        A bar chart with one bar per month
    """
    fig = go.Figure(
        go.Bar(
            x=data[NAME],
            y=data[TOTAL],
            marker_color='#8884d8',
            text=data[TOTAL].round(2),
            textposition='auto',
            hovertemplate=f'%{{x}}: %{{y:,.2f}} {CURRENCY}<extra></extra>',
        )
    )
    fig.update_layout(
        title='Monthly Expense Trend',
        xaxis_title='Month',
        yaxis_title=f'Expenses [{CURRENCY}]',
        xaxis_type='category',
    )
    return fig
