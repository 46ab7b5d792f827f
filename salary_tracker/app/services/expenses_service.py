"""
Client side analysis of the expense records: filtering by month, category and date range, the two chart
aggregations and the salary summary. Everything here is pure and recomputed in full on every rerun.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timezone

import pandas as pd

from salary_tracker.app.naming_conventions import (
    ExpensesTableFields,
    FixedExpensesTableFields,
    ALL,
    NAME,
    VALUE,
    TOTAL,
    DATE_FORMAT,
)

amount_col = ExpensesTableFields.AMOUNT.value
category_col = ExpensesTableFields.CATEGORY.value
date_col = ExpensesTableFields.DATE.value
fixed_amount_col = FixedExpensesTableFields.AMOUNT.value
is_completed_col = FixedExpensesTableFields.IS_COMPLETED.value


@dataclass(frozen=True)
class FilterSpec:
    month: str = ALL
    category: str = ALL
    date_from: str | None = None
    date_to: str | None = None

    @property
    def has_active_filters(self) -> bool:
        return self.month != ALL or self.category != ALL or bool(self.date_from) or bool(self.date_to)


@dataclass(frozen=True)
class Summary:
    remaining: float
    percentage: float


def filter_expenses(expenses: pd.DataFrame, filters: FilterSpec) -> pd.DataFrame:
    """
    Keep the expenses that match every part of the filter. Dates are ISO strings, so plain string comparison is
    chronological comparison.

    Parameters
    ----------
    expenses : pd.DataFrame
        The expenses to filter
    filters : FilterSpec
        The month ("all" or YYYY-MM), the category ("all" or a name) and the optional inclusive date bounds

    Returns
    -------
    pd.DataFrame
        The matching expenses, in their original order
    """
    dates = expenses[date_col].astype(str)
    mask = pd.Series(True, index=expenses.index)
    if filters.month != ALL:
        mask &= dates.str.startswith(filters.month)
    if filters.category != ALL:
        mask &= expenses[category_col] == filters.category
    if filters.date_from:
        mask &= dates >= filters.date_from
    if filters.date_to:
        mask &= dates <= filters.date_to
    return expenses.loc[mask]


def available_months(expenses: pd.DataFrame) -> list[str]:
    """The distinct YYYY-MM keys of the expenses, newest first"""
    return sorted(set(expenses[date_col].astype(str).str[:7]), reverse=True)


def _month_key_to_datetime(month: str) -> datetime:
    # midday UTC so converting to a display label never shifts the day into another month
    year, month_ = month.split('-')
    return datetime(int(year), int(month_), 1, 12, tzinfo=timezone.utc)


def month_short_label(month: str) -> str:
    return _month_key_to_datetime(month).strftime('%b')


def month_long_label(month: str) -> str:
    return _month_key_to_datetime(month).strftime('%B %Y')


def aggregate_by_category(expenses: pd.DataFrame) -> pd.DataFrame:
    """
    Sum the expenses per category, largest total first. Categories with equal totals keep the order in which they
    first appear in the input.

    Returns
    -------
    pd.DataFrame
        Columns ``name`` and ``value``
    """
    if expenses.empty:
        return pd.DataFrame({NAME: pd.Series(dtype='object'), VALUE: pd.Series(dtype='float64')})
    totals = expenses.groupby(category_col, sort=False)[amount_col].sum()
    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return pd.DataFrame(ordered, columns=[NAME, VALUE])


def aggregate_by_month(expenses: pd.DataFrame) -> pd.DataFrame:
    """
    Sum the expenses per calendar month, in chronological order, labeled with the abbreviated month name.

    Returns
    -------
    pd.DataFrame
        Columns ``name`` and ``total``. Empty if there are no expenses.
    """
    if expenses.empty:
        return pd.DataFrame({NAME: pd.Series(dtype='object'), TOTAL: pd.Series(dtype='float64')})
    ordered = expenses.sort_values(by=date_col, kind='stable')
    months = ordered[date_col].astype(str).str[:7]
    totals = ordered.groupby(months, sort=False)[amount_col].sum()
    return pd.DataFrame({
        NAME: [month_short_label(month) for month in totals.index],
        TOTAL: totals.values,
    })


def total_amount(records: pd.DataFrame, column: str = amount_col) -> float:
    return float(records[column].sum()) if not records.empty else 0.0


def summarize(salary: float, total_expenses: float) -> Summary:
    """
    Compute what is left of the salary and how much of it was spent. Both values are left unclamped so overspending
    shows up as a negative remainder and a percentage above 100.
    """
    remaining = salary - total_expenses
    percentage = total_expenses * 100 / salary if salary > 0 else 0.0
    return Summary(remaining=remaining, percentage=percentage)


def progress_ratio(percentage: float) -> float:
    """The percentage clamped to [0, 100], for progress bars only"""
    return min(max(percentage, 0.0), 100.0)


def fixed_expenses_totals(fixed_expenses: pd.DataFrame) -> dict[str, float]:
    """Total of all fixed expenses and of the completed (paid) ones"""
    if fixed_expenses.empty:
        return {'total': 0.0, 'paid': 0.0}
    paid = fixed_expenses.loc[fixed_expenses[is_completed_col].astype(bool)]
    return {
        'total': total_amount(fixed_expenses, fixed_amount_col),
        'paid': total_amount(paid, fixed_amount_col),
    }


def sort_newest_first(expenses: pd.DataFrame) -> pd.DataFrame:
    return expenses.sort_values(by=date_col, ascending=False, kind='stable')


def parse_amount(amount: float | int | str | None) -> float | None:
    """
    Convert a form amount to a float. Returns None for empty or non numeric input.
    """
    if amount is None or (isinstance(amount, str) and not amount.strip()):
        return None
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def validate_expense_inputs(description: str, amount, category: str | None, date: str | None) -> tuple[bool, str]:
    """
    Check the add expense form before anything is sent to the data service.

    Returns
    ------
    bool
        True if the inputs are valid, False otherwise
    str
        An error message if the inputs are invalid, empty string otherwise
    """
    if not description or amount is None or amount == '' or not category or not date:
        return False, "Please fill in all fields."
    value = parse_amount(amount)
    if value is None or value <= 0:
        return False, "Please enter a valid, positive amount."
    try:
        datetime.strptime(date, DATE_FORMAT)
    except ValueError:
        return False, "Please enter a valid date."
    return True, ""


def validate_fixed_expense_inputs(task: str, amount) -> tuple[bool, str]:
    if not task or not task.strip():
        return False, "Please enter a name for the fixed expense."
    value = parse_amount(amount)
    if value is None or value <= 0:
        return False, "Please enter a valid, positive amount."
    return True, ""


def validate_salary(salary) -> tuple[bool, str]:
    value = parse_amount(salary)
    if value is None or value < 0:
        return False, "Salary must be a number greater than or equal to zero."
    return True, ""


def validate_category_name(name: str | None) -> tuple[bool, str]:
    if not name or not name.strip():
        return False, "Please enter a category name."
    return True, ""
