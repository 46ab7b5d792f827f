from enum import Enum
from typing import Type

ID = 'id'
NAME = 'name'
VALUE = 'value'
TOTAL = 'total'
OWNER = 'user_id'
ALL = 'all'

DEFAULT_SALARY = 7000.0
CURRENCY = 'MAD'
DATE_FORMAT = '%Y-%m-%d'

DEFAULT_CATEGORIES = [
    'Food',
    'Transport',
    'Utilities',
    'Housing',
    'Entertainment',
    'Health',
    'Shopping',
    'Education',
    'Other',
]


class Tables(Enum):
    PROFILES = 'profiles'
    EXPENSES = 'expenses'
    CATEGORIES = 'categories'
    FIXED_EXPENSES = 'fixed_expenses'
    USERS = 'users'


def create_enum(name: str, fields: list[tuple[str, str]]) -> Type[Enum]:
    return Enum(name, fields)


ExpensesTableFields = create_enum('ExpensesTableFields', [
    ('ID', 'id'),
    ('DESCRIPTION', 'description'),
    ('AMOUNT', 'amount'),
    ('CATEGORY', 'category'),
    ('DATE', 'date'),
    ('OWNER', OWNER),
])

FixedExpensesTableFields = create_enum('FixedExpensesTableFields', [
    ('ID', 'id'),
    ('TASK', 'task'),
    ('AMOUNT', 'amount'),
    ('IS_COMPLETED', 'is_completed'),
    ('OWNER', OWNER),
])


class ProfilesTableFields(Enum):
    ID = 'id'
    SALARY = 'salary'


class CategoriesTableFields(Enum):
    ID = 'id'
    NAME = 'name'
    OWNER = OWNER


class UsersTableFields(Enum):
    ID = 'id'
    EMAIL = 'email'
    PASSWORD = 'password'


class Pages(Enum):
    DASHBOARD = 'Dashboard'
    FIXED_EXPENSES = 'Fixed Expenses'


class Entities(Enum):
    """Keys under which mutation request tokens are issued"""
    EXPENSE = 'expense'
    FIXED_EXPENSE = 'fixed_expense'
    SALARY = 'salary'
    CATEGORY = 'category'
