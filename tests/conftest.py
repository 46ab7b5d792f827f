from typing import Callable

import pandas as pd
import pytest

from salary_tracker.app.data_access.data_service import DataServiceClient
from salary_tracker.app.naming_conventions import ExpensesTableFields, DEFAULT_CATEGORIES


@pytest.fixture(scope='function')
def data_client(tmp_path):
    """return a started data service client backed by a fresh sqlite file"""
    client = DataServiceClient.from_url(f"sqlite:///{tmp_path / 'data' / 'test.db'}").start()
    yield client
    client.close()


@pytest.fixture(scope='function')
def owner(faker) -> str:
    """return an opaque user id"""
    return faker.uuid4()


@pytest.fixture(scope='function')
def sample_expenses() -> pd.DataFrame:
    """two months of expenses in two categories, not sorted by date"""
    return pd.DataFrame({
        ExpensesTableFields.ID.value: ['1', '2', '3'],
        ExpensesTableFields.DESCRIPTION.value: ['Groceries', 'Restaurant', 'Bus pass'],
        ExpensesTableFields.AMOUNT.value: [50.0, 30.0, 20.0],
        ExpensesTableFields.CATEGORY.value: ['Food', 'Food', 'Transport'],
        ExpensesTableFields.DATE.value: ['2024-01-05', '2024-02-01', '2024-01-10'],
        ExpensesTableFields.OWNER.value: ['u1', 'u1', 'u1'],
    })


@pytest.fixture(scope='function')
def fake_expenses_maker(faker) -> Callable:
    """
    return a function that creates random expenses for property style tests
    """
    def example_data(length: int = 20) -> pd.DataFrame:
        return pd.DataFrame({
            ExpensesTableFields.ID.value: [str(i) for i in range(length)],
            ExpensesTableFields.DESCRIPTION.value: [faker.word() for _ in range(length)],
            ExpensesTableFields.AMOUNT.value: [float(faker.pydecimal(left_digits=4, right_digits=2, positive=True))
                                               for _ in range(length)],
            ExpensesTableFields.CATEGORY.value: [faker.random_element(DEFAULT_CATEGORIES) for _ in range(length)],
            ExpensesTableFields.DATE.value: [faker.date_between(start_date='-2y').isoformat() for _ in range(length)],
            ExpensesTableFields.OWNER.value: ['u1'] * length,
        })
    return example_data
