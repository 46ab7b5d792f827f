import itertools
import logging
import threading
import uuid
from typing import Any, Callable, Hashable

import pandas as pd

from salary_tracker.app.data_access.data_service import DataServiceClient, DataServiceError
from salary_tracker.app.data_access.expenses_repository import ExpensesRepository, FixedExpensesRepository
from salary_tracker.app.data_access.profile_repository import ProfileRepository
from salary_tracker.app.data_access.categories_repository import CategoriesRepository
from salary_tracker.app.naming_conventions import Entities, DEFAULT_CATEGORIES, DEFAULT_SALARY
from salary_tracker.app.services.expenses_service import total_amount

logger = logging.getLogger(__name__)


class RequestTokens:
    """
    Hands out a token per mutation request, keyed by the entity the request touches. Only the result of the latest
    request for a key may be applied; issuing a newer request, cancelling the key or cancelling everything makes the
    older tokens stale.
    """
    def __init__(self):
        self._lock = threading.Lock()
        self._counter = itertools.count(1)
        self._latest: dict[Hashable, int] = {}
        self._generation = 0

    def issue(self, key: Hashable) -> tuple[int, int]:
        with self._lock:
            token = next(self._counter)
            self._latest[key] = token
            return self._generation, token

    def is_current(self, key: Hashable, token: tuple[int, int]) -> bool:
        generation, seq = token
        with self._lock:
            return generation == self._generation and self._latest.get(key) == seq

    def release(self, key: Hashable, token: tuple[int, int]) -> None:
        with self._lock:
            if self._latest.get(key) == token[1]:
                del self._latest[key]

    def cancel(self, key: Hashable) -> None:
        with self._lock:
            self._latest[key] = next(self._counter)

    def cancel_all(self) -> None:
        with self._lock:
            self._generation += 1
            self._latest.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._latest)


class RecordStore:
    def __init__(self, client: DataServiceClient, owner: str):
        """
        The in memory copy of one user's records. Every mutation writes to the data service first and changes the
        in memory records only once the write succeeded.

        Parameters
        ----------
        client : DataServiceClient
            The started data service client.
        owner : str
            The id of the signed in user. All reads and writes are scoped to it.
        """
        self.owner = owner
        self.expenses_repo = ExpensesRepository(client)
        self.fixed_expenses_repo = FixedExpensesRepository(client)
        self.profile_repo = ProfileRepository(client)
        self.categories_repo = CategoriesRepository(client)
        self.tokens = RequestTokens()

        self.expenses: pd.DataFrame = self.expenses_repo.empty_table()
        self.fixed_expenses: pd.DataFrame = self.fixed_expenses_repo.empty_table()
        self.salary: float = DEFAULT_SALARY
        self.categories: list[str] = list(DEFAULT_CATEGORIES)
        self.loaded = False

    @property
    def total_expenses(self) -> float:
        return total_amount(self.expenses, self.expenses_repo.amount_col)

    def load(self) -> bool:
        """
        Fetch all records of the owner. A user without a profile gets one with the default salary.

        Returns
        -------
        bool
            True if everything was fetched, False if the data service failed (the store is left unchanged).
        """
        try:
            expenses = self.expenses_repo.get_table(self.owner)
            fixed_expenses = self.fixed_expenses_repo.get_table(self.owner)
            salary = self.profile_repo.get_or_create_salary(self.owner)
            user_categories = self.categories_repo.get_categories(self.owner)
        except DataServiceError:
            logger.error("Failed to load records of user %s", self.owner, exc_info=True)
            return False

        self.expenses = expenses
        self.fixed_expenses = fixed_expenses
        self.salary = salary
        self.categories = list(DEFAULT_CATEGORIES)
        for category in user_categories:
            if category not in self.categories:
                self.categories.append(category)
        self.loaded = True
        logger.info("Loaded %d expenses and %d fixed expenses of user %s",
                    len(self.expenses), len(self.fixed_expenses), self.owner)
        return True

    def _mutate(self, key: Hashable, action: str, remote_call: Callable[[], Any],
                apply: Callable[[Any], None]) -> bool:
        token = self.tokens.issue(key)
        try:
            try:
                result = remote_call()
            except DataServiceError:
                logger.error("Failed to %s for user %s", action, self.owner, exc_info=True)
                return False

            if not self.tokens.is_current(key, token):
                logger.info("Dropped the result of a superseded request to %s", action)
                return False
            apply(result)
            logger.debug("Applied request to %s", action)
            return True
        finally:
            self.tokens.release(key, token)

    @staticmethod
    def _append(table: pd.DataFrame, row: pd.DataFrame) -> pd.DataFrame:
        if table.empty:
            return row
        return pd.concat([table, row], ignore_index=True)

    def cancel(self, entity: Entities, id_: str) -> None:
        """Drop the result of any in flight request for the entity"""
        self.tokens.cancel((entity.value, id_))

    def cancel_all(self) -> None:
        self.tokens.cancel_all()

    def add_expense(self, description: str, amount: float, category: str, date: str) -> bool:
        def apply(created: pd.DataFrame) -> None:
            self.expenses = self._append(self.expenses, created)

        return self._mutate(
            (Entities.EXPENSE.value, uuid.uuid4().hex),
            "add an expense",
            lambda: self.expenses_repo.add_expense(self.owner, description, amount, category, date),
            apply,
        )

    def delete_expense(self, id_: str) -> bool:
        def apply(_) -> None:
            self.expenses = self.expenses.loc[self.expenses[self.expenses_repo.id_col] != id_].reset_index(drop=True)

        return self._mutate(
            (Entities.EXPENSE.value, id_),
            f"delete expense {id_}",
            lambda: self.expenses_repo.delete(self.owner, id_),
            apply,
        )

    def add_fixed_expense(self, task: str, amount: float) -> bool:
        def apply(created: pd.DataFrame) -> None:
            self.fixed_expenses = self._append(self.fixed_expenses, created)

        return self._mutate(
            (Entities.FIXED_EXPENSE.value, uuid.uuid4().hex),
            "add a fixed expense",
            lambda: self.fixed_expenses_repo.add_fixed_expense(self.owner, task, amount),
            apply,
        )

    def toggle_fixed_expense(self, id_: str) -> bool:
        """Flip the completion flag of a fixed expense"""
        id_col = self.fixed_expenses_repo.id_col
        is_completed_col = self.fixed_expenses_repo.is_completed_col
        current = self.fixed_expenses.loc[self.fixed_expenses[id_col] == id_, is_completed_col]
        if current.empty:
            logger.warning("Fixed expense %s is not loaded, nothing to toggle", id_)
            return False
        new_value = not bool(current.iloc[0])

        def apply(_) -> None:
            fixed_expenses = self.fixed_expenses.copy()
            fixed_expenses.loc[fixed_expenses[id_col] == id_, is_completed_col] = new_value
            self.fixed_expenses = fixed_expenses

        return self._mutate(
            (Entities.FIXED_EXPENSE.value, id_),
            f"toggle fixed expense {id_}",
            lambda: self.fixed_expenses_repo.set_completed(self.owner, id_, new_value),
            apply,
        )

    def delete_fixed_expense(self, id_: str) -> bool:
        id_col = self.fixed_expenses_repo.id_col

        def apply(_) -> None:
            self.fixed_expenses = self.fixed_expenses.loc[self.fixed_expenses[id_col] != id_].reset_index(drop=True)

        return self._mutate(
            (Entities.FIXED_EXPENSE.value, id_),
            f"delete fixed expense {id_}",
            lambda: self.fixed_expenses_repo.delete(self.owner, id_),
            apply,
        )

    def update_salary(self, salary: float) -> bool:
        def apply(_) -> None:
            self.salary = salary

        return self._mutate(
            (Entities.SALARY.value, self.owner),
            "update the salary",
            lambda: self.profile_repo.update_salary(self.owner, salary),
            apply,
        )

    def add_category(self, name: str) -> bool:
        """
        Add a category to the set. Names are compared exactly, a name already in the set is skipped without
        contacting the data service.
        """
        if name in self.categories:
            logger.debug("Category %s already exists, skipping", name)
            return False

        def apply(created_name: str) -> None:
            if created_name not in self.categories:
                self.categories.append(created_name)

        return self._mutate(
            (Entities.CATEGORY.value, name),
            f"add category {name}",
            lambda: self.categories_repo.add_category(self.owner, name),
            apply,
        )
