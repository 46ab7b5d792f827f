import pandas as pd

from salary_tracker.app.data_access.data_service import DataServiceClient
from salary_tracker.app.naming_conventions import Tables, ExpensesTableFields, FixedExpensesTableFields


class RecordsRepository:
    """
    Base class for repositories of owner scoped records. Subclasses set the table, the columns and the column dtypes
    of the records table.
    """
    table: str
    id_col: str
    owner_col: str
    columns: list[str]
    dtypes: dict[str, str]

    def __init__(self, client: DataServiceClient):
        """
        Initializes the repository with a data service client.

        Parameters
        ----------
        client : DataServiceClient
            The started client to use for all remote reads and writes.
        """
        self.client = client

    def get_table(self, owner: str) -> pd.DataFrame:
        """
        Get all the records of the owner as a DataFrame, with the ids as strings.
        """
        table = self.client.select_by_owner(self.table, owner)
        return self.normalize(table)

    def normalize(self, table: pd.DataFrame) -> pd.DataFrame:
        """
        Cast a raw table (or a single created row) to the columns and dtypes the app works with.
        """
        table = table.reindex(columns=self.columns)
        table[self.id_col] = table[self.id_col].astype(str)
        return table.astype(self.dtypes).reset_index(drop=True)

    def empty_table(self) -> pd.DataFrame:
        return self.normalize(pd.DataFrame(columns=self.columns))

    def add(self, owner: str, **fields) -> pd.DataFrame:
        """
        Insert a new record and return it as a single row DataFrame.
        """
        created = self.client.insert(self.table, {**fields, self.owner_col: owner})
        return self.normalize(pd.DataFrame([created]))

    def delete(self, owner: str, id_: str) -> int:
        return self.client.delete_by_id(self.table, id_, owner)


class ExpensesRepository(RecordsRepository):
    table = Tables.EXPENSES.value
    id_col = ExpensesTableFields.ID.value
    desc_col = ExpensesTableFields.DESCRIPTION.value
    amount_col = ExpensesTableFields.AMOUNT.value
    category_col = ExpensesTableFields.CATEGORY.value
    date_col = ExpensesTableFields.DATE.value
    owner_col = ExpensesTableFields.OWNER.value
    columns = [id_col, desc_col, amount_col, category_col, date_col, owner_col]
    dtypes = {
        id_col: 'object',
        desc_col: 'object',
        amount_col: 'float64',
        category_col: 'object',
        date_col: 'object',
        owner_col: 'object',
    }

    def add_expense(self, owner: str, description: str, amount: float, category: str, date: str) -> pd.DataFrame:
        """
        Insert a new expense.

        Parameters
        ----------
        owner : str
            The id of the user the expense belongs to.
        description : str
            Free text description of the expense.
        amount : float
            The positive amount spent.
        category : str
            The category name.
        date : str
            The date of the expense, formatted as YYYY-MM-DD.

        Returns
        -------
        pd.DataFrame
            The created expense as a single row.
        """
        return self.add(
            owner,
            **{
                self.desc_col: description,
                self.amount_col: amount,
                self.category_col: category,
                self.date_col: date,
            }
        )


class FixedExpensesRepository(RecordsRepository):
    table = Tables.FIXED_EXPENSES.value
    id_col = FixedExpensesTableFields.ID.value
    task_col = FixedExpensesTableFields.TASK.value
    amount_col = FixedExpensesTableFields.AMOUNT.value
    is_completed_col = FixedExpensesTableFields.IS_COMPLETED.value
    owner_col = FixedExpensesTableFields.OWNER.value
    columns = [id_col, task_col, amount_col, is_completed_col, owner_col]
    dtypes = {
        id_col: 'object',
        task_col: 'object',
        amount_col: 'float64',
        is_completed_col: 'bool',
        owner_col: 'object',
    }

    def add_fixed_expense(self, owner: str, task: str, amount: float) -> pd.DataFrame:
        """Insert a new, not yet completed, fixed expense"""
        return self.add(owner, **{self.task_col: task, self.amount_col: amount, self.is_completed_col: False})

    def set_completed(self, owner: str, id_: str, is_completed: bool) -> int:
        return self.client.update_by_id(self.table, id_, {self.is_completed_col: is_completed}, owner)
