"""
Thin adapter over the remote table store. The store is any SQLAlchemy database (a hosted Postgres in production,
a SQLite file locally) holding one table per record type, every row scoped to its owner.

The client is constructed explicitly and handed to whoever needs it; ``start`` makes sure the tables exist and
``close`` releases the connection pool.
"""
import logging
import os
from contextlib import contextmanager
from typing import Any, Iterator

import pandas as pd
import sqlalchemy as sa
from sqlalchemy.orm import Session

from salary_tracker.app.naming_conventions import (
    Tables,
    ExpensesTableFields,
    FixedExpensesTableFields,
    ProfilesTableFields,
    CategoriesTableFields,
    UsersTableFields,
    ID,
    OWNER,
    DEFAULT_SALARY,
)

logger = logging.getLogger(__name__)

metadata = sa.MetaData()

sa.Table(
    Tables.PROFILES.value, metadata,
    sa.Column(ProfilesTableFields.ID.value, sa.String, primary_key=True),
    sa.Column(ProfilesTableFields.SALARY.value, sa.Float, nullable=False, default=DEFAULT_SALARY),
)
sa.Table(
    Tables.EXPENSES.value, metadata,
    sa.Column(ExpensesTableFields.ID.value, sa.Integer, primary_key=True, autoincrement=True),
    sa.Column(ExpensesTableFields.DESCRIPTION.value, sa.Text, nullable=False),
    sa.Column(ExpensesTableFields.AMOUNT.value, sa.Float, nullable=False),
    sa.Column(ExpensesTableFields.CATEGORY.value, sa.Text, nullable=False),
    sa.Column(ExpensesTableFields.DATE.value, sa.String(10), nullable=False),
    sa.Column(OWNER, sa.String, nullable=False, index=True),
)
sa.Table(
    Tables.CATEGORIES.value, metadata,
    sa.Column(CategoriesTableFields.ID.value, sa.Integer, primary_key=True, autoincrement=True),
    sa.Column(CategoriesTableFields.NAME.value, sa.Text, nullable=False),
    sa.Column(OWNER, sa.String, nullable=False, index=True),
)
sa.Table(
    Tables.FIXED_EXPENSES.value, metadata,
    sa.Column(FixedExpensesTableFields.ID.value, sa.Integer, primary_key=True, autoincrement=True),
    sa.Column(FixedExpensesTableFields.TASK.value, sa.Text, nullable=False),
    sa.Column(FixedExpensesTableFields.AMOUNT.value, sa.Float, nullable=False),
    sa.Column(FixedExpensesTableFields.IS_COMPLETED.value, sa.Boolean, nullable=False, default=False),
    sa.Column(OWNER, sa.String, nullable=False, index=True),
)
sa.Table(
    Tables.USERS.value, metadata,
    sa.Column(UsersTableFields.ID.value, sa.Integer, primary_key=True, autoincrement=True),
    sa.Column(UsersTableFields.EMAIL.value, sa.String, nullable=False, unique=True),
    sa.Column(UsersTableFields.PASSWORD.value, sa.String, nullable=False),
)

# the profiles table is keyed by the owner itself
OWNER_COLUMNS = {
    Tables.PROFILES.value: ProfilesTableFields.ID.value,
    Tables.EXPENSES.value: OWNER,
    Tables.CATEGORIES.value: OWNER,
    Tables.FIXED_EXPENSES.value: OWNER,
}


class DataServiceError(Exception):
    """Raised when a read or write against the remote tables fails"""
    def __init__(self, message="Data service request failed"):
        self.message = message
        super().__init__(self.message)


class DataServiceClient:
    def __init__(self, engine: sa.Engine):
        """
        Initializes the client with an engine. Nothing is created in the database until ``start`` is called.

        Parameters
        ----------
        engine : sa.Engine
            The engine connected to the remote database.
        """
        self.engine = engine
        self.started = False

    @classmethod
    def from_url(cls, url: str) -> 'DataServiceClient':
        """
        Build a client from a SQLAlchemy database URL. For local SQLite files the parent directory is created.

        Parameters
        ----------
        url : str
            The database URL, e.g. ``sqlite:///path/to/data.db`` or ``postgresql+psycopg2://...``

        Returns
        -------
        DataServiceClient
            A client that still has to be started.
        """
        if url.startswith('sqlite:///') and url != 'sqlite:///:memory:':
            db_dir = os.path.dirname(url.removeprefix('sqlite:///'))
            if db_dir:
                os.makedirs(db_dir, exist_ok=True)
        return cls(sa.create_engine(url))

    def start(self) -> 'DataServiceClient':
        """Create the tables if they don't exist"""
        try:
            metadata.create_all(self.engine)
        except sa.exc.SQLAlchemyError as e:
            raise DataServiceError(str(e)) from e
        self.started = True
        logger.info("Data service started on %s", self.engine.url.render_as_string(hide_password=True))
        return self

    def close(self) -> None:
        """Release all pooled connections"""
        self.engine.dispose()
        self.started = False
        logger.info("Data service closed")

    def __enter__(self) -> 'DataServiceClient':
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with Session(self.engine) as s:
                yield s
        except sa.exc.SQLAlchemyError as e:
            raise DataServiceError(str(e)) from e

    @staticmethod
    def _table(name: str) -> sa.Table:
        try:
            return metadata.tables[name]
        except KeyError:
            raise ValueError(f'Invalid table name: {name}') from None

    @staticmethod
    def _coerce_id(table: sa.Table, id_: Any) -> Any:
        # ids travel through the app as opaque strings
        if isinstance(table.c[ID].type, sa.Integer):
            return int(id_)
        return str(id_)

    def insert(self, table_name: str, row: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a row and return it as stored, including the generated id.

        Parameters
        ----------
        table_name : str
            The name of the table to insert into.
        row : dict
            Column values of the new row.

        Returns
        -------
        dict
            The created row.
        """
        table = self._table(table_name)
        with self._session() as s:
            created = s.execute(sa.insert(table).values(**row).returning(*table.c)).mappings().one()
            created = dict(created)
            s.commit()
        logger.debug("Inserted row %s into %s", created.get(ID), table_name)
        return created

    def update_by_id(self, table_name: str, id_: Any, fields: dict[str, Any], owner: str | None = None) -> int:
        """
        Update a single row by its id, optionally restricted to rows of the given owner.

        Returns
        -------
        int
            The number of rows updated.
        """
        table = self._table(table_name)
        stmt = sa.update(table).where(table.c[ID] == self._coerce_id(table, id_)).values(**fields)
        if owner is not None:
            stmt = stmt.where(table.c[OWNER_COLUMNS[table_name]] == owner)
        with self._session() as s:
            rowcount = s.execute(stmt).rowcount
            s.commit()
        return rowcount

    def delete_by_id(self, table_name: str, id_: Any, owner: str | None = None) -> int:
        """
        Delete a single row by its id, optionally restricted to rows of the given owner. Deleting an id that no
        longer exists is not an error, it simply affects no rows.

        Returns
        -------
        int
            The number of rows deleted.
        """
        table = self._table(table_name)
        stmt = sa.delete(table).where(table.c[ID] == self._coerce_id(table, id_))
        if owner is not None:
            stmt = stmt.where(table.c[OWNER_COLUMNS[table_name]] == owner)
        with self._session() as s:
            rowcount = s.execute(stmt).rowcount
            s.commit()
        return rowcount

    def select_where(self, table_name: str, **equals: Any) -> pd.DataFrame:
        """
        Get the rows of a table whose columns equal the given values, ordered by id.

        Returns
        -------
        pd.DataFrame
            The matching rows, with all table columns even when empty.
        """
        table = self._table(table_name)
        stmt = sa.select(table)
        for column, value in equals.items():
            stmt = stmt.where(table.c[column] == value)
        stmt = stmt.order_by(table.c[ID])
        with self._session() as s:
            return pd.read_sql(stmt, s.connection())

    def select_by_owner(self, table_name: str, owner: str) -> pd.DataFrame:
        """Get all rows of a table that belong to the owner"""
        return self.select_where(table_name, **{OWNER_COLUMNS[table_name]: owner})

