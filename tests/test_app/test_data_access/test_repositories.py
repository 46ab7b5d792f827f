import pytest

from salary_tracker.app.data_access.data_service import DataServiceClient, DataServiceError
from salary_tracker.app.data_access.expenses_repository import ExpensesRepository, FixedExpensesRepository
from salary_tracker.app.data_access.profile_repository import ProfileRepository
from salary_tracker.app.data_access.categories_repository import CategoriesRepository
from salary_tracker.app.data_access.users_repository import UsersRepository
from salary_tracker.app.naming_conventions import Tables, ExpensesTableFields, FixedExpensesTableFields, OWNER


class TestDataServiceClient:
    def test_insert_returns_created_row(self, data_client, owner):
        created = data_client.insert(Tables.CATEGORIES.value, {'name': 'Travel', OWNER: owner})
        assert created['name'] == 'Travel'
        assert isinstance(created['id'], int)

    def test_select_by_owner(self, data_client, owner):
        data_client.insert(Tables.CATEGORIES.value, {'name': 'Travel', OWNER: owner})
        data_client.insert(Tables.CATEGORIES.value, {'name': 'Pets', OWNER: 'other'})
        rows = data_client.select_by_owner(Tables.CATEGORIES.value, owner)
        assert rows['name'].tolist() == ['Travel']

    def test_empty_select_keeps_columns(self, data_client, owner):
        rows = data_client.select_by_owner(Tables.EXPENSES.value, owner)
        assert rows.empty
        assert ExpensesTableFields.AMOUNT.value in rows.columns

    def test_update_and_delete_are_owner_scoped(self, data_client, owner):
        created = data_client.insert(Tables.CATEGORIES.value, {'name': 'Travel', OWNER: owner})
        assert data_client.update_by_id(Tables.CATEGORIES.value, str(created['id']), {'name': 'x'}, 'other') == 0
        assert data_client.delete_by_id(Tables.CATEGORIES.value, created['id'], 'other') == 0
        assert data_client.update_by_id(Tables.CATEGORIES.value, created['id'], {'name': 'Trips'}, owner) == 1
        assert data_client.delete_by_id(Tables.CATEGORIES.value, created['id'], owner) == 1
        assert data_client.delete_by_id(Tables.CATEGORIES.value, created['id'], owner) == 0

    def test_unknown_table(self, data_client):
        with pytest.raises(ValueError):
            data_client.select_where('transactions')

    def test_database_errors_are_wrapped(self, data_client, owner):
        with pytest.raises(DataServiceError):
            # description is required
            data_client.insert(Tables.EXPENSES.value, {ExpensesTableFields.AMOUNT.value: 1.0, OWNER: owner})

    def test_context_manager(self, tmp_path):
        with DataServiceClient.from_url(f"sqlite:///{tmp_path / 'cm.db'}") as client:
            assert client.started
        assert not client.started


class TestExpensesRepository:
    def test_add_expense_and_get_table(self, data_client, owner):
        repo = ExpensesRepository(data_client)
        created = repo.add_expense(owner, 'Coffee', 12.5, 'Food', '2024-03-01')
        assert len(created) == 1
        table = repo.get_table(owner)
        assert list(table.columns) == repo.columns
        assert table[repo.id_col].tolist() == created[repo.id_col].tolist()
        assert table[repo.desc_col].tolist() == ['Coffee']
        assert table[repo.amount_col].tolist() == [12.5]
        assert table[repo.date_col].tolist() == ['2024-03-01']

    def test_empty_table_has_the_same_shape(self, data_client, owner):
        repo = ExpensesRepository(data_client)
        empty = repo.empty_table()
        assert list(empty.columns) == repo.columns
        assert empty[ExpensesTableFields.AMOUNT.value].dtype == 'float64'
        stored = repo.get_table(owner)
        assert stored.empty
        assert list(stored.columns) == repo.columns


class TestFixedExpensesRepository:
    def test_set_completed(self, data_client, owner):
        repo = FixedExpensesRepository(data_client)
        created = repo.add_fixed_expense(owner, 'Rent', 3000)
        id_ = created.iloc[0][FixedExpensesTableFields.ID.value]
        assert not created.iloc[0][FixedExpensesTableFields.IS_COMPLETED.value]
        assert repo.set_completed(owner, id_, True) == 1
        assert repo.get_table(owner).iloc[0][FixedExpensesTableFields.IS_COMPLETED.value]


class TestProfileRepository:
    def test_get_or_create_salary(self, data_client, owner):
        repo = ProfileRepository(data_client)
        assert repo.get_salary(owner) is None
        assert repo.get_or_create_salary(owner) == 7000
        assert repo.update_salary(owner, 8000) == 1
        assert repo.get_or_create_salary(owner) == 8000


class TestCategoriesRepository:
    def test_categories_in_insertion_order(self, data_client, owner):
        repo = CategoriesRepository(data_client)
        assert repo.get_categories(owner) == []
        repo.add_category(owner, 'Travel')
        repo.add_category(owner, 'Pets')
        assert repo.get_categories(owner) == ['Travel', 'Pets']


class TestUsersRepository:
    def test_get_user_by_email(self, data_client, faker):
        repo = UsersRepository(data_client)
        email = faker.email()
        assert repo.get_user_by_email(email) is None
        created = repo.add_user(email, 'hash')
        stored = repo.get_user_by_email(email)
        assert stored[repo.id_col] == created[repo.id_col]
        assert isinstance(stored[repo.id_col], str)

    def test_email_is_unique(self, data_client, faker):
        repo = UsersRepository(data_client)
        email = faker.email()
        repo.add_user(email, 'hash')
        with pytest.raises(DataServiceError):
            repo.add_user(email, 'hash')
