from salary_tracker.app.data_access.data_service import DataServiceClient
from salary_tracker.app.naming_conventions import Tables, UsersTableFields


class UsersRepository:
    table = Tables.USERS.value
    id_col = UsersTableFields.ID.value
    email_col = UsersTableFields.EMAIL.value
    password_col = UsersTableFields.PASSWORD.value

    def __init__(self, client: DataServiceClient):
        self.client = client

    def get_user_by_email(self, email: str) -> dict | None:
        """
        Get the stored user row for the email.

        Returns
        -------
        dict | None
            The user row with the id as a string, or None if no user is registered with this email.
        """
        users = self.client.select_where(self.table, **{self.email_col: email})
        if users.empty:
            return None
        user = users.iloc[0].to_dict()
        user[self.id_col] = str(user[self.id_col])
        return user

    def add_user(self, email: str, password_hash: str) -> dict:
        created = self.client.insert(self.table, {self.email_col: email, self.password_col: password_hash})
        created[self.id_col] = str(created[self.id_col])
        return created
