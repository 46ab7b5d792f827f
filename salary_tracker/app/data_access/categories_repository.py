from salary_tracker.app.data_access.data_service import DataServiceClient
from salary_tracker.app.naming_conventions import Tables, CategoriesTableFields


class CategoriesRepository:
    table = Tables.CATEGORIES.value
    id_col = CategoriesTableFields.ID.value
    name_col = CategoriesTableFields.NAME.value
    owner_col = CategoriesTableFields.OWNER.value

    def __init__(self, client: DataServiceClient):
        self.client = client

    def get_categories(self, owner: str) -> list[str]:
        """Get the names of the categories the owner added, in insertion order"""
        categories = self.client.select_by_owner(self.table, owner)
        return categories[self.name_col].tolist()

    def add_category(self, owner: str, name: str) -> str:
        created = self.client.insert(self.table, {self.name_col: name, self.owner_col: owner})
        return created[self.name_col]
