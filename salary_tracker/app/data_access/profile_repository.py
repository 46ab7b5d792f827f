import logging

from salary_tracker.app.data_access.data_service import DataServiceClient
from salary_tracker.app.naming_conventions import (
    Tables,
    ProfilesTableFields,
    DEFAULT_SALARY,
)

logger = logging.getLogger(__name__)


class ProfileRepository:
    table = Tables.PROFILES.value
    id_col = ProfilesTableFields.ID.value
    salary_col = ProfilesTableFields.SALARY.value

    def __init__(self, client: DataServiceClient):
        self.client = client

    def get_salary(self, owner: str) -> float | None:
        """Get the salary of the owner, None if the owner has no profile yet"""
        profile = self.client.select_by_owner(self.table, owner)
        if profile.empty:
            return None
        return float(profile.iloc[0][self.salary_col])

    def create_profile(self, owner: str, salary: float = DEFAULT_SALARY) -> float:
        created = self.client.insert(self.table, {self.id_col: owner, self.salary_col: salary})
        logger.info("Created profile for user %s", owner)
        return float(created[self.salary_col])

    def get_or_create_salary(self, owner: str) -> float:
        salary = self.get_salary(owner)
        if salary is None:
            salary = self.create_profile(owner)
        return salary

    def update_salary(self, owner: str, salary: float) -> int:
        return self.client.update_by_id(self.table, owner, {self.salary_col: salary}, owner)
