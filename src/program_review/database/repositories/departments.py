"""Repositories for the departments and programs containers (partitioned by /id)."""

from __future__ import annotations

from program_review.database.repositories.base import BaseRepository
from program_review.models.department import Department, Program


class DepartmentRepository(BaseRepository[Department]):
    container_name = "departments"
    model_class = Department

    async def list_all(self) -> list[Department]:
        return await self.query("SELECT * FROM c ORDER BY c.name ASC")


class ProgramRepository(BaseRepository[Program]):
    container_name = "programs"
    model_class = Program

    async def get_by_department(self, department_id: str) -> list[Program]:
        """Fetch the programs of a department."""
        return await self.query(
            "SELECT * FROM c WHERE c.department_id = @department_id ORDER BY c.name ASC",
            [{"name": "@department_id", "value": department_id}],
        )
