"""Department and program business logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from program_review.errors import DependentRecordsError, ProgramReviewError
from program_review.models.department import Department, Program
from program_review.services.actions import log_action

if TYPE_CHECKING:
    from program_review.database.repositories.actions import ActionRepository
    from program_review.database.repositories.departments import (
        DepartmentRepository,
        ProgramRepository,
    )
    from program_review.database.repositories.users import UserRepository

logger = logging.getLogger(__name__)


async def with_chairs(
    departments: list[Department],
    users_repo: UserRepository,
) -> list[dict[str, Any]]:
    """Serialize departments with chair ids expanded to public user records."""
    chair_ids = sorted({chair for department in departments for chair in department.chairs})
    users = {user.id: user.to_public() for user in await users_repo.get_many(chair_ids)}
    return [
        {
            **department.model_dump(mode="json"),
            "chairs": [users[chair] for chair in department.chairs if chair in users],
        }
        for department in departments
    ]


async def create_department(
    name: str,
    chairs: list[str],
    user: dict[str, Any],
    repo: DepartmentRepository,
    actions_repo: ActionRepository,
) -> Department:
    department = Department(name=name, chairs=chairs)
    await repo.create(department)
    logger.info("Department created — id=%s", department.id)
    await log_action(
        "created a new department", user, "department", department.id, department.name, actions_repo
    )
    return department


async def update_department(
    department_id: str,
    changes: dict[str, Any],
    user: dict[str, Any],
    repo: DepartmentRepository,
    actions_repo: ActionRepository,
) -> Department | None:
    """Apply a partial update. Returns None when the department does not exist."""
    department = await repo.get(department_id, department_id)
    if department is None:
        return None
    department = await repo.update(department.merged(changes), department_id)
    logger.info("Department updated — id=%s", department_id)
    await log_action(
        "updated a department", user, "department", department.id, department.name, actions_repo
    )
    return department


async def delete_department(
    department_id: str,
    repo: DepartmentRepository,
    programs_repo: ProgramRepository,
) -> bool:
    """Delete a department that no program depends on.

    Returns False when it does not exist; raises ``DependentRecordsError`` while
    programs still reference it.
    """
    if await programs_repo.get_by_department(department_id):
        logger.info("Department has dependent programs — id=%s", department_id)
        raise DependentRecordsError("Department still has programs")
    removed = await repo.delete(department_id, department_id)
    if removed:
        logger.info("Department deleted — id=%s", department_id)
    else:
        logger.info("Tried to remove nonexistent department — id=%s", department_id)
    return removed


async def create_program(
    name: str,
    department_id: str,
    user: dict[str, Any],
    repo: ProgramRepository,
    departments_repo: DepartmentRepository,
    actions_repo: ActionRepository,
) -> Program:
    """Create a program under an existing department."""
    program = Program(name=name, department_id=department_id)
    if await departments_repo.get(department_id, department_id) is None:
        raise ProgramReviewError(f"Department {department_id} does not exist")
    await repo.create(program)
    logger.info("Program created — id=%s department=%s", program.id, department_id)
    await log_action("created a new program", user, "program", program.id, program.name, actions_repo)
    return program


async def update_program(
    program_id: str,
    changes: dict[str, Any],
    user: dict[str, Any],
    repo: ProgramRepository,
    departments_repo: DepartmentRepository,
    actions_repo: ActionRepository,
) -> Program | None:
    """Apply a partial update. Returns None when the program does not exist."""
    program = await repo.get(program_id, program_id)
    if program is None:
        return None
    updated = program.merged(changes)
    if updated.department_id != program.department_id and (
        await departments_repo.get(updated.department_id, updated.department_id) is None
    ):
        raise ProgramReviewError(f"Department {updated.department_id} does not exist")
    updated = await repo.update(updated, program_id)
    logger.info("Program updated — id=%s", program_id)
    await log_action("updated a program", user, "program", updated.id, updated.name, actions_repo)
    return updated
