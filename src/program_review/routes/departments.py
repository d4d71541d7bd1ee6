"""Department routes — administrator-only CRUD and program listing."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from program_review.auth.middleware import ADMINISTRATORS, require_groups
from program_review.database.repositories.actions import ActionRepository
from program_review.database.repositories.departments import (
    DepartmentRepository,
    ProgramRepository,
)
from program_review.database.repositories.users import UserRepository
from program_review.models.department import Department, Program
from program_review.schemas import DepartmentCreate, DepartmentUpdate
from program_review.services import departments as departments_svc

require_admin = require_groups(ADMINISTRATORS)

router = APIRouter(
    prefix="/departments",
    tags=["departments"],
    dependencies=[Depends(require_admin)],
)

Admin = Annotated[dict[str, Any], Depends(require_admin)]


@router.get("")
async def list_departments(request: Request) -> list[dict[str, Any]]:
    """List every department with chairs expanded."""
    database = request.app.state.cosmos.database
    departments = await DepartmentRepository(database).list_all()
    return await departments_svc.with_chairs(departments, UserRepository(database))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_department(request: Request, body: DepartmentCreate, user: Admin) -> Department:
    database = request.app.state.cosmos.database
    return await departments_svc.create_department(
        body.name,
        body.chairs,
        user,
        DepartmentRepository(database),
        ActionRepository(database),
    )


@router.get("/{department_id}")
async def get_department(request: Request, department_id: str) -> dict[str, Any]:
    """Return a department with chairs expanded."""
    database = request.app.state.cosmos.database
    department = await DepartmentRepository(database).get(department_id, department_id)
    if department is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Department not found")
    [result] = await departments_svc.with_chairs([department], UserRepository(database))
    return result


@router.patch("/{department_id}")
async def update_department(
    request: Request,
    department_id: str,
    body: DepartmentUpdate,
    user: Admin,
) -> Department:
    database = request.app.state.cosmos.database
    department = await departments_svc.update_department(
        department_id,
        body.changes(),
        user,
        DepartmentRepository(database),
        ActionRepository(database),
    )
    if department is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Department not found")
    return department


@router.delete("/{department_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_department(request: Request, department_id: str) -> Response:
    """Delete a department that has no programs."""
    database = request.app.state.cosmos.database
    removed = await departments_svc.delete_department(
        department_id,
        DepartmentRepository(database),
        ProgramRepository(database),
    )
    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Department not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{department_id}/programs")
async def list_department_programs(request: Request, department_id: str) -> list[Program]:
    database = request.app.state.cosmos.database
    return await ProgramRepository(database).get_by_department(department_id)
