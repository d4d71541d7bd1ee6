"""Program routes — administrator-only CRUD."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from program_review.auth.middleware import ADMINISTRATORS, require_groups
from program_review.database.repositories.actions import ActionRepository
from program_review.database.repositories.departments import (
    DepartmentRepository,
    ProgramRepository,
)
from program_review.database.repositories.documents import DocumentRepository
from program_review.models.department import Program
from program_review.models.document import Document
from program_review.schemas import ProgramCreate, ProgramUpdate
from program_review.services import departments as departments_svc

require_admin = require_groups(ADMINISTRATORS)

router = APIRouter(
    prefix="/programs",
    tags=["programs"],
    dependencies=[Depends(require_admin)],
)

Admin = Annotated[dict[str, Any], Depends(require_admin)]


@router.get("")
async def list_programs(request: Request) -> list[Program]:
    return await ProgramRepository(request.app.state.cosmos.database).list_all()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_program(request: Request, body: ProgramCreate, user: Admin) -> Program:
    """Create a program under an existing department."""
    database = request.app.state.cosmos.database
    return await departments_svc.create_program(
        body.name,
        body.department_id,
        user,
        ProgramRepository(database),
        DepartmentRepository(database),
        ActionRepository(database),
    )


@router.get("/{program_id}")
async def get_program(request: Request, program_id: str) -> Program:
    program = await ProgramRepository(request.app.state.cosmos.database).get(
        program_id, program_id
    )
    if program is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Program not found")
    return program


@router.patch("/{program_id}")
async def update_program(
    request: Request,
    program_id: str,
    body: ProgramUpdate,
    user: Admin,
) -> Program:
    database = request.app.state.cosmos.database
    program = await departments_svc.update_program(
        program_id,
        body.changes(),
        user,
        ProgramRepository(database),
        DepartmentRepository(database),
        ActionRepository(database),
    )
    if program is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Program not found")
    return program


@router.delete("/{program_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_program(request: Request, program_id: str) -> Response:
    removed = await ProgramRepository(request.app.state.cosmos.database).delete(
        program_id, program_id
    )
    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Program not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{program_id}/documents")
async def list_program_documents(request: Request, program_id: str) -> list[Document]:
    """List the documents filed under a program."""
    return await DocumentRepository(request.app.state.cosmos.database).get_by_program(program_id)
