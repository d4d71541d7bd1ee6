"""Session routes — sign in, sign out, current user."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from program_review.auth.middleware import require_authenticated_user, session_user
from program_review.database.repositories.users import UserRepository
from program_review.ratelimit import LOGIN_RATE_LIMIT, limiter
from program_review.schemas import LoginRequest
from program_review.services import users as users_svc

router = APIRouter(tags=["auth"])


@router.post("/login")
@limiter.limit(LOGIN_RATE_LIMIT)
async def login(request: Request, body: LoginRequest) -> dict[str, Any]:
    """Verify credentials and start a session."""
    repo = UserRepository(request.app.state.cosmos.database)
    user = await users_svc.authenticate(body.username, body.password, repo)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )
    request.session["user"] = session_user(user)
    return request.session["user"]


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(request: Request) -> Response:
    request.session.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me")
async def me(
    user: Annotated[dict[str, Any], Depends(require_authenticated_user)],
) -> dict[str, Any]:
    """Return the signed-in user's session record."""
    return user
