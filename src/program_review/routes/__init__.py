"""HTTP routers."""

from program_review.routes import actions, auth, departments, documents, programs, users

ROUTERS = (
    auth.router,
    documents.router,
    departments.router,
    programs.router,
    users.router,
    actions.router,
)

__all__ = ["ROUTERS"]
