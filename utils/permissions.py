import secrets

from fastapi import HTTPException, Request

from core.settings import settings


def require_manage_options(request: Request) -> None:
    """Require the elevated permission the schema gateway is reserved for.

    With ADMIN_API_TOKEN configured the request must carry it as a bearer
    token; without it, permission checks are left to the host in front of
    this service.

    Raises:
        HTTPException: 401 without a bearer token, 403 for a wrong one
    """
    expected = settings.ADMIN_API_TOKEN
    if not expected:
        return

    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=401,
            detail="Missing or invalid Authorization header"
        )

    token = auth_header.replace("Bearer ", "", 1)
    if not secrets.compare_digest(token, expected):
        raise HTTPException(
            status_code=403,
            detail="Sorry, you are not allowed to do that."
        )
