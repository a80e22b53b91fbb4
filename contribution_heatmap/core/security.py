from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from fastapi.security import HTTPBearer


bearer_scheme = HTTPBearer(auto_error=False)


def resolve_github_token(
    credentials: HTTPAuthorizationCredentials | None, fallback: str | None
) -> str:
    """Pick the GitHub token for a request.

    A Bearer token sent by the caller wins; otherwise the configured token is
    used.

    Raises:
        HTTPException: If neither source provides a non-empty token.
    """

    if credentials is not None:
        if credentials.scheme.lower() == "bearer" and credentials.credentials.strip():
            return credentials.credentials.strip()

    if fallback and fallback.strip():
        return fallback.strip()

    raise HTTPException(
        status_code=401,
        detail="Authorization Bearer token or GITHUB_TOKEN is required",
    )
