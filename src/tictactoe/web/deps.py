from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from tictactoe.app import App

# Capability token proving ownership of a user
secret_scheme = APIKeyHeader(name="X-Secret-String", auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_client_identity(request: Request) -> str:
    """Identify the caller for rate limiting by its network address."""
    if request.client is None:
        return "unknown"
    return request.client.host


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
SecretDep = Annotated[str | None, Depends(secret_scheme)]
ClientIdentityDep = Annotated[str, Depends(get_client_identity)]
