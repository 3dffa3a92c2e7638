from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    status: str = Field("error", description="Always 'error'")
    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"status": "error", "message": "Invalid secret", "type": "authentication_error"},
                {"status": "error", "message": "Game with ID abc not found", "type": "not_found"},
                {"status": "error", "message": "Too many attempts, retry after ...", "type": "login_code"},
            ]
        }
    }
