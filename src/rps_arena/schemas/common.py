from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    error: str
