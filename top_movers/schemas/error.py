from pydantic import BaseModel


class ErrorSchema(BaseModel):
    """Failure body shared by the JSON endpoints."""

    error: str

    model_config = {"json_schema_extra": {"example": {"error": "Alpha Vantage request failed with status 500"}}}
