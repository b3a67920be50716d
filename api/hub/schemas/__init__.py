from pydantic import BaseModel, ConfigDict


class HubModel(BaseModel):
    """Base for request and response bodies: unknown fields are rejected."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")
