"""Pydantic models describing the Graph API product set payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GraphBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class GraphErrorDetail(GraphBaseModel):
    message: str = "Unknown Graph API error"
    type: str | None = None
    code: int | None = None
    error_subcode: int | None = None
    is_transient: bool = False
    fbtrace_id: str | None = None


class GraphErrorResponse(GraphBaseModel):
    error: GraphErrorDetail


class ProductSetNode(GraphBaseModel):
    id: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return value


class ProductSetListResponse(GraphBaseModel):
    data: list[ProductSetNode] = Field(default_factory=list[ProductSetNode])


class CreatedResponse(ProductSetNode):
    pass


class SuccessResponse(GraphBaseModel):
    success: bool
