"""Input and output models for the MCP tools.

Arguments are passed through exactly as the caller supplied them. Only a
missing argument (``None``) or an oversized one is rejected.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator


def _require(value: str | None, field: str, max_length: int) -> str:
    if value is None:
        raise ValueError(f"{field} is required")
    if len(value) > max_length:
        raise ValueError(f"{field} must not exceed {max_length} characters")
    return value


class SearchDocsInput(BaseModel):
    query: str | None

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str | None) -> str:
        return _require(v, "query", 500)


class SearchDocsOutput(BaseModel):
    query: str
    results: list[str]
    message: str


class ListComponentsOutput(BaseModel):
    categories: dict[str, list[str]]
    total: int


class GetPageInput(BaseModel):
    path: str | None

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str | None) -> str:
        return _require(v, "path", 2048)


class GetComponentInput(BaseModel):
    component: str | None

    @field_validator("component")
    @classmethod
    def validate_component(cls, v: str | None) -> str:
        return _require(v, "component", 200)
