"""
BizDesk — Pydantic request/response schemas shared across resources.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, model_validator


class RequestModel(BaseModel):
    """Allow-listed request body: unknown fields are rejected with 422."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_document(self, *, partial: bool = False, exclude: set[str] | None = None) -> dict:
        """
        Store-ready dict with camelCase keys.

        ``partial`` keeps only the fields the client actually sent (updates);
        otherwise unset optionals are dropped and defaults are kept.
        """
        return self.model_dump(
            by_alias=True,
            mode="json",
            exclude=exclude,
            exclude_unset=partial,
            exclude_none=not partial,
        )


class UpdateRequest(RequestModel):
    """
    Partial update body.

    Every field is optional so clients send only what changed, but an
    explicit ``null`` is only accepted for the fields named in
    ``nullable_fields``; anything else would be stored as null.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset({"id"})

    @model_validator(mode="after")
    def reject_nulls(self):
        nulls = sorted(
            name for name in self.model_fields_set
            if getattr(self, name) is None and name not in self.nullable_fields
        )
        if nulls:
            aliases = [type(self).model_fields[name].alias or name for name in nulls]
            raise ValueError(f"Fields cannot be null: {', '.join(aliases)}")
        return self


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "1.0.0"
    timestamp: str | None = None
    store: str = "sql"
