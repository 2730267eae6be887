"""Pydantic models describing the Cockpit content API payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class CockpitBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class CockpitRecord(CockpitBaseModel):
    """One content item or tree node. Unknown keys are the record's fields.

    Metadata is read from the ``_``-prefixed keys only, so user fields such as
    ``children`` or ``created`` stay in the extras.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(alias="_id")
    created: int | None = Field(default=None, alias="_created")
    modified: int | None = Field(default=None, alias="_modified")
    by: str | None = Field(default=None, alias="_by")
    created_by: str | None = Field(default=None, alias="_cby")
    modified_by: str | None = Field(default=None, alias="_mby")
    parent_id: str | None = Field(default=None, alias="_pid")
    children: list[CockpitRecord] | None = Field(default=None, alias="_children")

    @field_validator("parent_id", "by", "created_by", "modified_by", mode="before")
    @classmethod
    def _normalize_user_refs(cls, value: object) -> object:
        return _blank_to_none(value)

    @field_validator("created", "modified", mode="before")
    @classmethod
    def _parse_epoch(cls, value: object) -> object:
        if isinstance(value, str) and value.strip().isdigit():
            return int(value)
        if isinstance(value, float):
            return int(value)
        return value

    def to_raw(self) -> dict[str, object]:
        """Plain mapping in the CMS's own key names, children included."""

        raw: dict[str, object] = dict(self.model_extra or {})
        raw["_id"] = self.id
        for alias, value in (
            ("_created", self.created),
            ("_modified", self.modified),
            ("_by", self.by),
            ("_cby", self.created_by),
            ("_mby", self.modified_by),
            ("_pid", self.parent_id),
        ):
            if value is not None:
                raw[alias] = value
        if self.children is not None:
            raw["_children"] = [child.to_raw() for child in self.children]
        return raw


class PagedRecords(CockpitBaseModel):
    """Envelope returned when the items endpoint is queried with paging options."""

    data: list[CockpitRecord]


class ErrorResponse(CockpitBaseModel):
    error: str


_RECORD_LIST = TypeAdapter(list[CockpitRecord])


def parse_records(payload: object) -> list[CockpitRecord]:
    """Validate a list of records, accepting the paged ``{"data": [...]}`` envelope too."""

    if isinstance(payload, Mapping) and "data" in payload:
        return PagedRecords.model_validate(payload).data
    return _RECORD_LIST.validate_python(cast("object", payload))
