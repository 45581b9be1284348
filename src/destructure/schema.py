from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, field_validator


class AccessorNamingConfig(BaseModel):
    prefix: str = "set"

    @field_validator("prefix")
    @classmethod
    def _prefix_is_identifier(cls, value: str) -> str:
        if value and not value.isidentifier():
            raise ValueError(f"accessor prefix must be an identifier, got {value!r}")
        return value


class FingerprintReport(BaseModel):
    keys: List[str]
    fingerprint: int
    hex: str


class AccessorPlanEntryDTO(BaseModel):
    key: Optional[str] = None
    position: Optional[int] = None
    accessor: str


class AccessorPlanReport(BaseModel):
    kind: str
    size: int
    fingerprint: Optional[str] = None
    accessors: List[AccessorPlanEntryDTO]
