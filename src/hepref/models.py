"""Core data models used throughout hepref."""

from __future__ import annotations

import re
from enum import Enum
from pathlib import PurePosixPath, PureWindowsPath

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from hepref.errors import InvalidReference, UnsupportedOperation

REFERENCE_PATTERN = re.compile(
    r"^(?:(?P<reftype>[a-z][a-z-]*):)?"
    r"(?P<recordid>[^:/\s]+)"
    r"(?::v(?P<recordvers>\d+))?"
    r"(?:/(?P<resourcename>.+))?$"
)


class RefType(str, Enum):
    """Remote repositories a record can come from."""

    HEPDATA = "hepdata"
    HEPDATA_SANDBOX = "hepdata-sandbox"
    INSPIREHEP = "inspirehep"

    def __str__(self) -> str:
        return self.value


class ResourceReference(BaseModel):
    """Identifies one file inside a (possibly unversioned) remote record."""

    model_config = ConfigDict(frozen=True)

    reftype: RefType = RefType.HEPDATA
    recordid: str | int
    recordvers: int = Field(default=0, ge=0)  # 0 means "latest"
    resourcename: str = ""

    @field_validator("reftype", mode="before")
    @classmethod
    def _known_reftype(cls, value: object) -> object:
        if isinstance(value, RefType):
            return value
        try:
            return RefType(value)
        except ValueError:
            raise UnsupportedOperation(
                f"Unknown reference type {value!r}; expected one of "
                f"{', '.join(member.value for member in RefType)}"
            ) from None

    @field_validator("recordid")
    @classmethod
    def _non_empty_recordid(cls, value: str | int) -> str | int:
        if isinstance(value, str):
            if not value.strip():
                raise ValueError("recordid must not be empty")
            if value in (".", "..") or "/" in value or "\\" in value:
                raise ValueError(f"recordid must be a single path component: {value!r}")
        return value

    @field_validator("resourcename")
    @classmethod
    def _resource_inside_record(cls, value: str) -> str:
        if not value:
            return value
        # Both flavours, so "C:\\x" and "\\x" are refused on every platform.
        for flavour in (PurePosixPath, PureWindowsPath):
            path = flavour(value)
            if path.is_absolute() or path.anchor or ".." in path.parts:
                raise ValueError(
                    f"resourcename must be a relative path inside the record: {value!r}"
                )
        return value

    @field_validator("recordvers", mode="before")
    @classmethod
    def _missing_version_is_latest(cls, value: object) -> object:
        return 0 if value is None else value

    @property
    def is_versioned(self) -> bool:
        return self.recordvers > 0

    def with_version(self, version: int) -> "ResourceReference":
        """Return a copy of this reference pinned to ``version``."""
        return self.model_copy(update={"recordvers": version})

    @classmethod
    def parse(cls, text: str) -> "ResourceReference":
        """Parse ``[reftype:]recordid[:vN][/resourcename]``."""
        match = REFERENCE_PATTERN.match(text.strip()) if text else None
        if not match:
            raise InvalidReference(f"Cannot parse resource reference: {text!r}")
        try:
            return cls(
                reftype=match.group("reftype") or RefType.HEPDATA,
                recordid=match.group("recordid"),
                recordvers=int(match.group("recordvers") or 0),
                resourcename=match.group("resourcename") or "",
            )
        except ValidationError as exc:
            raise InvalidReference(f"Invalid resource reference {text!r}: {exc}") from exc

    def __str__(self) -> str:
        rendered = f"{self.reftype.value}:{self.recordid}"
        if self.recordvers:
            rendered += f":v{self.recordvers}"
        if self.resourcename:
            rendered += f"/{self.resourcename}"
        return rendered
