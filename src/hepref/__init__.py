"""Resolve HEPData record references to files in a local cache."""

from hepref.errors import (
    InvalidReference,
    RemoteError,
    ResolutionError,
    UnpackError,
    UnsupportedOperation,
)
from hepref.models import RefType, ResourceReference
from hepref.services import resolve_reference

__all__ = [
    "InvalidReference",
    "RemoteError",
    "ResolutionError",
    "UnpackError",
    "UnsupportedOperation",
    "RefType",
    "ResourceReference",
    "resolve_reference",
]
