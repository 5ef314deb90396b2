"""In-process extraction of downloaded record archives."""

from __future__ import annotations

import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger(__name__)

# Exit-style codes; 0 is success, anything else is a failure.
OK = 0
BAD_ARCHIVE = 3
UNSAFE_MEMBER = 4
MISSING_ARCHIVE = 9
WRITE_FAILED = 50


@dataclass(slots=True)
class UnpackResult:
    code: int
    members: list[str] = field(default_factory=list)
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.code == OK


class ArchiveUnpacker(Protocol):
    """Protocol for components that expand an archive into a directory."""

    def unpack(self, archive: Path, destination: Path) -> UnpackResult:
        ...


class ZipArchiveUnpacker:
    """Extracts zip archives with :mod:`zipfile`, overwriting existing files."""

    def unpack(self, archive: Path, destination: Path) -> UnpackResult:
        if not archive.is_file():
            return UnpackResult(code=MISSING_ARCHIVE, message=f"{archive} not found")
        try:
            with zipfile.ZipFile(archive) as zf:
                members = zf.namelist()
                unsafe = _unsafe_members(members, destination)
                if unsafe:
                    return UnpackResult(
                        code=UNSAFE_MEMBER,
                        members=members,
                        message=f"unsafe archive member path: {unsafe[0]}",
                    )
                zf.extractall(destination)
        except zipfile.BadZipFile as exc:
            return UnpackResult(code=BAD_ARCHIVE, message=str(exc))
        except OSError as exc:
            return UnpackResult(code=WRITE_FAILED, message=str(exc))
        logger.debug("archive.unpacked", archive=str(archive), members=len(members))
        return UnpackResult(code=OK, members=members)


def _unsafe_members(members: list[str], destination: Path) -> list[str]:
    base = destination.resolve()
    unsafe = []
    for name in members:
        resolved = (base / name).resolve()
        if resolved != base and base not in resolved.parents:
            unsafe.append(name)
    return unsafe
