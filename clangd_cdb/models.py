from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ResolutionStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    DISABLED = "disabled"


@dataclass(frozen=True)
class ResolutionRow:
    file: str
    configured: Optional[str]
    database: Optional[str]
    status: ResolutionStatus

    def as_dict(self) -> dict[str, str]:
        return {
            "file": self.file,
            "configured": self.configured or "",
            "database": self.database or "",
            "status": self.status.value,
        }


@dataclass(frozen=True)
class CoverageRow:
    file: str
    database: Optional[str]
    listed: bool

    def as_dict(self) -> dict[str, str]:
        return {
            "file": self.file,
            "database": self.database or "",
            "listed": "yes" if self.listed else "no",
        }
