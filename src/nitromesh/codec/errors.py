"""Error definitions for the mesh codec."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

E_TRUNCATED = "E_TRUNCATED"
E_INCONSISTENT = "E_INCONSISTENT"
E_RANGE = "E_RANGE"
E_NO_HEADER = "E_NO_HEADER"


@dataclass
class MeshError(Exception):
    code: str
    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}" + (
            f" | ctx={self.context}" if self.context else ""
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context or {},
        }


class TruncatedInputError(MeshError):
    pass


class InconsistentMeshError(MeshError):
    pass


def truncated(
    field: str, offset: int, expected: int, available: int
) -> TruncatedInputError:
    return TruncatedInputError(
        code=E_TRUNCATED,
        message=f"Input ended while reading {field}",
        context={
            "field": field,
            "offset": offset,
            "expected": expected,
            "available": available,
        },
    )


def inconsistent(
    message: str,
    context: Optional[Dict[str, Any]] = None,
    *,
    code: str = E_INCONSISTENT,
) -> InconsistentMeshError:
    return InconsistentMeshError(code=code, message=message, context=context)


__all__ = [
    "MeshError",
    "TruncatedInputError",
    "InconsistentMeshError",
    "truncated",
    "inconsistent",
    "E_TRUNCATED",
    "E_INCONSISTENT",
    "E_RANGE",
    "E_NO_HEADER",
]
