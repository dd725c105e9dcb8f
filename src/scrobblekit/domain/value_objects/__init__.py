"""Value objects."""

from scrobblekit.domain.value_objects.endpoints import Endpoint, Period, TaggingType
from scrobblekit.domain.value_objects.field_result import (
    ABSENT,
    Absent,
    FieldResult,
    Malformed,
    Present,
)

__all__ = [
    "ABSENT",
    "Absent",
    "Endpoint",
    "FieldResult",
    "Malformed",
    "Period",
    "Present",
    "TaggingType",
]
