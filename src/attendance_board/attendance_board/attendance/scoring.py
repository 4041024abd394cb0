from __future__ import annotations

from ..core.constants import POINTS_LATE, POINTS_PRESENT
from ..core.enums import AttendanceStatus

_POINTS = {
    AttendanceStatus.PRESENT: POINTS_PRESENT,
    AttendanceStatus.LATE: POINTS_LATE,
    AttendanceStatus.ABSENT: 0,
}


def points_for(status: AttendanceStatus) -> int:
    """Point value of a status, fixed at write time (never recomputed)."""
    return _POINTS[AttendanceStatus(status)]
