from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status. ABSENT is never stored: it is the lack of a record."""

    PRESENT = "PRESENT"
    LATE = "LATE"
    ABSENT = "ABSENT"


ATTENDED_STATUSES = (AttendanceStatus.PRESENT, AttendanceStatus.LATE)
