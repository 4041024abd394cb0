"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Fixed local offset (KST) for every calendar-day computation.
LOCAL_UTC_OFFSET_HOURS = 9

POINTS_PRESENT = 1000
POINTS_LATE = 500

ADMIN_SESSION_COOKIE = "admin_session"
ADMIN_SESSION_TTL_MINUTES = 20

PHOTO_SIZE_PX = 512
PHOTO_WEBP_QUALITY = 82
PHOTO_CONTENT_TYPE = "image/webp"
PHOTO_KEY_PREFIX = "members"
