"""Attendance Board package.

Members check in as PRESENT/LATE on a local (UTC+9) calendar day, points
accrue per status, and an admin manages members and photos. Organized by
feature modules (attendance, members, admins, stats, photos) with a thin
Flask controller layer over service/repository layers.
"""
