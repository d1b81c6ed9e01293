"""Location Attendance package.

Organized by feature modules (geo, location, attendance, storage, ...)
with a thin Flask controller layer over service/repository layers.
"""
