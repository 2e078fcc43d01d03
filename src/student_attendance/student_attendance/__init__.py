"""Student Attendance package.

Organized by feature modules (students, batches, attendance, reports, ...)
with a thin Flask controller layer over service/repository layers.
"""
