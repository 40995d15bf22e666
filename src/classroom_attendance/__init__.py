"""Classroom attendance package.

Organized by feature modules (roster, sessions, attendance) on top of a
document store adapter, with thin Flask controllers and service/repository
layers.
"""
