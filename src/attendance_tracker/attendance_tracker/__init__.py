"""Attendance Tracker package.

This package is organized by feature modules (semesters, schedules, attendance)
with a pure schedule/statistics core, SOLID service/repository layers and a
thin Flask controller layer.
"""
