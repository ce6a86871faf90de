"""Attendance Tracker package.

Feature modules (sessions, checkins, logs) each carry a model, a repository
interface with MySQL and in-memory implementations, a service and a thin
Flask controller.
"""
