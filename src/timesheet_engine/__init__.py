"""Timesheet consolidation engine.

This package is organized by feature modules (attendance, shifts, timesheets,
employments) with Protocol repositories, MySQL implementations and a service
layer that turns raw clock events into daily timesheets.
"""
