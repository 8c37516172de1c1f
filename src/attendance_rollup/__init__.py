"""Attendance roll-up service.

Feature modules (records, attendance, monthly_settings, reports) each keep
models, repository protocols, services and a thin Flask controller.
"""
