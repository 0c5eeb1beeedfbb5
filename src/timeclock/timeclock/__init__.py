"""Timeclock package.

Kiosk punches, daily timesheet reconciliation and the hour-bank ledger,
organized by feature modules with a thin Flask controller layer over
service/repository layers.
"""
