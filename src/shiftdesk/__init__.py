"""shiftdesk package.

Shift and vacation requests for a construction crew: employees submit,
managers decide, office staff report. Organized by feature modules
(workdays, requests, reports, users, notifications) with a thin Flask
controller layer over service/repository layers.
"""
