"""Timeclock package.

Feature modules (events, sessions, reports, timetracking, ...) keep the
work-session engine free of I/O; repositories and the Flask controller sit at
the edges.
"""
