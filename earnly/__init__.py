"""
Earnly - Source Package

A personal time-and-earnings tracker. The user configures jobs
(salary + schedule) and Earnly derives an hourly rate, tracks minutes
worked against the schedule and keeps daily and lifetime totals.

DESIGN PRINCIPLES:
1. Today's figures are always re-derived from (schedule, now)
2. Closed days are immutable records
3. Lifetime earnings are computed, never stored
4. Persistence is best-effort and never blocks the in-memory state
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Earnly Team"
