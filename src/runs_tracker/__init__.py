"""
MLB runs tracker.

Turns totals and alternate-totals prices into market-implied run totals
and projects where the day's slate will finish.
"""

__version__ = "0.1.0"
