"""
Schedule Hours - holiday-aware working hours for work schedules.
"""

__version__ = "0.1.0"
