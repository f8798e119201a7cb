"""
Collection of live platform data into relationship records.
"""
from .collector import RequestData, RequestDataCollector
from .relationships import co_attendance_records, investment_records, mentorship_records

__all__ = [
    "RequestData",
    "RequestDataCollector",
    "co_attendance_records",
    "investment_records",
    "mentorship_records",
]
