# hotel_booking/core/constants.py
"""
Core application constants.

These values centralize common constants such as:
- Pagination defaults.
- Booking limits.
- Common HTTP header names.
"""

# Pagination defaults
DEFAULT_PAGE_SIZE: int = 20
MAX_PAGE_SIZE: int = 100

# Booking limits
MAX_DATES_PER_BOOKING: int = 30

# Common HTTP header names
HEADER_REQUEST_ID: str = "X-Request-ID"
HEADER_PROCESS_TIME: str = "X-Process-Time"
