"""Government Watchdog - read-mostly search API over public records."""

__version__ = "1.0.0"
