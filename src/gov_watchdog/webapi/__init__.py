"""Web API package for the Watchdog application."""
