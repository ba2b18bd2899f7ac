"""Utility helpers for the Watchdog application."""
