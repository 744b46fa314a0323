"""Notification and reminder engine for fleet operations."""
