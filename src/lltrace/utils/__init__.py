"""Utility modules for lltrace."""
