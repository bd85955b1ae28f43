"""
Shared helpers: vendor response handling, exceptions and asyncio utilities.
"""
