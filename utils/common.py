"""
Small asyncio helpers shared by the wrappers and their callers.
"""
import asyncio


async def sleep(ms: float) -> None:
    """Wait for the given number of milliseconds."""
    await asyncio.sleep(ms / 1000)
