"""
Console script wrapper around the async entry point.
"""

import asyncio

from .main import main


def run() -> None:
    asyncio.run(main())
