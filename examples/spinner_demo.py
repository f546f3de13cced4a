#!/usr/bin/env python3
"""Show the progress reporter with simulated work items."""

from __future__ import annotations

import asyncio

from woff2_batch.infrastructure.progress import ProgressReporter


async def demo(reporter: ProgressReporter, items: int = 3, delay: float = 2.0) -> None:
    """Animate a few fake jobs, then one failure."""
    reporter.message("Testing spinner animation...\n")
    for index in range(1, items + 1):
        reporter.start(f"Processing test item {index}/{items}...")
        await asyncio.sleep(delay)
        reporter.stop(f"Completed test item {index}/{items}", success=True)

    reporter.start("Testing error case...")
    await asyncio.sleep(delay * 0.75)
    reporter.stop("This is how an error looks", success=False)
    reporter.message("\nSpinner test complete!")


if __name__ == "__main__":
    asyncio.run(demo(ProgressReporter(animate=True)))
