#!/usr/bin/env python3
"""Recompute denormalized counters from relationship rows.

Meant to run periodically (cron or a one-off job). Each entity type is swept
in its own unit of work, so a failure part way through keeps the
corrections already committed.

Usage:
    python scripts/reconcile_counters.py                  # all types
    python scripts/reconcile_counters.py project comment  # selected types
"""

import asyncio
import sys

import logfire

from agora.config import Settings
from agora.domain.service import CounterService
from agora.domain.value import TargetType
from agora.util.di.container import create_container
from agora.util.logging import get_logger, setup_logging
from agora.util.observability import configure_logfire

logger = get_logger("agora.scripts.reconcile_counters")


async def reconcile(target_types: list[TargetType], batch_size: int) -> int:
    """Sweep each target type and return the number of corrected entities."""
    container = create_container()
    corrected = 0
    try:
        for target_type in target_types:
            async with container() as request_container:
                counter_service = await request_container.get(CounterService)
                summary = await counter_service.reconcile_all(
                    target_type, batch_size=batch_size
                )
            logger.info(
                f"Reconciled {summary.entities} {target_type.value} rows, "
                f"{summary.corrected} corrected"
            )
            corrected += summary.corrected
    finally:
        await container.close()
    return corrected


def main(argv: list[str]) -> int:
    """Parse target types and run the sweep."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        target_types = [TargetType(arg) for arg in argv] or list(TargetType)
    except ValueError as e:
        logger.error(f"Unknown target type: {e}")
        return 2

    try:
        corrected = asyncio.run(
            reconcile(target_types, settings.interactions.reconcile_batch_size)
        )
    except Exception as e:
        logfire.error(
            "Counter reconciliation failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    logfire.info("Counter reconciliation completed", corrected=corrected)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
