"""
imagepub — Step logger with duration tracking and secret masking.
"""

import logging
import time
from contextlib import contextmanager
from typing import Generator, Iterable

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-7s | %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger("imagepub")

MASK = "***"


def redact(argv: Iterable[str], secrets: Iterable[str] = ()) -> str:
    """Render a command line for the log with every secret value masked."""
    hidden = [s for s in secrets if s]
    rendered = []
    for arg in argv:
        for secret in hidden:
            arg = arg.replace(secret, MASK)
        rendered.append(arg)
    return " ".join(rendered)


@contextmanager
def step_timer(step_name: str) -> Generator[None, None, None]:
    """Log the start of an external step, then its duration and outcome."""
    logger.info("▶ %s — started", step_name)
    start = time.perf_counter()
    try:
        yield
    except Exception:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.error("✗ %s — failed after %.0f ms", step_name, elapsed_ms)
        raise
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("✔ %s — completed in %.0f ms", step_name, elapsed_ms)
