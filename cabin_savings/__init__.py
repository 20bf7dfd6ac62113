"""Winter savings estimation for heating pads in cabins."""

import logging

logger = logging.getLogger("cabin_savings")
if not logger.handlers:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

DEFAULT_WINTER_MONTHS = 4


__all__ = ["DEFAULT_WINTER_MONTHS", "logger"]
