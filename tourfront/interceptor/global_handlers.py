"""Cross-cutting global handlers installed on the error interceptor."""

from __future__ import annotations

import logging

from tourfront.schemas.error import NormalizedError

logger = logging.getLogger(__name__)


def build_logging_error_handler(*, verbose: bool = False):
    """Return a global handler that logs every normalized failure."""

    def log_normalized_error(error: NormalizedError) -> None:
        logger.warning("Backend call failed status=%s code=%s message=%s", error.status, error.code, error.message)
        if verbose:
            logger.debug("Backend failure details=%s", error.model_dump())

    return log_normalized_error
