import logging
import re
from typing import Optional

from fastapi import Depends, Query

from nullmap.nullmap_api.configuration.api import ApiConfiguration, get_api_configuration

logger = logging.getLogger(__name__)

LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


def parse_limit(raw: Optional[str], default_limit: int, max_limit: int) -> int:
    """
    Turn the raw `limit` query parameter into the effective sample size.

    Missing, blank and non-numeric values fall back to `default_limit`.
    Leading integers are honoured ("25rows" -> 25), and the result is
    clamped into [1, max_limit].
    """
    if raw is None or not raw.strip():
        return default_limit

    match = LEADING_INTEGER.match(raw)
    if not match:
        logger.warning(f"Ignoring non-numeric limit {raw!r}, using default {default_limit}")
        return default_limit

    limit = int(match.group(1))
    clamped = min(max(limit, 1), max_limit)
    if clamped != limit:
        logger.info(f"Clamped limit {limit} to {clamped}")
    return clamped


def get_limit(
    limit: Optional[str] = Query(default=None, description="Number of most recent rows to sample"),
    configuration: ApiConfiguration = Depends(get_api_configuration),
) -> int:
    return parse_limit(limit, configuration.default_limit, configuration.max_limit)
