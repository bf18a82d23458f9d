"""
User Mapping Parser Module

Parses the github-provider-map input into a ReviewerMap.

The input is a comma-separated list of pairs, each pair being a GitHub
login and a destination platform user id:

    alice:U024BE7LH, bob:U0G9QF9C6
    alice=29:1a2b3c, bob=29:4d5e6f

Pairs are split on whichever of "=" or ":" comes first. Logins contain
neither, so ids keep any later separators (Teams ids contain colons).
"""

import re
from typing import Optional, Tuple

from review_reminder.logging_config import get_logger
from review_reminder.models import ReviewerMap

logger = get_logger(__name__)

PAIR_DELIMITER = ","
KEY_VALUE_SEPARATORS = ("=", ":")

WHITESPACE_PATTERN = re.compile(r"\s+")


class ConfigFormatError(Exception):
    """Raised when the user mapping string is malformed."""
    pass


def _split_pair(pair: str) -> Tuple[str, str]:
    positions = [pair.find(separator) for separator in KEY_VALUE_SEPARATORS]
    found = [position for position in positions if position >= 0]
    if found:
        index = min(found)
        return pair[:index], pair[index + 1:]
    raise ConfigFormatError(
        f"Invalid mapping entry '{pair}': expected github-login:provider-id"
    )


def parse_user_mapping(raw: Optional[str]) -> ReviewerMap:
    """
    Parse a mapping string into a ReviewerMap.
    
    Whitespace is ignored so the mapping can be written across several
    lines. Empty entries are skipped and a repeated login keeps its last id.
    
    Args:
        raw: Mapping string, may be empty or None
        
    Returns:
        Dict from GitHub login to destination user id
        
    Raises:
        ConfigFormatError: If an entry has no separator, key or value
    """
    mapping: ReviewerMap = {}
    if not raw:
        return mapping
    
    compact = WHITESPACE_PATTERN.sub("", raw)
    for pair in compact.split(PAIR_DELIMITER):
        if not pair:
            continue
        key, value = _split_pair(pair)
        if not key or not value:
            raise ConfigFormatError(
                f"Invalid mapping entry '{pair}': login and id must both be set"
            )
        mapping[key] = value
    
    logger.debug("Parsed user mapping", entries=len(mapping))
    return mapping
