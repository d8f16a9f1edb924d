"""Gate: decides whether a document is analyzed at all.

Checks run in order and stop at the first one that rejects:

    1. exclusion  - the URI matches an exclusion glob
    2. size       - the content is longer than the configured limit
    3. language   - the language's enable switch is off

Anomalies while checking (malformed patterns, unmeasurable content) never
reject a document: the gate fails open.
"""

import re
from typing import Sequence

from ..config import MetricsConfiguration
from ..file_ops import match_glob
from ..languages import get_language_spec
from ..logging_config import get_logger

logger = get_logger(__name__)


def is_excluded(document_uri: str, patterns: Sequence[str]) -> bool:
    """True if the URI matches any exclusion pattern."""
    for pattern in patterns or []:
        try:
            if match_glob(document_uri, pattern):
                logger.debug(f"Excluded by '{pattern}': {document_uri}")
                return True
        except re.error as e:
            logger.debug(f"Ignoring malformed exclusion pattern '{pattern}': {e}")
    return False


def is_above_file_size_limit(content: str, limit_mb: float) -> bool:
    """True if the content is longer than ``limit_mb`` megabytes.

    A negative limit disables the check. Errors while measuring count as
    "not above the limit".
    """
    try:
        if limit_mb < 0:
            return False
        return len(content) > limit_mb * 1024 * 1024
    except Exception as e:
        logger.debug(f"Could not measure document size, analyzing anyway: {e}")
        return False


def is_language_disabled(language_id: str, config: MetricsConfiguration) -> bool:
    """True if the language is recognized and switched off. Unknown ids are allowed."""
    spec = get_language_spec(language_id)
    if spec is None:
        return False
    return not getattr(config, spec.enable_flag)


def should_analyze(
    document_uri: str, language_id: str, content: str, config: MetricsConfiguration
) -> bool:
    """Run the gate checks for one document."""
    if is_excluded(document_uri, config.exclude):
        return False
    if is_above_file_size_limit(content, config.file_size_limit_mb):
        logger.debug(f"Skipped (size): {document_uri}")
        return False
    if is_language_disabled(language_id, config):
        logger.debug(f"Skipped (language '{language_id}' disabled): {document_uri}")
        return False
    return True
