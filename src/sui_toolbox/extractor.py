"""Reads the published package id out of transaction effects."""

import logging
import re

from .errors import PublishedPackageNotFoundError
from .models import TransactionEffectsResult

logger = logging.getLogger(__name__)

_ZERO_PADDING = re.compile(r"^0x0+")


def normalize_package_id(raw: str) -> str:
    """
    Strip zero padding after the 0x prefix.

    0x00000000abc -> 0xabc, 0x0000 -> 0x0. Idempotent. Strings without the
    0x prefix are returned unchanged.
    """
    stripped = _ZERO_PADDING.sub("0x", raw)
    if stripped == "0x":
        # all zeros
        return "0x0"
    return stripped


def extract(effects: TransactionEffectsResult) -> str:
    """
    Return the normalized id of the package published by effects.

    Raises:
        PublishedPackageNotFoundError: No 'published' object change
    """
    published = [c for c in effects.changes_of_type("published") if c.package_id]

    if not published:
        raise PublishedPackageNotFoundError(
            f"Transaction {effects.digest} has no published package among "
            f"{len(effects.object_changes)} object changes"
        )

    if len(published) > 1:
        logger.warning(
            f"Transaction {effects.digest} published {len(published)} packages; using the first"
        )

    return normalize_package_id(published[0].package_id)
