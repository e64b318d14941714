"""
Library metadata (name, version, vendor, revision).

Load it once at startup with ``load_library_info()`` and pass the value to
whatever needs it.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from importlib import metadata
from typing import Any

from logbook_kv.errors import LogbookError
from logbook_kv.logging_config import get_logger

logger = get_logger(__name__)

DISTRIBUTION = "logbook-kv"
REVISION_ENV = "LOGBOOK_REVISION"
UNKNOWN_REVISION = "unknown"

NAME_PROPERTY = "lib.name"
VERSION_PROPERTY = "lib.version"
VENDOR_PROPERTY = "lib.vendor"
REVISION_PROPERTY = "lib.revision"


@dataclass(frozen=True)
class LibraryInfo:
    """Immutable library metadata."""

    name: str
    version: str
    vendor: str
    revision: str

    def attributes(self) -> dict[str, str]:
        """All attributes keyed by their ``lib.*`` property names."""
        return {
            NAME_PROPERTY: self.name,
            VERSION_PROPERTY: self.version,
            VENDOR_PROPERTY: self.vendor,
            REVISION_PROPERTY: self.revision,
        }


def _vendor(meta: Any) -> str:
    for field_name in ("Author", "Author-email", "Maintainer"):
        value = meta.get(field_name)
        if value:
            return value
    return ""


def load_library_info(
    distribution: str = DISTRIBUTION,
    env: Mapping[str, str] | None = None,
    lookup: Callable[[str], Any] = metadata.metadata,
) -> LibraryInfo:
    """Read library metadata from the installed distribution.

    Args:
        distribution: Distribution name to look up
        env: Environment mapping; ``LOGBOOK_REVISION`` supplies the revision
        lookup: Metadata lookup function (``importlib.metadata.metadata``)

    Returns:
        LibraryInfo

    Raises:
        LogbookError: If the distribution metadata cannot be found
    """
    env = os.environ if env is None else env
    try:
        meta = lookup(distribution)
    except metadata.PackageNotFoundError as exc:
        raise LogbookError(f"Library metadata not found for distribution {distribution!r}") from exc

    info = LibraryInfo(
        name=meta["Name"],
        version=meta["Version"],
        vendor=_vendor(meta),
        revision=env.get(REVISION_ENV) or UNKNOWN_REVISION,
    )
    logger.debug("library_info_loaded", name=info.name, version=info.version)
    return info
