"""Short-number metadata tables consumed by phone number matching libraries.

Each region lives in a generated module under ``data`` named
``region_<ID>`` which defines ``PHONE_METADATA_<ID>``. Tables are loaded
lazily and cached.

Examples
--------
>>> from coursepages.phonemetadata import load_short_number_metadata
>>> metadata = load_short_number_metadata("DO")
>>> metadata.number_desc("emergency").national_number_pattern
'112|911'
>>> metadata.number_desc("premiumRate").has_numbers
False
"""

from __future__ import annotations

import functools
import importlib
import re

from .models import CATEGORY_FIELDS, NO_NUMBERS_LENGTH, PhoneMetadata, PhoneNumberDesc

_REGION_PATTERN = re.compile(r"^[A-Z]{2}$")
AVAILABLE_REGIONS = frozenset({"DO"})


class UnknownRegionError(LookupError):
    """Raised when no short-number metadata exists for a region."""


@functools.cache
def load_short_number_metadata(region: str) -> PhoneMetadata:
    """Return the short-number metadata of ``region`` (ISO 3166 alpha-2).

    Raises
    ------
    UnknownRegionError
        If no generated table exists for ``region``.
    """
    code = region.strip().upper()
    if not _REGION_PATTERN.match(code) or code not in AVAILABLE_REGIONS:
        known = ", ".join(sorted(AVAILABLE_REGIONS))
        msg = f"No short-number metadata for region '{region}'. Known regions: {known}"
        raise UnknownRegionError(msg)
    module = importlib.import_module(f"{__name__}.data.region_{code}")
    return getattr(module, f"PHONE_METADATA_{code}")


__all__ = [
    "AVAILABLE_REGIONS",
    "CATEGORY_FIELDS",
    "NO_NUMBERS_LENGTH",
    "PhoneMetadata",
    "PhoneNumberDesc",
    "UnknownRegionError",
    "load_short_number_metadata",
]
