"""Dataclasses describing short-number metadata for one region."""

from __future__ import annotations

import dataclasses as dc

NO_NUMBERS_LENGTH = -1
"""Sentinel possible length marking a category without any numbers."""

CATEGORY_FIELDS: dict[str, str] = {
    "generalDesc": "general_desc",
    "tollFree": "toll_free",
    "premiumRate": "premium_rate",
    "emergency": "emergency",
    "shortCode": "short_code",
    "standardRate": "standard_rate",
    "carrierSpecific": "carrier_specific",
    "smsServices": "sms_services",
}


@dc.dataclass(slots=True, frozen=True)
class PhoneNumberDesc:
    """Pattern and length constraints for one category of numbers.

    Attributes
    ----------
    national_number_pattern : str or None
        Regular expression the whole national number must match.
    example_number : str or None
        A number of this category, for documentation and tests.
    possible_length : tuple[int, ...]
        Allowed digit counts; ``(-1,)`` means the category has no numbers and
        an empty tuple means the lengths of the general description apply.
    """

    national_number_pattern: str | None = None
    example_number: str | None = None
    possible_length: tuple[int, ...] = ()

    @property
    def has_numbers(self) -> bool:
        """Return ``False`` for categories flagged as having no numbers."""
        return self.possible_length != (NO_NUMBERS_LENGTH,)


@dc.dataclass(slots=True, frozen=True)
class PhoneMetadata:
    """Short-number metadata of a region, one description per category."""

    id: str
    country_code: int = 0
    international_prefix: str = ""
    general_desc: PhoneNumberDesc = PhoneNumberDesc()
    toll_free: PhoneNumberDesc = PhoneNumberDesc()
    premium_rate: PhoneNumberDesc = PhoneNumberDesc()
    emergency: PhoneNumberDesc = PhoneNumberDesc()
    short_code: PhoneNumberDesc = PhoneNumberDesc()
    standard_rate: PhoneNumberDesc = PhoneNumberDesc()
    carrier_specific: PhoneNumberDesc = PhoneNumberDesc()
    sms_services: PhoneNumberDesc = PhoneNumberDesc()
    number_format: tuple[str, ...] = ()

    def number_desc(self, category: str) -> PhoneNumberDesc:
        """Return the description of ``category``.

        Both spellings are accepted: ``"tollFree"`` and ``"toll_free"``.

        Raises
        ------
        KeyError
            If ``category`` is not a known number category.
        """
        field = CATEGORY_FIELDS.get(category, category)
        if field not in CATEGORY_FIELDS.values():
            known = ", ".join(sorted(CATEGORY_FIELDS.values()))
            msg = f"Unknown number category '{category}'. Known categories: {known}"
            raise KeyError(msg)
        return getattr(self, field)

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly mapping using the upstream field names."""
        payload: dict[str, object] = {
            "id": self.id,
            "countryCode": self.country_code,
        }
        for upstream, field in CATEGORY_FIELDS.items():
            desc: PhoneNumberDesc = getattr(self, field)
            entry: dict[str, object] = {}
            if desc.national_number_pattern is not None:
                entry["pattern"] = desc.national_number_pattern
            if desc.example_number is not None:
                entry["example"] = desc.example_number
            if desc.possible_length:
                entry["posLength"] = list(desc.possible_length)
            payload[upstream] = entry
        payload["internationalPrefix"] = self.international_prefix
        payload["numberFormat"] = list(self.number_format)
        return payload


__all__ = [
    "CATEGORY_FIELDS",
    "NO_NUMBERS_LENGTH",
    "PhoneMetadata",
    "PhoneNumberDesc",
]
