"""Auto-generated short-number metadata for region DO. Do not edit."""

from coursepages.phonemetadata.models import PhoneMetadata, PhoneNumberDesc

PHONE_METADATA_DO = PhoneMetadata(
    id="DO",
    country_code=0,
    international_prefix="",
    general_desc=PhoneNumberDesc(
        national_number_pattern="[19]\\d\\d",
        possible_length=(3,),
    ),
    toll_free=PhoneNumberDesc(
        national_number_pattern="112|9(?:11|88)",
        example_number="112",
    ),
    premium_rate=PhoneNumberDesc(possible_length=(-1,)),
    emergency=PhoneNumberDesc(
        national_number_pattern="112|911",
        example_number="112",
    ),
    short_code=PhoneNumberDesc(
        national_number_pattern="112|9(?:11|88)",
        example_number="112",
    ),
    standard_rate=PhoneNumberDesc(possible_length=(-1,)),
    carrier_specific=PhoneNumberDesc(possible_length=(-1,)),
    sms_services=PhoneNumberDesc(possible_length=(-1,)),
    number_format=(),
)
