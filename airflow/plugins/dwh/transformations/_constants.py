"""
Shared business constants for silver layer conformance.

Every lookup table, default value and fixed offset used by the conformance
rules lives here, so the full data-quality policy can be audited in one place.

To extend:
- Add new country abbreviations to COUNTRY_MAPPING
- Add new gender spellings to ERP_GENDER_MAPPING
- Add new product line codes to PRODUCT_LINE_MAPPING
"""
from datetime import date

__all__ = [
    'UNKNOWN',
    'MARITAL_STATUS_MAPPING',
    'CRM_GENDER_MAPPING',
    'ERP_GENDER_MAPPING',
    'PRODUCT_LINE_MAPPING',
    'COUNTRY_MAPPING',
    'MARITAL_STATUSES',
    'GENDERS',
    'PRODUCT_LINES',
    'DEMOGRAPHIC_CODE_PREFIX',
    'LOCATION_CODE_SEPARATOR',
    'SOURCE_KEY_SEPARATOR',
    'CONFORMED_KEY_SEPARATOR',
    'CATEGORY_KEY_LENGTH',
    'SERIAL_NUMBER_OFFSET',
    'BIRTH_DATE_CUTOFF',
    'PACKED_DATE_LENGTH',
    'PACKED_DATE_FORMAT',
    'DEFAULT_PRODUCT_COST',
]

# =============================================================================
# DEFAULTS
# =============================================================================

# Single token for every unrecognized or missing enumerated value
UNKNOWN = 'Unknown'

# prd_cost NULL -> 0
DEFAULT_PRODUCT_COST = 0


# =============================================================================
# CODE EXPANSIONS
# =============================================================================
# Keys are compared after trimming and upper-casing the raw value.
# Anything not listed (including NULL) becomes UNKNOWN.

MARITAL_STATUS_MAPPING = {
    'S': 'Single',
    'M': 'Married',
}

# CRM only ever sends single-letter codes
CRM_GENDER_MAPPING = {
    'F': 'Female',
    'M': 'Male',
}

# ERP mixes single letters and full words
ERP_GENDER_MAPPING = {
    'F': 'Female',
    'FEMALE': 'Female',
    'M': 'Male',
    'MALE': 'Male',
}

PRODUCT_LINE_MAPPING = {
    'M': 'Mountain',
    'R': 'Road',
    'S': 'Other Sales',
    'T': 'Touring',
}

# Unlisted non-empty values pass through untouched (original case and spacing)
COUNTRY_MAPPING = {
    'DE': 'Germany',
    'US': 'United States',
    'USA': 'United States',
}

MARITAL_STATUSES = tuple(MARITAL_STATUS_MAPPING.values()) + (UNKNOWN,)
GENDERS = ('Female', 'Male', UNKNOWN)
PRODUCT_LINES = tuple(PRODUCT_LINE_MAPPING.values()) + (UNKNOWN,)


# =============================================================================
# KEY FORMATS
# =============================================================================

# ERP demographics prefix customer codes with this noise marker (NASAW00011000)
DEMOGRAPHIC_CODE_PREFIX = 'NAS'

# ERP location writes customer codes with a separator (AW-00011000)
LOCATION_CODE_SEPARATOR = '-'

# Category ids arrive as CO_RF in the ERP and are joined as CO-RF.
# Product and category keys must both go through normalize_category_key.
SOURCE_KEY_SEPARATOR = '_'
CONFORMED_KEY_SEPARATOR = '-'

# Composite product key CO-RF-FR-R92B-58:
#   characters 1-5 -> category key, character 6 -> separator, 7.. -> serial number
CATEGORY_KEY_LENGTH = 5
SERIAL_NUMBER_OFFSET = 6


# =============================================================================
# DATES
# =============================================================================

# Birth dates after this day are data-entry errors and are nulled
BIRTH_DATE_CUTOFF = date(2010, 1, 1)

# Sales dates arrive as integers like 20240315
PACKED_DATE_LENGTH = 8
PACKED_DATE_FORMAT = '%Y%m%d'
