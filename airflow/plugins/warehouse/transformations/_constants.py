"""
Shared business constants for silver layer transformations.

This module contains the code-to-label lookup tables used to standardize
CRM and ERP source values. The tables are read-only and are passed into
the normalizers as arguments, so a caller can substitute its own mapping.

To extend:
- Add new codes to the relevant mapping (keys are trimmed, upper-case codes)
- Add new country aliases to COUNTRY_MAPPING
"""
from types import MappingProxyType

__all__ = [
    'NOT_AVAILABLE',
    'MARITAL_STATUS_MAPPING',
    'CRM_GENDER_MAPPING',
    'PRODUCT_LINE_MAPPING',
    'ERP_GENDER_MAPPING',
    'COUNTRY_MAPPING',
    'ERP_CUSTOMER_ID_PREFIX',
    'LOCATION_ID_SEPARATOR',
    'CATEGORY_ID_LENGTH',
    'CATEGORY_ID_SEPARATOR',
    'PACKED_DATE_FORMAT',
    'PACKED_DATE_LENGTH',
]

# Sentinel for unmapped or missing codes
NOT_AVAILABLE = 'n/a'


# =============================================================================
# CRM MAPPINGS
# =============================================================================

# Format: {code: label}
MARITAL_STATUS_MAPPING = MappingProxyType({
    'M': 'Married',
    'S': 'Single',
})

CRM_GENDER_MAPPING = MappingProxyType({
    'F': 'Female',
    'M': 'Male',
})

PRODUCT_LINE_MAPPING = MappingProxyType({
    'M': 'Mountain',
    'R': 'Road',
    'S': 'other Sales',
    'T': 'Touring',
})


# =============================================================================
# ERP MAPPINGS
# =============================================================================

ERP_GENDER_MAPPING = MappingProxyType({
    'F': 'Female',
    'FEMALE': 'Female',
    'M': 'Male',
    'MALE': 'Male',
})

COUNTRY_MAPPING = MappingProxyType({
    'DE': 'Germany',
    'US': 'United States',
    'USA': 'United States',
})


# =============================================================================
# KEY LAYOUTS
# =============================================================================

# ERP customer ids carry this prefix in front of the CRM customer key
ERP_CUSTOMER_ID_PREFIX = 'NAS'

# ERP location ids embed this separator (AW-00011000 -> AW00011000)
LOCATION_ID_SEPARATOR = '-'

# CRM product keys start with the category id (CO-RF-FR-R92B-58 -> CO_RF)
CATEGORY_ID_LENGTH = 5
CATEGORY_ID_SEPARATOR = '-'

# CRM sales dates are stored as YYYYMMDD integers
PACKED_DATE_FORMAT = '%Y%m%d'
PACKED_DATE_LENGTH = 8
