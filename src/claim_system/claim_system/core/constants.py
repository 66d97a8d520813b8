"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

SYSTEM_ACTOR = "System"
AUTO_APPROVAL_ACTOR = "System Auto-Approval"

REPORT_TYPE_MONTHLY = "Monthly"

DEFAULT_MAXIMUM_AMOUNT = Decimal("50000")
DEFAULT_MONTHLY_LIMIT = Decimal("1000")

DEFAULT_MIN_HOURS = Decimal("0.1")
DEFAULT_MAX_HOURS = Decimal("200")
DEFAULT_MIN_RATE = Decimal("50")
DEFAULT_MAX_RATE = Decimal("1000")

DEFAULT_APPROVAL_MAX_HOURS = Decimal("160")
DEFAULT_APPROVAL_MAX_RATE = Decimal("500")
DEFAULT_APPROVAL_MAX_AMOUNT = Decimal("50000")
DEFAULT_AUTO_APPROVAL_CEILING = Decimal("10000")

DEFAULT_HISTORY_LIMIT = 50
DEFAULT_RECENT_CLAIMS = 5
