"""
duit — Malaysian Ringgit with GST/VAT

A minor-unit money primitive plus a ringgit value type that knows whether
the fixed 6% GST/VAT applies to it.

================================================================================
QUICK START
================================================================================

Amounts are always in sen (1 MYR = 100 sen).

    from duit import MYR

    # Price before tax
    price = MYR.before_vat(10000)
    price.amount_with_vat      # 10600
    price.vat_amount           # 600

    # Receipt total that already includes tax
    paid = MYR.after_vat(10600)
    paid.amount                # 10000

    # Split a bill three ways (shares sum to the amount paid)
    shares = MYR.before_vat(10000).allocate_with_vat_to(3)

    # Turn tax off or on again
    price.disable_vat().amount_with_vat   # 10000

The underlying primitive is available on its own:

    from duit import Money

    Money.sen(10000).allocate([70, 30])   # [70.00 MYR, 30.00 MYR]

================================================================================
"""

import logging

from .core import (
    Money,
    Currency,
    RoundingMode,
)
from .errors import (
    DuitError,
    InvalidArgumentError,
    UnsupportedOperationError,
)
from .myr import (
    MYR,
    VAT_RATE,
    VatMoney,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Core
    "Money",
    "Currency",
    "RoundingMode",
    # VAT
    "MYR",
    "VAT_RATE",
    "VatMoney",
    # Errors
    "DuitError",
    "InvalidArgumentError",
    "UnsupportedOperationError",
]
