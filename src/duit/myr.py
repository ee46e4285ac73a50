"""
myr.py — Malaysian Ringgit with GST/VAT

================================================================================
OVERVIEW
================================================================================

VatMoney (exported as MYR) wraps a Money primitive in ringgit and adds a
single switch: whether the fixed 6% GST/VAT applies.

    base amount (exclusive)  --*1.06-->  amount with VAT (inclusive)
            ^                                     |
            +------------------/1.06--------------+

Three ways to build one:

    MYR.without_vat(10000)   # base 100.00, VAT off
    MYR.before_vat(10000)    # base 100.00, VAT on  -> pays 106.00
    MYR.after_vat(10600)     # paid 106.00, VAT on  -> base 100.00

The base amount never changes after construction. The VAT flag is the only
mutable state; enable_vat()/disable_vat() flip it and return the same
instance so calls can be chained.

================================================================================
ROUNDING
================================================================================

All multiplications and divisions go through Money.multiply()/divide() with
exact half-up rounding on minor units. after_vat() is therefore lossy: converting
back with amount_with_vat lands within one sen of the original figure.

================================================================================
ALLOCATION
================================================================================

allocate_with_vat() and allocate_with_vat_to() split the amount the customer
actually pays (amount_with_vat), then rebuild each share with after_vat() so
every share carries its own base amount and VAT flag.

================================================================================
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Sequence, Union

from .core import Currency, Money, Ratio, RoundingMode
from .errors import UnsupportedOperationError

logger = logging.getLogger(__name__)

VAT_RATE = Decimal("6") / Decimal("100")

MoneyLike = Union["VatMoney", Money]


def _unwrap(value: object) -> object:
    if isinstance(value, VatMoney):
        return value.money
    return value


class VatMoney:
    """
    Ringgit amount with optional GST/VAT.

    Contract:
        amount is the tax-exclusive base in sen and never changes.
        vat_enabled decides whether VAT queries add the 6% on top.

    Delegation:
        Only the operations listed in FORWARDED (plus + - and comparisons)
        reach the wrapped Money. Anything else raises
        UnsupportedOperationError naming the operation.
    """

    CURRENCY = Currency.MYR
    VAT_RATE = VAT_RATE
    ROUNDING = RoundingMode.HALF_UP

    FORWARDED = frozenset({
        "minor_units",
        "currency",
        "major_units",
        "is_zero",
        "is_positive",
        "is_negative",
        "multiply",
        "divide",
        "allocate",
        "allocate_to",
    })

    __slots__ = ("_money", "_vat")

    def __init__(self, amount: int | str):
        self._money = Money.of_minor(amount, self.CURRENCY)
        self._vat = False

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def without_vat(cls, amount: int | str) -> VatMoney:
        """Base amount, VAT never applied unless enabled later."""
        return cls(amount)

    @classmethod
    def before_vat(cls, amount: int | str) -> VatMoney:
        """Base amount with VAT to be added on top."""
        return cls(amount).enable_vat()

    @classmethod
    def after_vat(cls, amount: int | str) -> VatMoney:
        """
        Amount that already includes VAT.

        The base is recovered by dividing by (1 + VAT_RATE) and rounding
        half-up to whole sen.
        """
        inclusive = Money.of_minor(amount, cls.CURRENCY)
        base = inclusive.divide(1 + cls.VAT_RATE, cls.ROUNDING)
        return cls(base.minor_units).enable_vat()

    # -------------------------------------------------------------------------
    # VAT switch
    # -------------------------------------------------------------------------

    def enable_vat(self) -> VatMoney:
        self._vat = True
        return self

    def disable_vat(self) -> VatMoney:
        self._vat = False
        return self

    @property
    def vat_enabled(self) -> bool:
        return self._vat

    # -------------------------------------------------------------------------
    # Amounts
    # -------------------------------------------------------------------------

    @property
    def money(self) -> Money:
        """The wrapped Money primitive (base amount)."""
        return self._money

    @property
    def amount(self) -> int:
        """Tax-exclusive base amount in sen."""
        return self._money.minor_units

    @property
    def vat_amount(self) -> int:
        """VAT in sen, 0 when VAT is disabled."""
        if not self._vat:
            return 0
        return self._money.multiply(self.VAT_RATE, self.ROUNDING).minor_units

    @property
    def amount_with_vat(self) -> int:
        """What the customer pays, in sen."""
        if not self._vat:
            return self._money.minor_units
        return self._money.multiply(1 + self.VAT_RATE, self.ROUNDING).minor_units

    # -------------------------------------------------------------------------
    # Allocation
    # -------------------------------------------------------------------------

    def allocate_with_vat(self, ratios: Sequence[Ratio]) -> list[VatMoney]:
        """Split the VAT-inclusive amount by ratios; each share is after_vat."""
        total = Money.of_minor(self.amount_with_vat, self.CURRENCY)
        shares = total.allocate(ratios)
        logger.debug("split %s with VAT across %d ratios", total, len(ratios))
        return [type(self).after_vat(share.minor_units) for share in shares]

    def allocate_with_vat_to(self, n: int) -> list[VatMoney]:
        """Split the VAT-inclusive amount among n targets; each share is after_vat."""
        total = Money.of_minor(self.amount_with_vat, self.CURRENCY)
        shares = total.allocate_to(n)
        logger.debug("split %s with VAT among %d targets", total, n)
        return [type(self).after_vat(share.minor_units) for share in shares]

    # -------------------------------------------------------------------------
    # Delegation to Money
    # -------------------------------------------------------------------------

    def __getattr__(self, name: str) -> Any:
        # only reached when normal lookup fails
        if name in type(self).FORWARDED:
            return getattr(self._money, name)
        raise UnsupportedOperationError(name)

    def __add__(self, other: MoneyLike) -> Money:
        return self._money + _unwrap(other)

    def __sub__(self, other: MoneyLike) -> Money:
        return self._money - _unwrap(other)

    def __radd__(self, other: MoneyLike) -> Money:
        return _unwrap(other) + self._money

    def __rsub__(self, other: MoneyLike) -> Money:
        return _unwrap(other) - self._money

    def __eq__(self, other: object) -> bool:
        other = _unwrap(other)
        if not isinstance(other, Money):
            return NotImplemented
        return self._money == other

    def __lt__(self, other: MoneyLike) -> bool:
        return self._money < _unwrap(other)

    def __le__(self, other: MoneyLike) -> bool:
        return self._money <= _unwrap(other)

    def __gt__(self, other: MoneyLike) -> bool:
        return self._money > _unwrap(other)

    def __ge__(self, other: MoneyLike) -> bool:
        return self._money >= _unwrap(other)

    def __hash__(self) -> int:
        return hash(self._money)

    def __repr__(self) -> str:
        return f"VatMoney({self._money}, vat={'on' if self._vat else 'off'})"

    def __str__(self) -> str:
        return str(self._money)


MYR = VatMoney
