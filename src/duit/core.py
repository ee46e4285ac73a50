"""
core.py — Primitiva monetaria in minor unit

================================================================================
PRINCIPI
================================================================================

1. RAPPRESENTAZIONE INTERNA
   Interi in minor unit (sen per MYR, cents per USD).
   Moltiplicazioni e divisioni sono esatte (Fraction), mai float,
   senza limite di cifre.

2. TYPE SAFETY
   Operazioni tra valute diverse sollevano TypeError.
   Float e bool non sono importi validi.

3. IMMUTABILITA
   Frozen dataclass. Ogni operazione restituisce una nuova istanza.

4. ARROTONDAMENTO ESPLICITO
   multiply() e divide() arrotondano una sola volta, alla fine,
   con la strategia scelta dal chiamante (default HALF_UP).

5. ALLOCAZIONE ESATTA
   allocate() e allocate_to() garantiscono sum(parts) == self.

================================================================================
"""

from __future__ import annotations

import logging
import math
import numbers
import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Sequence, Union

from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

Ratio = Union[int, float, Decimal, Fraction]


# ==============================================================================
# VALUTE (ISO 4217)
# ==============================================================================

class Currency(Enum):
    """
    Valute supportate con relative precision (decimali della minor unit).

    MYR è la valuta di riferimento del package; le altre restano
    per mantenere la primitiva generica.
    """
    MYR = ("MYR", 2)   # Ringgit: 1 MYR = 100 sen
    SGD = ("SGD", 2)   # Singapore Dollar: 1 SGD = 100 cents
    USD = ("USD", 2)   # US Dollar: 1 USD = 100 cents
    JPY = ("JPY", 0)   # Japanese Yen: no minor unit

    def __init__(self, code: str, decimals: int):
        self._code = code
        self._decimals = decimals

    @property
    def code(self) -> str:
        return self._code

    @property
    def decimals(self) -> int:
        return self._decimals

    @property
    def multiplier(self) -> int:
        """Fattore di conversione major -> minor unit."""
        return 10 ** self._decimals


# ==============================================================================
# ARROTONDAMENTO
# ==============================================================================

class RoundingMode(Enum):
    """
    Strategie di arrotondamento.

    - HALF_UP: arrotondamento commerciale (0.5 -> 1), default del package
    - HALF_EVEN: banker's rounding
    - DOWN: verso zero
    - UP: via da zero
    - HALF_DOWN: 0.5 -> 0

    Le metà sono simmetriche rispetto allo zero: -2.5 HALF_UP -> -3.
    """
    HALF_UP = "half_up"
    HALF_EVEN = "half_even"
    DOWN = "down"
    UP = "up"
    HALF_DOWN = "half_down"


def _round_fraction(value: Fraction, mode: RoundingMode) -> int:
    """
    Arrotonda una Fraction a intero con la strategia indicata.

    Solo aritmetica intera: nessun limite di precisione.
    """
    sign = -1 if value < 0 else 1
    magnitude = abs(value)
    whole, rest = divmod(magnitude.numerator, magnitude.denominator)
    twice, den = 2 * rest, magnitude.denominator

    if mode is RoundingMode.DOWN:
        bump = False
    elif mode is RoundingMode.UP:
        bump = rest > 0
    elif mode is RoundingMode.HALF_UP:
        bump = twice >= den
    elif mode is RoundingMode.HALF_DOWN:
        bump = twice > den
    elif mode is RoundingMode.HALF_EVEN:
        bump = twice > den or (twice == den and whole % 2 == 1)
    else:
        raise ValueError(f"Unknown rounding mode: {mode}")

    return sign * (whole + (1 if bump else 0))


def _to_fraction(value: Ratio | str, what: str) -> Fraction:
    """
    Converte un valore numerico in Fraction esatta.

    float e str passano dalla forma decimale ("1.06" -> 53/50),
    Decimal e Fraction sono convertiti senza perdita.
    """
    if isinstance(value, bool):
        raise TypeError(f"{what} non può essere bool")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise InvalidArgumentError(f"{what} deve essere finito: {value!r}")
        return Fraction(value)
    if isinstance(value, numbers.Rational):
        return Fraction(value.numerator, value.denominator)
    if isinstance(value, (numbers.Real, str)):
        try:
            return Fraction(str(value).strip())
        except (ValueError, ZeroDivisionError) as e:
            raise InvalidArgumentError(f"{what} non valido: {value!r}") from e
    raise TypeError(f"{what} deve essere numerico, non {type(value).__name__}")


_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")


def _to_minor_units(value: int | str) -> int:
    """
    Accetta int o stringa intera ("10600", "-5").

    I float sono rifiutati: la conversione deve essere esplicita.
    """
    if isinstance(value, bool):
        raise TypeError("Importo bool non permesso")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if not _INTEGER_PATTERN.match(stripped):
            raise InvalidArgumentError(f"Importo non intero: {value!r}")
        return int(stripped)
    raise TypeError(
        f"Importo deve essere int o stringa intera, non {type(value).__name__}. "
        f"Usa Money.multiply()/divide() per valori frazionari."
    )


# ==============================================================================
# MONEY
# ==============================================================================

@dataclass(frozen=True, slots=True, order=False)
class Money:
    """
    Importo monetario in minor unit.

    INVARIANTI:
    1. _minor_units è sempre int
    2. _currency è sempre Currency
    3. Operazioni tra valute diverse sollevano TypeError
    4. allocate() e allocate_to() garantiscono sum(parts) == self

    USAGE:
        total = Money.sen(10600)
        net = total.divide("1.06")          # 100.00 MYR
        parts = total.allocate_to(3)        # [3534, 3533, 3533]
    """
    _minor_units: int
    _currency: Currency

    # Limite superiore per allocate()/allocate_to()
    MAX_DISTRIBUTION_PARTS = 10_000

    # -------------------------------------------------------------------------
    # Costruttori
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, major_units: int, currency: Currency) -> Money:
        """Costruttore da major units (ringgit, dollari). Solo interi."""
        return cls(
            _minor_units=_to_minor_units(major_units) * currency.multiplier,
            _currency=currency,
        )

    @classmethod
    def of_minor(cls, minor_units: int | str, currency: Currency) -> Money:
        """
        Costruttore da minor units (sen, cents).
        Accetta anche stringhe intere, come "10600".
        """
        return cls(_minor_units=_to_minor_units(minor_units), _currency=currency)

    @classmethod
    def zero(cls, currency: Currency) -> Money:
        """Zero per una data valuta. Utile come valore iniziale per sum()."""
        return cls(_minor_units=0, _currency=currency)

    @classmethod
    def ringgit(cls, value: int) -> Money:
        return cls.of(value, Currency.MYR)

    @classmethod
    def sen(cls, sen: int | str) -> Money:
        return cls.of_minor(sen, Currency.MYR)

    # -------------------------------------------------------------------------
    # Moltiplicazione e divisione (Fraction, arrotondamento unico)
    # -------------------------------------------------------------------------

    def multiply(
        self,
        factor: Ratio | str,
        rounding: RoundingMode = RoundingMode.HALF_UP,
    ) -> Money:
        """
        Moltiplica per un fattore arbitrario (es. Decimal("1.06")).

        Il prodotto è esatto (Fraction, nessun limite di cifre);
        l'arrotondamento avviene QUI, una sola volta.
        """
        product = self._minor_units * _to_fraction(factor, "factor")
        return Money.of_minor(_round_fraction(product, rounding), self._currency)

    def divide(
        self,
        divisor: Ratio | str,
        rounding: RoundingMode = RoundingMode.HALF_UP,
    ) -> Money:
        """
        Divide per un fattore arbitrario (es. Decimal("1.06") per lo scorporo).

        Raises:
            InvalidArgumentError: se divisor == 0
        """
        d = _to_fraction(divisor, "divisor")
        if d == 0:
            raise InvalidArgumentError("Divisione per zero")
        quotient = self._minor_units / d
        return Money.of_minor(_round_fraction(quotient, rounding), self._currency)

    # -------------------------------------------------------------------------
    # Allocazione
    # -------------------------------------------------------------------------

    def allocate(self, ratios: Sequence[Ratio]) -> list[Money]:
        """
        Distribuisce l'importo proporzionalmente ai ratios.

        Algoritmo: Largest Remainder Method (Hare-Niemeyer).
        1. Ogni parte riceve floor(importo * ratio / totale)
        2. Il residuo (0 <= r < len(ratios)) va, un'unità ciascuna,
           alle parti con la frazione scartata più grande
        3. A parità di frazione vince la parte che viene prima

        INVARIANTE: sum(result) == self

        Raises:
            InvalidArgumentError: ratios vuoti, negativi, a somma zero
                o oltre MAX_DISTRIBUTION_PARTS
        """
        if isinstance(ratios, (str, bytes)) or not isinstance(ratios, Sequence):
            raise InvalidArgumentError("ratios deve essere una sequenza di numeri")
        if not ratios:
            raise InvalidArgumentError("ratios non può essere vuoto")
        if len(ratios) > self.MAX_DISTRIBUTION_PARTS:
            raise InvalidArgumentError(
                f"ratios supera il limite di {self.MAX_DISTRIBUTION_PARTS}"
            )

        weights = [_to_fraction(r, "ratio") for r in ratios]
        if any(w < 0 for w in weights):
            raise InvalidArgumentError("ratios non può contenere valori negativi")

        total_weight = sum(weights, Fraction(0))
        if total_weight == 0:
            raise InvalidArgumentError("somma dei ratios non può essere 0")

        exact = [self._minor_units * w / total_weight for w in weights]
        floors = [math.floor(e) for e in exact]

        remainder = self._minor_units - sum(floors)
        by_fraction = sorted(
            range(len(exact)),
            key=lambda i: (-(exact[i] - floors[i]), i),
        )
        for i in by_fraction[:remainder]:
            floors[i] += 1

        logger.debug(
            "allocated %s across %d ratios (remainder %d)",
            self, len(weights), remainder,
        )
        return [Money.of_minor(f, self._currency) for f in floors]

    def allocate_to(self, n: int) -> list[Money]:
        """
        Distribuisce l'importo in n parti con somma ESATTA.

        Le parti differiscono al più di 1 minor unit; l'unità extra
        va alle prime parti.

        Raises:
            InvalidArgumentError: se n non è un int positivo
                o supera MAX_DISTRIBUTION_PARTS
        """
        if isinstance(n, bool) or not isinstance(n, int):
            raise InvalidArgumentError(
                f"Il numero di parti deve essere un intero, ricevuto: {n!r}"
            )
        if n <= 0:
            raise InvalidArgumentError(f"n deve essere > 0, ricevuto: {n}")
        if n > self.MAX_DISTRIBUTION_PARTS:
            raise InvalidArgumentError(
                f"n supera il limite di {self.MAX_DISTRIBUTION_PARTS}"
            )

        # floor division: il resto è sempre in [0, n), anche per importi negativi
        base, remainder = divmod(self._minor_units, n)

        logger.debug("allocated %s to %d parts", self, n)
        return [
            Money.of_minor(base + (1 if i < remainder else 0), self._currency)
            for i in range(n)
        ]

    # -------------------------------------------------------------------------
    # Operazioni aritmetiche (type-safe)
    # -------------------------------------------------------------------------

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, "+")
        return Money.of_minor(self._minor_units + other._minor_units, self._currency)

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, "-")
        return Money.of_minor(self._minor_units - other._minor_units, self._currency)

    def __neg__(self) -> Money:
        return Money.of_minor(-self._minor_units, self._currency)

    def __abs__(self) -> Money:
        return Money.of_minor(abs(self._minor_units), self._currency)

    def __mul__(self, quantity: int) -> Money:
        """
        Moltiplicazione per intero (quantità).

        Per fattori decimali, usare multiply().
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise TypeError(
                f"Money può essere moltiplicato solo per int (quantità), "
                f"non {type(quantity).__name__}. Per fattori decimali, usa multiply()."
            )
        return Money.of_minor(self._minor_units * quantity, self._currency)

    def __rmul__(self, quantity: int) -> Money:
        return self.__mul__(quantity)

    # -------------------------------------------------------------------------
    # Comparazione
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Money):
            return (
                self._minor_units == other._minor_units
                and self._currency == other._currency
            )
        return NotImplemented

    def __lt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, "<")
        return self._minor_units < other._minor_units

    def __le__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, "<=")
        return self._minor_units <= other._minor_units

    def __gt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, ">")
        return self._minor_units > other._minor_units

    def __ge__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_same_currency(other, ">=")
        return self._minor_units >= other._minor_units

    def __hash__(self) -> int:
        return hash((self._minor_units, self._currency))

    def _check_same_currency(self, other: Money, op: str) -> None:
        if self._currency != other._currency:
            raise TypeError(
                f"Valute diverse: {self._currency.code} {op} {other._currency.code}. "
                f"Converti esplicitamente prima."
            )

    # -------------------------------------------------------------------------
    # Proprietà e output
    # -------------------------------------------------------------------------

    @property
    def minor_units(self) -> int:
        """Valore in minor units (sen, cents)."""
        return self._minor_units

    @property
    def currency(self) -> Currency:
        return self._currency

    @property
    def major_units(self) -> float:
        """
        Valore in major units.

        ATTENZIONE: restituisce float, usare SOLO per display.
        """
        return self._minor_units / self._currency.multiplier

    def is_positive(self) -> bool:
        return self._minor_units > 0

    def is_negative(self) -> bool:
        return self._minor_units < 0

    def is_zero(self) -> bool:
        return self._minor_units == 0

    def __repr__(self) -> str:
        sign = "-" if self._minor_units < 0 else ""
        abs_minor = abs(self._minor_units)
        decimals = self._currency.decimals

        if decimals == 0:
            return f"{sign}{abs_minor} {self._currency.code}"

        major, minor = divmod(abs_minor, self._currency.multiplier)
        return f"{sign}{major}.{minor:0{decimals}d} {self._currency.code}"

    def __str__(self) -> str:
        return self.__repr__()
