"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from storefront.domain.exceptions import InvalidQuantityError, ValidationError

DEFAULT_CURRENCY = "INR"

_CENTS = Decimal("0.01")

_SYMBOLS = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Decimal-based so cart totals add up to the cent.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int) or isinstance(factor, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    def apply_rate(self, rate: TaxRate) -> Money:
        """Return ``self * rate``, rounded half-up to whole cents."""
        portion = (self.amount * rate.value).quantize(_CENTS, rounding=ROUND_HALF_UP)
        return Money(portion, self.currency)

    def rounded(self) -> Money:
        return Money(self.amount.quantize(_CENTS, rounding=ROUND_HALF_UP), self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        symbol = _SYMBOLS.get(self.currency)
        if symbol is None:
            return f"{self.amount:.2f} {self.currency}"
        return f"{symbol}{self.amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal("0.00"), currency)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that a cart line can never hold zero or
    negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise InvalidQuantityError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise InvalidQuantityError("Quantity must be positive")

    def __add__(self, other: Quantity) -> Quantity:
        return Quantity(self.value + other.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TaxRate:
    """A fixed tax fraction applied to the cart subtotal (0.18 == 18% GST)."""

    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise ValidationError(
                f"Tax rate must be a Decimal, got {type(self.value).__name__}"
            )
        if not Decimal("0") <= self.value < Decimal("1"):
            raise ValidationError(f"Tax rate must be in [0, 1), got {self.value}")

    def __str__(self) -> str:
        return f"{(self.value * 100).normalize():f}%"

    @staticmethod
    def of(rate: str | float | int | Decimal) -> TaxRate:
        try:
            return TaxRate(Decimal(str(rate)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid tax rate: {rate!r}") from exc

    @staticmethod
    def none() -> TaxRate:
        return TaxRate(Decimal("0"))
