"""
Single source of truth for fixed-point amount arithmetic.

Every on-chain amount is an unsigned integer scaled by 10**decimals. This
module is the ONLY place where amounts are scaled, formatted, subtracted or
divided. The path evaluator, decision engine, report and opportunity log
MUST go through these helpers.

Conversion policy:
- Human decimals enter the core only through to_units(), at config load time
- Amounts returned by quoters are used as integers end-to-end, never floats
- Amounts are bounded to uint256; signed results are plain Python ints
- Scales are never mixed implicitly: operations on two amounts check decimals
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from functools import total_ordering
from typing import Optional, Union

from .exceptions import AmountError

UINT256_MAX = 2**256 - 1

# Display precision for implied exchange rates
RATIO_DECIMALS = 18

NumberLike = Union[Decimal, str, int, float]


# ============================================================================
# Conversion helpers
# ============================================================================


def _check_decimals(decimals: int) -> None:
    if isinstance(decimals, bool) or not isinstance(decimals, int) or decimals < 0:
        raise AmountError(f"decimals must be a non-negative int, got {decimals!r}")


def to_units(value: NumberLike, decimals: int) -> int:
    """
    Convert a human decimal value to an integer amount at the given scale.

    The value is multiplied by 10**decimals and rounded to the nearest
    integer (halves round away from zero). Floats are routed through their
    shortest repr so 0.1 becomes exactly Decimal("0.1").

    Args:
        value: Human-entered amount (e.g., "10000", Decimal("0.02"))
        decimals: Token decimal places (e.g., 6 for USDC)

    Returns:
        Integer amount in native units

    Raises:
        AmountError: If value is negative, not finite, or exceeds uint256

    Example:
        >>> to_units("10010.5", 6)
        10010500000
    """
    _check_decimals(decimals)

    try:
        if isinstance(value, float):
            value_d = Decimal(str(value))
        else:
            value_d = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise AmountError(f"Cannot parse amount {value!r}: {e}") from e

    if not value_d.is_finite():
        raise AmountError(f"Amount must be finite, got {value!r}")
    if value_d < 0:
        raise AmountError(f"Amount must be non-negative, got {value!r}")

    with localcontext() as ctx:
        ctx.prec = 100
        scaled = (value_d * (Decimal(10) ** decimals)).quantize(
            Decimal(1), rounding=ROUND_HALF_UP
        )

    units = int(scaled)
    if units > UINT256_MAX:
        raise AmountError(
            f"Amount {value!r} at {decimals} decimals exceeds uint256",
            details={"units": units, "decimals": decimals},
        )
    return units


def from_units(amount: int, decimals: int) -> str:
    """
    Format an integer amount as a plain decimal string.

    The whole part comes from integer division, the fractional part from the
    remainder left-padded to `decimals` digits with trailing zeros trimmed.
    No sign is ever produced; callers render negatives themselves.

    Example:
        >>> from_units(10_460_000, 6)
        '10.46'
        >>> from_units(5, 0)
        '5'
    """
    _check_decimals(decimals)
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise AmountError(f"amount must be an int, got {type(amount).__name__}")
    if amount < 0:
        raise AmountError(f"amount must be non-negative, got {amount}")

    if decimals == 0:
        return str(amount)

    whole, frac = divmod(amount, 10**decimals)
    frac_str = str(frac).rjust(decimals, "0").rstrip("0")
    if not frac_str:
        return str(whole)
    return f"{whole}.{frac_str}"


# ============================================================================
# Amount value types
# ============================================================================


@dataclass(frozen=True)
class TokenAmount:
    """
    Non-negative fixed-point amount paired with its decimal-place count.

    Attributes:
        raw: Integer amount in native units (0 <= raw <= 2**256 - 1)
        decimals: Scale of `raw` (6 for USDC, 18 for WETH)
    """

    raw: int
    decimals: int

    def __post_init__(self):
        _check_decimals(self.decimals)
        if isinstance(self.raw, bool) or not isinstance(self.raw, int):
            raise AmountError(f"raw amount must be an int, got {type(self.raw).__name__}")
        if self.raw < 0:
            raise AmountError(f"raw amount must be non-negative, got {self.raw}")
        if self.raw > UINT256_MAX:
            raise AmountError(f"raw amount exceeds uint256: {self.raw}")

    @classmethod
    def from_decimal(cls, value: NumberLike, decimals: int) -> "TokenAmount":
        """Build an amount from a human-entered decimal (config boundary only)."""
        return cls(to_units(value, decimals), decimals)

    @classmethod
    def zero(cls, decimals: int) -> "TokenAmount":
        return cls(0, decimals)

    def times(self, factor: int) -> "TokenAmount":
        """Multiply by a non-negative integer factor, keeping the scale."""
        if factor < 0:
            raise AmountError(f"factor must be non-negative, got {factor}")
        return TokenAmount(self.raw * factor, self.decimals)

    def __str__(self) -> str:
        return from_units(self.raw, self.decimals)


@total_ordering
@dataclass(frozen=True)
class SignedAmount:
    """
    Signed fixed-point amount, used for profit/loss that may be negative.

    Comparisons require both operands to share the same scale.
    """

    value: int
    decimals: int

    def __post_init__(self):
        _check_decimals(self.decimals)

    @property
    def is_negative(self) -> bool:
        return self.value < 0

    @property
    def magnitude(self) -> int:
        return abs(self.value)

    def _other_value(self, other) -> int:
        if isinstance(other, SignedAmount):
            other_decimals, other_value = other.decimals, other.value
        elif isinstance(other, TokenAmount):
            other_decimals, other_value = other.decimals, other.raw
        else:
            return NotImplemented
        if other_decimals != self.decimals:
            raise AmountError(
                f"Cannot compare amounts of different scales: "
                f"{self.decimals} vs {other_decimals} decimals"
            )
        return other_value

    def __lt__(self, other) -> bool:
        other_value = self._other_value(other)
        if other_value is NotImplemented:
            return NotImplemented
        return self.value < other_value

    def exceeds(self, threshold: Union["SignedAmount", TokenAmount]) -> bool:
        """True only if this amount is strictly greater than the threshold."""
        other_value = self._other_value(threshold)
        if other_value is NotImplemented:
            raise TypeError(f"Cannot compare SignedAmount with {type(threshold).__name__}")
        return self.value > other_value

    def __str__(self) -> str:
        formatted = from_units(self.magnitude, self.decimals)
        return f"-{formatted}" if self.is_negative else formatted


# ============================================================================
# Arithmetic
# ============================================================================


def signed_diff(
    back: TokenAmount, start: TokenAmount, cost: Optional[TokenAmount] = None
) -> SignedAmount:
    """
    Compute back - start - cost as a signed amount.

    All operands must share one scale. The result is never clamped: a loss
    stays negative.

    Example:
        >>> usdc = 6
        >>> str(signed_diff(TokenAmount(10_010_500_000, usdc),
        ...                 TokenAmount(10_000_000_000, usdc),
        ...                 TokenAmount(40_000, usdc)))
        '10.46'
    """
    if cost is None:
        cost = TokenAmount.zero(back.decimals)

    scales = {back.decimals, start.decimals, cost.decimals}
    if len(scales) != 1:
        raise AmountError(
            "signed_diff operands must share one scale, got decimals "
            f"back={back.decimals} start={start.decimals} cost={cost.decimals}"
        )

    return SignedAmount(back.raw - start.raw - cost.raw, back.decimals)


def ratio_string(
    num: TokenAmount, den: TokenAmount, target_decimals: int = RATIO_DECIMALS
) -> str:
    """
    Display-only exchange rate num/den at `target_decimals` precision.

    The scale exponent is target + den.decimals - num.decimals. When it is
    negative the numerator is divided by the missing power of ten together
    with the denominator, so the result keeps the right magnitude; the single
    integer division truncates toward zero.

    Returns:
        Decimal string, or "NA" when the denominator is zero
    """
    if den.raw == 0:
        return "NA"

    exp = target_decimals + den.decimals - num.decimals
    if exp >= 0:
        quotient = (num.raw * 10**exp) // den.raw
    else:
        quotient = num.raw // (den.raw * 10 ** (-exp))

    return from_units(quotient, target_decimals)
