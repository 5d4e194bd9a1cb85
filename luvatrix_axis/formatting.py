from __future__ import annotations

from decimal import Decimal, InvalidOperation
import math


STEP_MULTIPLIERS = (1, 2, 5)


def decimal_step(index: int) -> tuple[int, Decimal]:
    """Decode a linear density index into ``(exponent, step)``.

    ``index = 3 * exponent + k`` selects ``STEP_MULTIPLIERS[k] * 10**exponent``;
    floor division keeps ``k`` in ``{0, 1, 2}`` for negative indices too.
    """
    exponent, k = divmod(int(index), 3)
    return exponent, Decimal(STEP_MULTIPLIERS[k]).scaleb(exponent)


def decimal_exponent(value: float) -> int:
    """``floor(log10(|value|))`` computed on the shortest decimal repr of ``value``."""
    if value == 0 or not math.isfinite(value):
        raise ValueError("value must be finite and non-zero")
    return Decimal(str(abs(float(value)))).adjusted()


def format_plain(value: Decimal, digits: int) -> str:
    q = value.quantize(Decimal(1).scaleb(-max(0, digits)))
    out = format(q, "f")
    if out.startswith("-") and q == 0:
        out = out[1:]
    return out


def format_scientific(value: Decimal, exponent: int, digits: int) -> str:
    mantissa = format_plain(value.scaleb(-exponent), digits)
    return f"{mantissa}e{exponent}"


def format_default(value: float) -> str:
    if not math.isfinite(value):
        return str(value)
    abs_v = abs(value)
    if abs_v != 0 and (abs_v >= 1e6 or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    try:
        q = d.quantize(Decimal("1e-6"))
    except InvalidOperation:
        q = d
    out = format(q, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out
