"""Exact conversion between satoshis (smallest unit) and BTC (major unit).

Amounts never pass through binary floating point. Values are held as
``decimal.Decimal`` in a context sized to the operand, so the context
precision can't round them either.

Excess fractional digits on the major side are reduced to 8 with
ROUND_HALF_UP (half away from zero):

    >>> to_smallest_unit('0.000000015')
    2
    >>> to_major_unit_string(1)
    '0.00000001'
"""
from __future__ import annotations
import re
from decimal import Context, Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union
from .exceptions import ConversionError

DECIMALS = 8
COIN = 10 ** DECIMALS

_QUANT = Decimal(1).scaleb(-DECIMALS)
_INTEGER_RE = re.compile(r'^[+-]?\d+$')

SmallestAmount = Union[int, str]
MajorAmount = Union[str, int, float, Decimal]


def _context(value: Decimal) -> Context:
    prec = max(28, value.adjusted() + DECIMALS + 2)
    return Context(prec=prec, rounding=ROUND_HALF_UP, traps=[InvalidOperation])


def _smallest_to_decimal(smallest: SmallestAmount) -> Decimal:
    if isinstance(smallest, bool):
        raise ConversionError('bool is not an amount')
    if isinstance(smallest, int):
        return Decimal(smallest)
    if isinstance(smallest, str):
        text = smallest.strip()
        if not _INTEGER_RE.match(text):
            raise ConversionError(f'not an integer amount: {smallest!r}')
        return Decimal(text)
    raise ConversionError(f'unsupported amount type: {type(smallest).__name__}')


def _major_to_decimal(major: MajorAmount) -> Decimal:
    if isinstance(major, bool):
        raise ConversionError('bool is not an amount')
    if isinstance(major, Decimal):
        value = major
    elif isinstance(major, int):
        value = Decimal(major)
    elif isinstance(major, float):
        # shortest repr is the decimal the caller typed
        value = Decimal(repr(major))
    elif isinstance(major, str):
        try:
            value = Decimal(major.strip())
        except InvalidOperation as e:
            raise ConversionError(f'not a decimal amount: {major!r}') from e
    else:
        raise ConversionError(f'unsupported amount type: {type(major).__name__}')
    if not value.is_finite():
        raise ConversionError(f'amount out of range: {major!r}')
    return value


def to_major_unit(smallest: SmallestAmount) -> Decimal:
    """Satoshis -> BTC as a Decimal with exactly 8 fractional digits."""
    value = _smallest_to_decimal(smallest)
    ctx = _context(value)
    major = value.scaleb(-DECIMALS, context=ctx).quantize(_QUANT, context=ctx)
    if major.is_zero():
        major = major.copy_abs()
    return major


def to_major_unit_string(smallest: SmallestAmount) -> str:
    return format(to_major_unit(smallest), 'f')


def to_smallest_unit_string(major: MajorAmount) -> str:
    """BTC -> satoshis as an integer string.

    The amount is first fixed to 8 fractional digits, then scaled by 10^8
    with no fractional digits left over.
    """
    value = _major_to_decimal(major)
    ctx = _context(value)
    try:
        fixed = value.quantize(_QUANT, context=ctx)
        scaled = fixed.scaleb(DECIMALS, context=ctx).quantize(Decimal(1), context=ctx)
    except InvalidOperation as e:
        raise ConversionError(f'amount out of range: {major!r}') from e
    if scaled.is_zero():
        scaled = scaled.copy_abs()
    # formatted from the Decimal so int/str digit limits never apply
    return format(scaled, 'f')


def to_smallest_unit(major: MajorAmount) -> int:
    text = to_smallest_unit_string(major)
    try:
        return int(text)
    except ValueError as e:
        raise ConversionError(f'amount out of range: {major!r}') from e
