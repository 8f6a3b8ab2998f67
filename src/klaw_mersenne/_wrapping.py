"""32-bit wrapping arithmetic.

Python integers never overflow, so the seeding recurrence has to discard the
high bits explicitly to reproduce unsigned 32-bit behaviour.
"""

from __future__ import annotations

__all__ = ['MASK32', 'discard_multiply', 'wrapping_add']

MASK32 = 0xFFFFFFFF


def discard_multiply(a: int, b: int) -> int:
    """Multiply two 32-bit words, keeping only the low 32 bits of the product.

    The operands are split into 16-bit halves. The high x high partial product
    lands entirely above bit 32, so it is never computed.

    Args:
        a: Unsigned 32-bit word.
        b: Unsigned 32-bit word.

    Returns:
        ``(a * b) mod 2**32``.

    Example:
        >>> discard_multiply(0xFFFFFFFF, 2)
        4294967294
    """
    ah, al = (a >> 16) & 0xFFFF, a & 0xFFFF
    bh, bl = (b >> 16) & 0xFFFF, b & 0xFFFF

    cross = ah * bl + al * bh
    low = al * bl
    return (((cross << 16) & MASK32) + low) & MASK32


def wrapping_add(a: int, b: int) -> int:
    """Add two 32-bit words modulo 2**32."""
    return (a + b) & MASK32
