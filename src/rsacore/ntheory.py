"""Number-theoretic kernel behind RSA key generation and the RSA primitive.

Pure functions over Python integers: greatest common divisor, least common multiple, the extended Euclidean
algorithm, modular inversion, the two totient flavours and square-and-multiply modular exponentiation.

Typical usage example:

    t = reduced_totient(61, 53)
    d = mod_inverse(17, t)
    c = mod_pow(65, 17, 3233)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from typing import Callable

from rsacore.errors import InvalidParameter
from rsacore.errors import NoInverseExists


def gcd(a: int, b: int) -> int:
    """Greatest common divisor by the Euclidean algorithm.

    Args:
        a: The first integer.
        b: The second integer.

    Returns:
        The non-negative gcd. `gcd(a, 0) == abs(a)`.
    """
    a, b = abs(a), abs(b)
    while b:
        a, b = b, a % b
    return a


def lcm(a: int, b: int) -> int:
    """Least common multiple, `|a*b| / gcd(a, b)`. Zero if either argument is zero."""
    if a == 0 or b == 0:
        return 0
    return abs(a * b) // gcd(a, b)


def eea(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that a*s0 + b*t0 = r0 = gcd(a, b).

    Args:
        a: The first natural number.
        b: The second natural number.

    Returns:
        Greatest common divisor of two integers, as well as the Bezout coefficients.
    """
    r0, r1 = a, b
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return r0, s0, t0


def mod_inverse(e: int, t: int) -> int:
    """Modular multiplicative inverse of `e` modulo `t`.

    Args:
        e: The value to invert.
        t: The modulus. Must be >= 1.

    Returns:
        `x` in `[0, t)` with `(e * x) % t == 1` (or 0 when `t == 1`).

    Raises:
        InvalidParameter: If `t` is smaller than 1.
        NoInverseExists: If `e` and `t` are not coprime.
    """
    if t < 1:
        raise InvalidParameter("Modulus must be at least 1.")
    if t == 1:
        return 0
    r, s, _ = eea(e % t, t)
    if r != 1:
        raise NoInverseExists(f"No inverse of {e} modulo {t}: gcd is {r}.")
    return s % t


def euler_totient(p: int, q: int) -> int:
    """Euler's totient of `p*q` for distinct primes, `(p-1)(q-1)`."""
    return (p - 1) * (q - 1)


def reduced_totient(p: int, q: int) -> int:
    """Carmichael's reduced totient of `p*q` for distinct primes, `lcm(p-1, q-1)`."""
    return lcm(p - 1, q - 1)


TOTIENTS: dict[str, Callable[[int, int], int]] = {
    "carmichael": reduced_totient,
    "euler": euler_totient,
}


def totient(p: int, q: int, mode: str = "carmichael") -> int:
    """Totient of `p*q` under the named construction.

    Args:
        p: First prime.
        q: Second prime.
        mode: Key of `TOTIENTS`. Defaults to the Carmichael reduced totient.

    Returns:
        The totient.

    Raises:
        InvalidParameter: If `mode` is not a known construction.
    """
    try:
        fun = TOTIENTS[mode]
    except KeyError:
        raise InvalidParameter(f"Unknown totient mode {mode!r}, expected one of {sorted(TOTIENTS)}.") from None
    return fun(p, q)


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Modular exponentiation by left-to-right square-and-multiply.

    Every exponent bit costs one squaring, followed by a multiplication when the bit is set.

    Args:
        base: The base. Reduced modulo `modulus` first, so negatives are accepted.
        exponent: The exponent. Must be >= 0.
        modulus: The modulus. Must be >= 1.

    Returns:
        `base**exponent % modulus`. Always 0 for `modulus == 1`, otherwise 1 for `exponent == 0`.

    Raises:
        InvalidParameter: If `exponent` is negative or `modulus` is smaller than 1.
    """
    if modulus < 1:
        raise InvalidParameter("Modulus must be at least 1.")
    if exponent < 0:
        raise InvalidParameter("Exponent must be non-negative.")
    if modulus == 1:
        return 0
    base %= modulus
    result = 1
    for i in range(exponent.bit_length() - 1, -1, -1):
        result = result * result % modulus
        if (exponent >> i) & 1:
            result = result * base % modulus
    return result
