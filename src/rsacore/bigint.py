"""Big integer adapter: random generation and probabilistic primality over Python's native integers.

Python integers are already exact and arbitrary-precision, so this module only supplies what the language does not:
a bit-length-exact random draw from the system CSPRNG and a probable-prime test. The test is a composite of trial
division by cached small primes followed by a FIPS 186-5 Miller-Rabin test.

Typical usage example:

    candidate = random_bits(1024) | 1
    is_probable_prime(candidate)
    is_probable_prime(candidate, confidence=10)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import secrets

from rsacore.errors import InvalidParameter

_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0
_SMALL_PRIMES_BOUND: int = 10000


def random_bits(n: int) -> int:
    """Draw a uniformly random integer occupying exactly `n` bits.

    Args:
        n: The bit length of the result. Must be >= 1.

    Returns:
        A random integer `x` with `x.bit_length() == n`.

    Raises:
        InvalidParameter: If `n` is smaller than 1.
    """
    if n < 1:
        raise InvalidParameter("Bit length must be at least 1.")
    return secrets.randbits(n) | (1 << (n - 1))


def _sieve(n: int = _SMALL_PRIMES_BOUND) -> list[int]:
    """Implements the Sieve of Eratosthenes.

    Odd-only sieve, crossing off from the square of each prime and stopping at the root of `n`.

    Args:
        n: The number up to which to generate primes. Must be >= 0.

    Returns:
        A list of primes up to `n`.
    """
    if n < 2:
        return []
    i_size = (n - 1) // 2
    candidate: list[bool] = [True] * i_size
    for i in range(int(n**0.5) // 2):
        if candidate[i]:
            r = 2 * i + 3
            for j in range((r * r - 3) // 2, i_size, r):
                candidate[j] = False
    return [2] + [(no * 2 + 3) for no, ele in enumerate(candidate) if ele]


def get_small_primes(n: int = _SMALL_PRIMES_BOUND, change: bool = False) -> list[int]:
    """Get the small primes, generating them if necessary.

    The module-level list acts as a cache. It is rebuilt when a larger bound is requested, when `change` forces it
    or when it is still empty. The list is only ever rebound, never mutated in place.

    Args:
        n: The number up to which to generate primes. Must be >= 0.
        change: Whether to force a recomputation of primes. Defaults to False.

    Returns:
        List of primes in ascending order, covering at least up to `n` unless `change` is True.

    Raises:
        InvalidParameter: If `n` is negative.
    """
    if n < 0:
        raise InvalidParameter("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    if n > _SMALL_PRIMES_CAP or change or not _SMALL_PRIMES:
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def trial_division(no: int, n: int = _SMALL_PRIMES_BOUND) -> bool:
    """Check `no` against the known small primes.

    Args:
         no: The number to check.
         n: Bound of the small primes used, passed to `get_small_primes()`.

    Returns:
        False if `no` cannot be prime, True otherwise.
    """
    if no < 2:
        return False
    for prime in get_small_primes(n):
        if prime * prime > no:
            return True
        if no % prime == 0:
            return False
    return True


def miller_rabin(w: int, rounds: int) -> bool:
    """Perform the Miller-Rabin probabilistic primality test.

    Follows FIPS 186-5 Appendix B.3.1 with bases drawn from `secrets`.

    Args:
        w: Odd integer to be tested.
        rounds: Number of random bases to try.

    Returns:
        True if `w` is probably prime, False otherwise.
    """
    if w <= 3:
        return w in (2, 3)
    if w % 2 == 0:
        return False
    tw = w - 1
    a = (tw & -tw).bit_length() - 1
    m = tw >> a
    for _ in range(rounds):
        b = secrets.randbelow(w - 3) + 2
        z = pow(b, m, w)
        if z == 1 or z == tw:
            continue
        for _ in range(1, a):
            z = pow(z, 2, w)
            if z == tw:
                break
            if z == 1:
                return False
        else:
            return False
    return True


def default_rounds(bit_length: int) -> int:
    """Miller-Rabin round count for a candidate size, as per FIPS 186-5 Appendix C.1."""
    if bit_length <= 512:
        return 40
    if bit_length <= 1024:
        return 56
    if bit_length <= 1536:
        return 64
    if bit_length <= 2048:
        return 70
    return 74


def is_probable_prime(candidate: int, confidence: int | None = None) -> bool:
    """Composite primality test: trial division by the small primes, then Miller-Rabin.

    Args:
        candidate: The candidate prime to test.
        confidence: Number of Miller-Rabin rounds. Must be >= 1.
            If not provided uses `default_rounds()` for the candidate's size.

    Returns:
        True if `candidate` is probably prime, False otherwise.

    Raises:
        InvalidParameter: If `confidence` is smaller than 1.
    """
    if confidence is not None and confidence < 1:
        raise InvalidParameter("Confidence must be at least 1 round.")
    if candidate < 2:
        return False
    if not trial_division(candidate):
        return False
    if confidence is None:
        confidence = default_rounds(candidate.bit_length())
    return miller_rabin(candidate, confidence)
