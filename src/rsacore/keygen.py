"""Core Key Generation Utility, mainly focusing on the generation of random large primes.

Generates IFC key pairs roughly along FIPS 186-5: probable primes of half the modulus size, a minimum distance
between the two primes, the reduced totient and a public exponent of 65537 unless told otherwise. Every search loop
is bounded and reports exhaustion with `KeyGenerationError`.

Typical usage example:

    p = generate_prime(1024)
    p, q = generate_prime_pair(2048)
    kp = generate_keypair(3072)
    kp = build_keypair(61, 53, 17, totient="euler")
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import warnings

from rsacore import bigint
from rsacore import ntheory
from rsacore.errors import ExponentNotCoprime
from rsacore.errors import InvalidParameter
from rsacore.errors import KeyGenerationError
from rsacore.rsa import KeyPair

DEFAULT_PUBLIC_EXPONENT: int = 65537
DEFAULT_PAIR_RETRIES: int = 16
DEFAULT_EXPONENT_RETRIES: int = 16
_MINIMUM_PRIME_SEPARATION: int = 100
_MINIMUM_MODULUS_SIZE: int = 512
_PRIME_SEARCH_FACTOR: int = 5
_PRIME_SEARCH_FLOOR: int = 100
_SECURE_MODULUS_SIZE: int = 2048


def generate_prime(bit_length: int, confidence: int | None = None, *, max_attempts: int | None = None) -> int:
    """Generate a probable prime of exactly `bit_length` bits.

    Draws random odd candidates with the top bit set until one passes `bigint.is_probable_prime`. By the prime number
    theorem roughly `0.35 * bit_length` odd candidates are needed on average, well under the cap.

    Args:
        bit_length: The size of the prime in bits. Must be >= 2.
        confidence: Miller-Rabin rounds per candidate. Must be >= 1.
            If not provided uses the FIPS 186-5 table in `bigint.default_rounds()`.
        max_attempts: Candidate cap. Defaults to `max(_PRIME_SEARCH_FACTOR * bit_length, _PRIME_SEARCH_FLOOR)`.

    Returns:
        A probable prime.

    Raises:
        InvalidParameter: If `bit_length` or `confidence` is out of range.
        KeyGenerationError: If no prime turned up within `max_attempts` candidates.
    """
    if bit_length < 2:
        raise InvalidParameter("Prime bit length must be at least 2.")
    if confidence is not None and confidence < 1:
        raise InvalidParameter("Confidence must be at least 1 round.")
    if max_attempts is None:
        max_attempts = max(_PRIME_SEARCH_FACTOR * bit_length, _PRIME_SEARCH_FLOOR)
    for _ in range(max_attempts):
        candidate = bigint.random_bits(bit_length) | 1
        if bigint.is_probable_prime(candidate, confidence):
            return candidate
    raise KeyGenerationError(
        f"Ran an improbable {max_attempts} candidates with no prime found. Check system random number generator.")


def _check_modulus_size(nlen: int) -> None:
    if nlen % 2 != 0:
        raise InvalidParameter("Modulus size must be an even number.")
    # Keeps nlen // 2 well clear of the separation exponent.
    if nlen < _MINIMUM_MODULUS_SIZE:
        raise InvalidParameter(f"Modulus size must be at least {_MINIMUM_MODULUS_SIZE} bits.")


def generate_prime_pair(nlen: int,
                        confidence: int | None = None,
                        *,
                        max_retries: int = DEFAULT_PAIR_RETRIES,
                        max_attempts: int | None = None) -> tuple[int, int]:
    """Generates an IFC-suitable pair of primes for an `nlen`-bit modulus.

    Both primes have `nlen // 2` bits and differ by more than `2**(nlen // 2 - 100)`. Only the second prime is
    redrawn when they sit too close together.

    Args:
        nlen: The modulus size. Must be even and at least 512.
        confidence: Miller-Rabin rounds, passed to `generate_prime()`.
        max_retries: How many times `q` may be redrawn.
        max_attempts: Candidate cap per prime, passed to `generate_prime()`.

    Returns:
        The primes `(p, q)`.

    Raises:
        InvalidParameter: If `nlen` is odd or below 512 bits.
        KeyGenerationError: If the separation constraint still fails after `max_retries` draws. Also if a single prime
            search runs out of candidates.
    """
    _check_modulus_size(nlen)
    size = nlen // 2
    bound = 1 << (size - _MINIMUM_PRIME_SEPARATION)
    p = generate_prime(size, confidence, max_attempts=max_attempts)
    for _ in range(max_retries):
        q = generate_prime(size, confidence, max_attempts=max_attempts)
        if abs(p - q) > bound:
            return p, q
    raise KeyGenerationError(f"Could not separate the prime pair in {max_retries} attempts.")


def _validate_exponent(e: int, t: int) -> bool:
    return 1 < e < t and ntheory.gcd(e, t) == 1


def generate_keypair(nlen: int,
                     public_exponent: int | None = None,
                     *,
                     confidence: int | None = None,
                     totient: str = "carmichael",
                     pair_retries: int = DEFAULT_PAIR_RETRIES,
                     max_attempts: int | None = None,
                     exponent_retries: int = DEFAULT_EXPONENT_RETRIES) -> KeyPair:
    """Generates an RSA key pair.

    Fully generates a valid key: prime pair, modulus, totient, public exponent and private exponent.

    A caller-supplied exponent is never replaced. If it turns out not to be coprime to the totient the call fails.
    The default exponent instead triggers a fresh prime pair, up to `exponent_retries` times.

    Args:
        nlen: The modulus size in bits. Must be even and at least 512.
        public_exponent: The public exponent. Defaults to `DEFAULT_PUBLIC_EXPONENT` (65537).
        confidence: Miller-Rabin rounds, passed down to `generate_prime()`.
        totient: Totient construction, `"carmichael"` (default) or `"euler"`.
        pair_retries: Redraws of `q` allowed per prime pair.
        max_attempts: Candidate cap per prime, passed down to `generate_prime()`.
        exponent_retries: Prime pairs tried against the default exponent.

    Returns:
        The key pair.

    Raises:
        InvalidParameter: If `nlen`, `confidence` or `totient` is malformed.
        ExponentNotCoprime: If `public_exponent` is at most 1 or even, or does not fit the generated primes.
        KeyGenerationError: If a bounded search ran out of attempts.
    """
    _check_modulus_size(nlen)
    if totient not in ntheory.TOTIENTS:
        raise InvalidParameter(f"Unknown totient mode {totient!r}.")
    if public_exponent is not None:
        if public_exponent <= 1:
            raise ExponentNotCoprime("Public exponent must be greater than 1.")
        # Totients of odd primes are even.
        if public_exponent % 2 == 0:
            raise ExponentNotCoprime("Public exponent must be odd.")
    if nlen < _SECURE_MODULUS_SIZE:
        warnings.warn(f"A {nlen}-bit modulus is insecure! Please use with care.", RuntimeWarning, stacklevel=2)

    e = DEFAULT_PUBLIC_EXPONENT if public_exponent is None else public_exponent
    attempts = 1 if public_exponent is not None else exponent_retries
    for _ in range(attempts):
        p, q = generate_prime_pair(nlen, confidence, max_retries=pair_retries, max_attempts=max_attempts)
        t = ntheory.totient(p, q, totient)
        if _validate_exponent(e, t):
            break
    else:
        if public_exponent is not None:
            raise ExponentNotCoprime(f"Public exponent {e} is not coprime to the totient of the generated primes.")
        raise KeyGenerationError(f"No prime pair compatible with exponent {e} in {exponent_retries} attempts.")
    d = ntheory.mod_inverse(e, t)
    return KeyPair(p * q, e, d, p, q, totient)


def build_keypair(p: int,
                  q: int,
                  public_exponent: int | None = None,
                  *,
                  totient: str = "carmichael",
                  confidence: int | None = None) -> KeyPair:
    """Assembles a key pair from known primes.

    Meant for worked examples and tests, hence no size or separation requirement applies.

    Args:
        p: First prime.
        q: Second prime, distinct from `p`.
        public_exponent: The public exponent. Defaults to `DEFAULT_PUBLIC_EXPONENT` (65537).
        totient: Totient construction, `"carmichael"` (default) or `"euler"`.
        confidence: Miller-Rabin rounds used to check `p` and `q`.

    Returns:
        The key pair.

    Raises:
        InvalidParameter: If the primes are equal or not prime, or `totient` is unknown.
        ExponentNotCoprime: If the exponent is not in `(1, t)` or shares a factor with `t`.
    """
    if p == q:
        raise InvalidParameter("Primes p and q must be distinct.")
    if not (bigint.is_probable_prime(p, confidence) and bigint.is_probable_prime(q, confidence)):
        raise InvalidParameter("Both p and q must be prime.")
    e = DEFAULT_PUBLIC_EXPONENT if public_exponent is None else public_exponent
    t = ntheory.totient(p, q, totient)
    if not _validate_exponent(e, t):
        raise ExponentNotCoprime(f"Public exponent {e} must be in (1, {t}) and coprime to it.")
    return KeyPair(p * q, e, ntheory.mod_inverse(e, t), p, q, totient)
