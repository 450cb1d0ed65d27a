"""Provides the RSA key model and the textbook RSA primitive.

Facilitates core RSA under "textbook" conditions: no padding, integer blocks in `[0, n)`. The key pair carries the
secret primes, while the `PublicKey` and `PrivateKey` views only ever hold an exponent and the modulus.

Typical usage example:

    kp = generate_keypair(2048)
    c = encrypt(65, kp.public)
    m = decrypt(c, kp.private)
    m = kp.decrypt(c)  # CRT accelerated
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from dataclasses import dataclass
from dataclasses import field
from functools import cached_property

from rsacore import bigint
from rsacore import ntheory
from rsacore.errors import ExponentNotCoprime
from rsacore.errors import InvalidParameter
from rsacore.errors import MessageTooLarge


class RSAKey:
    """The half of a key pair needed for one direction of the RSA primitive.

    Acts as a template for the components shared by the public and the private view: an exponent and a modulus.

    Attributes:
        expo: The exponent of the key, whether private or public.
        mod: The modulus of the key pair.
    """

    def __init__(self, expo: int, mod: int) -> None:
        if mod < 2:
            raise InvalidParameter("Modulus must be at least 2.")
        if expo < 0:
            raise InvalidParameter("Exponent must be non-negative.")
        self.expo = expo
        self.mod = mod

    @property
    def n(self) -> int:
        return self.mod

    def c_rsa(self, message: int) -> int:
        """Performs the core RSA operation. (Encrypt/Decrypt)

        Args:
            message: The integer block to transform.

        Returns:
            `message**expo mod n`.

        Raises:
            MessageTooLarge: If the block is out of range for the current key.
        """
        if not 0 <= message < self.mod:
            raise MessageTooLarge("Message representative must be in range [0, n-1]")
        return ntheory.mod_pow(message, self.expo, self.mod)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (self.expo, self.mod) == (other.expo, other.mod)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.expo, self.mod))


class PublicKey(RSAKey):
    """Public view `(e, n)` of a key pair."""

    @property
    def e(self) -> int:
        return self.expo

    def encrypt(self, message: int) -> int:
        """Encrypt an integer block in `[0, n)`."""
        return self.c_rsa(message)

    def __repr__(self) -> str:
        return f"PublicKey(e={self.expo}, n={self.mod})"


class PrivateKey(RSAKey):
    """Private view `(d, n)` of a key pair.

    Holds no primes, hence decryption runs the plain exponentiation. Callers keep `d` in memory only.
    """

    @property
    def d(self) -> int:
        return self.expo

    def decrypt(self, ciphertext: int) -> int:
        """Decrypt an integer block in `[0, n)`."""
        return self.c_rsa(ciphertext)

    def __repr__(self) -> str:
        return f"PrivateKey(n={self.mod})"


@dataclass(frozen=True)
class KeyPair:
    """A complete RSA key pair.

    Validated on construction: `p` and `q` are distinct probable primes, `d` is positive, `n == p*q`, `1 < e < t`,
    `gcd(e, t) == 1` and `d*e == 1 (mod t)`, where `t` is the totient named by `totient`. The secret fields are left
    out of the representation.

    Attributes:
        n: The modulus.
        e: The public exponent.
        d: The private exponent.
        p: Secret prime 1.
        q: Secret prime 2.
        totient: The totient construction `d` was derived against, a key of `ntheory.TOTIENTS`.
    """
    n: int
    e: int
    d: int = field(repr=False)
    p: int = field(repr=False)
    q: int = field(repr=False)
    totient: str = "carmichael"

    def __post_init__(self) -> None:
        if self.p == self.q:
            raise InvalidParameter("Primes p and q must be distinct.")
        if not (bigint.is_probable_prime(self.p) and bigint.is_probable_prime(self.q)):
            raise InvalidParameter("Both p and q must be prime.")
        if self.d < 1:
            raise InvalidParameter("Private exponent must be positive.")
        if self.n != self.p * self.q:
            raise InvalidParameter("Modulus does not equal p*q.")
        t = ntheory.totient(self.p, self.q, self.totient)
        if not 1 < self.e < t or ntheory.gcd(self.e, t) != 1:
            raise ExponentNotCoprime("Public exponent must be in (1, t) and coprime to t.")
        if self.d * self.e % t != 1:
            raise InvalidParameter("Private exponent is not the inverse of the public exponent.")

    @property
    def public(self) -> PublicKey:
        return PublicKey(self.e, self.n)

    @property
    def private(self) -> PrivateKey:
        return PrivateKey(self.d, self.n)

    @cached_property
    def _crt(self) -> tuple[int, int, int]:
        return self.d % (self.p - 1), self.d % (self.q - 1), ntheory.mod_inverse(self.q, self.p)

    def encrypt(self, message: int) -> int:
        """Encrypt with the public half."""
        return self.public.encrypt(message)

    def decrypt(self, ciphertext: int) -> int:
        """Decrypts using the Chinese Remainder Theorem.

        Two half-size exponentiations modulo `p` and `q`, recombined with Garner's formula. Gives the same result as
        `decrypt(ciphertext, self.private)`.

        Args:
            ciphertext: The integer block to decrypt.

        Returns:
            The plaintext block.

        Raises:
            MessageTooLarge: If the block is out of range for the current key.
        """
        if not 0 <= ciphertext < self.n:
            raise MessageTooLarge("Message representative must be in range [0, n-1]")
        exp1, exp2, coeff = self._crt
        m_1 = ntheory.mod_pow(ciphertext, exp1, self.p)
        m_2 = ntheory.mod_pow(ciphertext, exp2, self.q)
        h = (m_1 - m_2) * coeff % self.p
        return m_2 + self.q * h


def _as_key(key: KeyPair | RSAKey | tuple[int, int], cls: type[RSAKey]) -> RSAKey:
    if isinstance(key, KeyPair):
        return key.public if cls is PublicKey else key.private
    if isinstance(key, cls):
        return key
    if isinstance(key, RSAKey):
        raise InvalidParameter(f"Expected a {cls.__name__}, got a {type(key).__name__}.")
    try:
        expo, mod = key
    except (TypeError, ValueError):
        raise InvalidParameter(f"Expected a {cls.__name__} or an (exponent, modulus) pair.") from None
    return cls(expo, mod)


def encrypt(message: int, public_key: KeyPair | PublicKey | tuple[int, int]) -> int:
    """Textbook RSA encryption.

    Args:
        message: Plaintext block, `0 <= message < n`.
        public_key: A `PublicKey`, a `KeyPair` (its public half is used) or an `(e, n)` tuple.

    Returns:
        The ciphertext block `message**e mod n`.

    Raises:
        MessageTooLarge: If `message` is outside `[0, n)`.
        InvalidParameter: If `public_key` is a private view or not an `(e, n)` pair.
    """
    return _as_key(public_key, PublicKey).c_rsa(message)


def decrypt(ciphertext: int, private_key: KeyPair | PrivateKey | tuple[int, int]) -> int:
    """Textbook RSA decryption.

    Args:
        ciphertext: Ciphertext block, `0 <= ciphertext < n`.
        private_key: A `PrivateKey`, a `KeyPair` (its private half is used) or a `(d, n)` tuple.

    Returns:
        The plaintext block `ciphertext**d mod n`.

    Raises:
        MessageTooLarge: If `ciphertext` is outside `[0, n)`.
        InvalidParameter: If `private_key` is a public view or not a `(d, n)` pair.
    """
    return _as_key(private_key, PrivateKey).c_rsa(ciphertext)
