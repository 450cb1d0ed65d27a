"""Exception hierarchy for RSA Core.

Every error raised by the package derives from `RSACoreError`. The concrete kinds also derive from the built-in
exception the caller would naturally expect, so `except ValueError` keeps working for malformed input.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSACoreError(Exception):
    """Base class for all RSA Core errors."""


class InvalidParameter(RSACoreError, ValueError):
    """A size, exponent or modulus argument is malformed."""


class ExponentNotCoprime(InvalidParameter):
    """The public exponent cannot be used against the totient of the key pair.

    Raised for exponents outside `(1, t)` or sharing a factor with `t`.
    """


class KeyGenerationError(RSACoreError, RuntimeError):
    """A bounded search loop ran out of attempts."""


class NoInverseExists(RSACoreError, ArithmeticError):
    """The modular inverse is undefined as the operands are not coprime."""


class MessageTooLarge(RSACoreError, ValueError):
    """Message or ciphertext representative falls outside `[0, n)`."""
