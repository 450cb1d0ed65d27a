"""Core RSA arithmetic in an Academic Sense.

Provides textbook RSA key pair generation, encryption and decryption over integer blocks, along with the
number-theoretic kernel and the prime generation utilities underneath.

Typical usage example:

    p, q = generate_prime_pair(2048)
    kp = generate_keypair(3072)
    c = encrypt(65, kp.public)
    m = decrypt(c, kp.private)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsacore.bigint import is_probable_prime
from rsacore.bigint import random_bits
from rsacore.errors import ExponentNotCoprime
from rsacore.errors import InvalidParameter
from rsacore.errors import KeyGenerationError
from rsacore.errors import MessageTooLarge
from rsacore.errors import NoInverseExists
from rsacore.errors import RSACoreError
from rsacore.keygen import build_keypair
from rsacore.keygen import generate_keypair
from rsacore.keygen import generate_prime
from rsacore.keygen import generate_prime_pair
from rsacore.ntheory import euler_totient
from rsacore.ntheory import gcd
from rsacore.ntheory import lcm
from rsacore.ntheory import mod_inverse
from rsacore.ntheory import mod_pow
from rsacore.ntheory import reduced_totient
from rsacore.rsa import decrypt
from rsacore.rsa import encrypt
from rsacore.rsa import KeyPair
from rsacore.rsa import PrivateKey
from rsacore.rsa import PublicKey

__version__ = "0.1.0"
__all__ = [
    "KeyPair",
    "PublicKey",
    "PrivateKey",
    "encrypt",
    "decrypt",
    "generate_prime",
    "generate_prime_pair",
    "generate_keypair",
    "build_keypair",
    "gcd",
    "lcm",
    "mod_inverse",
    "mod_pow",
    "reduced_totient",
    "euler_totient",
    "random_bits",
    "is_probable_prime",
    "RSACoreError",
    "InvalidParameter",
    "ExponentNotCoprime",
    "KeyGenerationError",
    "NoInverseExists",
    "MessageTooLarge",
]
