# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import dataclasses
import random

from cryptography.hazmat.primitives.asymmetric import rsa
import pytest

import rsacore
from rsacore import ntheory
import rsacore.rsa as rsau
from rsacore.errors import ExponentNotCoprime
from rsacore.errors import InvalidParameter
from rsacore.errors import MessageTooLarge


@pytest.fixture(scope="module")
def textbook() -> rsau.KeyPair:
    return rsacore.build_keypair(61, 53, 17, totient="euler")


@pytest.fixture(scope="module", params=[1024, 2048])
def keypair(request, rsa_primes) -> rsau.KeyPair:
    p, q = rsa_primes[request.param]
    return rsacore.build_keypair(p, q)


def test_textbook_scenario(textbook):
    assert textbook.n == 3233
    assert ntheory.euler_totient(61, 53) == 3120
    assert textbook.d == 2753
    assert rsau.encrypt(65, (17, 3233)) == 2790
    assert rsau.decrypt(2790, (2753, 3233)) == 65
    assert textbook.public.encrypt(65) == 2790
    assert textbook.private.decrypt(2790) == 65
    assert textbook.decrypt(2790) == 65


def test_textbook_carmichael_exponent():
    kp = rsacore.build_keypair(61, 53, 17)
    assert kp.d == 413
    assert kp.decrypt(2790) == 65
    assert rsau.decrypt(2790, kp.private) == 65


def test_textbook_exhaustive_roundtrip(textbook):
    for m in range(textbook.n):
        c = rsau.encrypt(m, textbook.public)
        assert rsau.decrypt(c, textbook.private) == m
        assert textbook.decrypt(c) == m


@pytest.mark.parametrize("m", [0, 1, -1])
def test_fixed_points(textbook, m):
    m %= textbook.n
    assert textbook.encrypt(m) == m


def test_roundtrip(keypair):
    rng = random.Random(17092025)
    for _ in range(20):
        m = rng.randrange(keypair.n)
        c = keypair.encrypt(m)
        assert c == pow(m, keypair.e, keypair.n)
        assert rsau.decrypt(c, keypair.private) == m
        assert keypair.decrypt(c) == m


def test_boundary(keypair):
    pub = keypair.public
    assert rsau.encrypt(keypair.n - 1, pub) == keypair.n - 1
    with pytest.raises(MessageTooLarge):
        rsau.encrypt(keypair.n, pub)
    with pytest.raises(MessageTooLarge):
        rsau.encrypt(-1, pub)


@pytest.mark.parametrize("c", [3233, 3234, 2**64, -1])
def test_decrypt_out_of_range(textbook, c):
    with pytest.raises(MessageTooLarge):
        rsau.decrypt(c, textbook.private)
    with pytest.raises(MessageTooLarge):
        textbook.decrypt(c)


def test_message_too_large_is_value_error(textbook):
    with pytest.raises(ValueError):
        textbook.encrypt(textbook.n)


def test_views_hide_secrets(keypair):
    pub, priv = keypair.public, keypair.private
    assert (pub.e, pub.n) == (keypair.e, keypair.n)
    assert (priv.d, priv.n) == (keypair.d, keypair.n)
    for attr in ("d", "p", "q"):
        assert not hasattr(pub, attr)
    for attr in ("e", "p", "q"):
        assert not hasattr(priv, attr)
    assert str(keypair.d) not in repr(priv)
    text = repr(keypair)
    for secret in (keypair.d, keypair.p, keypair.q):
        assert str(secret) not in text


def test_keypair_frozen(textbook):
    with pytest.raises(dataclasses.FrozenInstanceError):
        textbook.e = 3


def test_view_equality(textbook):
    assert textbook.public == rsau.PublicKey(17, 3233)
    assert textbook.private == rsau.PrivateKey(2753, 3233)
    assert rsau.PublicKey(17, 3233) != rsau.PrivateKey(17, 3233)
    assert len({textbook.public, rsau.PublicKey(17, 3233)}) == 1


def test_mismatched_view_rejected(textbook):
    with pytest.raises(InvalidParameter):
        rsau.encrypt(65, textbook.private)
    with pytest.raises(InvalidParameter):
        rsau.decrypt(2790, textbook.public)


@pytest.mark.parametrize("expo,mod", [(17, 1), (17, 0), (-1, 3233)])
def test_view_validates(expo, mod):
    with pytest.raises(InvalidParameter):
        rsau.PublicKey(expo, mod)


@pytest.mark.parametrize(
    "fields,error",
    [
        ((3233, 17, 2753, 61, 61, "euler"), InvalidParameter),
        ((3234, 17, 2753, 61, 53, "euler"), InvalidParameter),
        ((3233, 17, 2752, 61, 53, "euler"), InvalidParameter),
        ((3233, 17, 2753, 61, 53, "dedekind"), InvalidParameter),
        ((3233, 3, 2753, 61, 53, "euler"), ExponentNotCoprime),
        ((3233, 3121, 2753, 61, 53, "euler"), ExponentNotCoprime),
        # 15 is composite, yet e*d == 1 modulo lcm(14, 6).
        ((105, 5, 17, 15, 7, "carmichael"), InvalidParameter),
        # -367 * 17 == 1 (mod 780), but a negative private exponent is not a key.
        ((3233, 17, -367, 61, 53, "carmichael"), InvalidParameter),
        ((3233, 17, 0, 61, 53, "carmichael"), InvalidParameter),
    ],
)
def test_keypair_validates(fields, error):
    with pytest.raises(error):
        rsau.KeyPair(*fields)


def test_crt_matches_plain_decryption(textbook):
    for c in (0, 1, 2790, 1234, textbook.n - 1):
        assert textbook.decrypt(c) == rsau.decrypt(c, textbook.private)


def test_keypair_accepted_as_key(textbook):
    assert rsau.encrypt(65, textbook) == 2790
    assert rsau.decrypt(2790, textbook) == 65
    assert rsacore.encrypt(65, textbook) == 2790


@pytest.mark.parametrize("key", [(17,), (17, 3233, 1), 3233, None])
def test_malformed_key_rejected(key):
    with pytest.raises(InvalidParameter):
        rsau.encrypt(65, key)
    with pytest.raises(InvalidParameter):
        rsau.decrypt(2790, key)


def test_keypair_accepts_euler_exponent_under_carmichael():
    # 2753 = 413 + 3 * 780 is still an inverse modulo the reduced totient.
    kp = rsau.KeyPair(3233, 17, 2753, 61, 53)
    assert kp.decrypt(2790) == 65


def test_cryptography_accepts_generated_key():
    kp = rsacore.generate_keypair(2048)
    pubs = rsa.RSAPublicNumbers(kp.e, kp.n)
    privs = rsa.RSAPrivateNumbers(kp.p, kp.q, kp.d, rsa.rsa_crt_dmp1(kp.d, kp.p), rsa.rsa_crt_dmq1(kp.d, kp.q),
                                  rsa.rsa_crt_iqmp(kp.p, kp.q), pubs)
    key = privs.private_key()
    assert key.key_size in (2047, 2048)
    m = 17092025232642
    assert kp.decrypt(rsau.encrypt(m, kp.public)) == m


@pytest.mark.slow
def test_generated_roundtrip_3072():
    kp = rsacore.generate_keypair(3072)
    m = random.randrange(kp.n)
    assert rsau.decrypt(rsau.encrypt(m, kp.public), kp.private) == m
