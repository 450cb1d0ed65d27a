"""The Command Line Interface for the utility.

Non-interactive front end over integer blocks: key generation prints the key components, encryption and decryption
take a modulus, an exponent and a block. Integers may be written in any Python literal base, e.g. `0xCA1`.

Typical usage example:

    rsacore keygen --keysize 2048
    rsacore encrypt --modulus 3233 --exponent 17 --message 65
    python -m rsacore decrypt -N 3233 -E 2753 -m 2790
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import sys
import typing

import rsacore
from rsacore import ntheory


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Callable = str
    choices: list[str] | None = None
    default: typing.Any = None


def literal_int(value: str) -> int:
    """Parse an integer literal in any base Python accepts."""
    return int(value, 0)


help_dict: dict[str, HelpData] = {
    "keygen":
        HelpData("Key generation utility."),
    "encrypt":
        HelpData("Encryption utility."),
    "decrypt":
        HelpData("Decryption utility."),
    "keysize":
        HelpData(description="Modulus size (in bits).", format=int, default=3072),
    "pub_exponent":
        HelpData(description="Exponent for the public key. Defaults to 65537.", format=literal_int),
    "totient":
        HelpData(description="Totient construction.", choices=sorted(ntheory.TOTIENTS), default="carmichael"),
    "confidence":
        HelpData(description="Miller-Rabin rounds per prime candidate. Defaults to FIPS 186-5 values.", format=int),
    "expose_primes":
        HelpData(description="Also print the secret primes."),
    "modulus":
        HelpData(description="The key modulus n.", format=literal_int),
    "exponent":
        HelpData(description="The key exponent (e to encrypt, d to decrypt).", format=literal_int),
    "message":
        HelpData(description="The integer block to transform, in [0, n).", format=literal_int),
}

keyparts = argparse.ArgumentParser(add_help=False)
for arg, flag in (("modulus", "-N"), ("exponent", "-E"), ("message", "-m")):
    keyparts.add_argument(f"--{arg}", flag, type=help_dict[arg].format, required=True, help=help_dict[arg].description)

corep = argparse.ArgumentParser(prog="rsacore")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {rsacore.__version__}")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands", required=True)

keygen = commands.add_parser("keygen", help=help_dict["keygen"].description)
keygen.add_argument("--keysize",
                    type=help_dict["keysize"].format,
                    default=help_dict["keysize"].default,
                    help=help_dict["keysize"].description)
keygen.add_argument("--pub-exponent", type=help_dict["pub_exponent"].format, help=help_dict["pub_exponent"].description)
keygen.add_argument("--totient",
                    choices=help_dict["totient"].choices,
                    default=help_dict["totient"].default,
                    help=help_dict["totient"].description)
keygen.add_argument("--confidence", type=help_dict["confidence"].format, help=help_dict["confidence"].description)
keygen.add_argument("--expose-primes", action="store_true", help=help_dict["expose_primes"].description)

encrypt = commands.add_parser("encrypt", parents=[keyparts], help=help_dict["encrypt"].description)
decrypt = commands.add_parser("decrypt", parents=[keyparts], help=help_dict["decrypt"].description)


def main(argv: list[str] | None = None) -> None:
    """Core CLI entry point."""
    args = corep.parse_args(argv)
    try:
        match args.subcommand:
            case "keygen":
                kp = rsacore.generate_keypair(args.keysize,
                                              args.pub_exponent,
                                              confidence=args.confidence,
                                              totient=args.totient)
                print(f"n: {kp.n}")
                print(f"e: {kp.e}")
                print(f"d: {kp.d}")
                if args.expose_primes:
                    print(f"p: {kp.p}")
                    print(f"q: {kp.q}")
            case "encrypt":
                print(rsacore.encrypt(args.message, (args.exponent, args.modulus)))
            case "decrypt":
                print(rsacore.decrypt(args.message, (args.exponent, args.modulus)))
    except rsacore.RSACoreError as err:
        print(f"Error: {err}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
