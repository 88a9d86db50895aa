"""
Parsed htpasswd hash strings and the verification routine for each of them.

Apache's htpasswd knows four hash formats:

- "$apr1$<salt>$<digest>": Apache MD5, computed by htpasswd_verify.md5.
- "$2y$..." (also $2b$ and $2a$): bcrypt, delegated to the bcrypt package.
- "{SHA}<base64>": unsalted SHA-1. SHA1 is insecure.
- everything else: traditional DES crypt, delegated to passlib.

The formats have no reserved prefix for crypt, so anything that is not
recognized falls through to it and simply fails to verify.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import re
from dataclasses import dataclass
from typing import ClassVar

import bcrypt
from passlib.hash import des_crypt

from htpasswd_verify import md5
from htpasswd_verify.exceptions import MalformedHash
from htpasswd_verify.exceptions import VerificationError

logger = logging.getLogger(__name__)

BCRYPT_IDS = ("$2y$", "$2b$", "$2a$")
SHA1_ID = "{SHA}"

# bcrypt ignores everything past this many password bytes.
BCRYPT_MAX_PASSWORD = 72

_CRYPT_RE = re.compile(r"[./0-9A-Za-z]{13}")


@dataclass(frozen=True)
class MD5Hash:
    scheme: ClassVar[str] = "apr1"
    salt: str
    hash: str


@dataclass(frozen=True)
class BCryptHash:
    scheme: ClassVar[str] = "bcrypt"
    raw: str
    """The complete hash string, including ident and cost."""


@dataclass(frozen=True)
class SHA1Hash:
    scheme: ClassVar[str] = "sha1"
    raw: str
    """The base64 digest following the {SHA} marker."""


@dataclass(frozen=True)
class CryptHash:
    scheme: ClassVar[str] = "crypt"
    raw: str
    """The complete crypt string, salt in its first two characters."""


Hash = MD5Hash | BCryptHash | SHA1Hash | CryptHash


def parse_hash(pwhash: str, *, strict: bool = False) -> Hash:
    """
    Classify the hash part of an htpasswd entry.

    Raises:
        MalformedHash, if an $apr1$ hash is truncated, or, with `strict`,
        if a fallback crypt hash is not 13 characters of the crypt alphabet.
    """
    if pwhash.startswith(md5.APR1_ID):
        salt, digest = md5.split_apr1_hash(pwhash)
        return MD5Hash(salt, digest)
    elif pwhash.startswith(BCRYPT_IDS):
        return BCryptHash(pwhash)
    elif pwhash.startswith(SHA1_ID):
        return SHA1Hash(pwhash[len(SHA1_ID) :])
    else:
        if strict and not _CRYPT_RE.fullmatch(pwhash):
            raise MalformedHash("Unsupported htpasswd format: not a crypt hash.")
        return CryptHash(pwhash)


def check(h: Hash, password: str | bytes) -> bool:
    """
    Check a password against a parsed hash.

    Returns True if the password matches, False otherwise.
    Raises VerificationError if a bcrypt hash cannot be evaluated.
    """
    pw = md5.password_bytes(password)
    match h:
        case MD5Hash(salt=salt, hash=digest):
            return md5.check_digest(pw, salt, digest)
        case BCryptHash(raw=raw):
            try:
                return bcrypt.checkpw(pw[:BCRYPT_MAX_PASSWORD], raw.encode("ascii"))
            except ValueError as e:
                raise VerificationError(f"Could not verify bcrypt hash: {e}") from e
        case SHA1Hash(raw=raw):
            # Apache's {SHA} is base64-encoded SHA-1.
            # https://httpd.apache.org/docs/2.4/misc/password_encryptions.html
            digest = base64.b64encode(hashlib.sha1(pw).digest())
            return hmac.compare_digest(digest, raw.encode("utf-8"))
        case CryptHash(raw=raw):
            try:
                return des_crypt.verify(pw, raw)
            except ValueError:
                logger.debug("Stored hash is not a valid crypt hash, denying.")
                return False
        case _:
            raise TypeError(f"Expected a parsed hash, but got {type(h).__name__}.")
