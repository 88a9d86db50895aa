"""
Apache's flavour of MD5-crypt, as found in htpasswd files ("$apr1$...").

This is the FreeBSD libcrypt md5crypt construction with a different magic
string. The digest is deliberately slow (1000 extra MD5 rounds) and rendered
through crypt's own base64 alphabet in a transposed byte order, so there is no
shortcut through the standard library's base64 module.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets

from htpasswd_verify.exceptions import MalformedHash

APR1_ID = "$apr1$"
SALT_LENGTH = 8
ROUNDS = 1000

ITOA64 = "./0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

# Output order of the final digest: each triple becomes four characters,
# byte 11 is left over and becomes the last two.
_TRANSPOSE = ((0, 6, 12), (1, 7, 13), (2, 8, 14), (3, 9, 15), (4, 10, 5))


def password_bytes(password: str | bytes) -> bytes:
    if isinstance(password, bytes):
        return password
    elif isinstance(password, str):
        return password.encode("utf-8")
    else:
        raise TypeError(f"Expected str or bytes, but got {type(password).__name__}.")


def _check_salt(salt: str) -> bytes:
    if not 0 < len(salt) <= SALT_LENGTH:
        raise ValueError(f"Salt must be 1 to {SALT_LENGTH} characters long.")
    for c in salt:
        if not c.isascii() or not c.isprintable() or c.isspace() or c in ":$":
            raise ValueError(f"Invalid character in salt: {c!r}")
    return salt.encode("ascii")


def _to64(v: int, n: int) -> str:
    ret = []
    for _ in range(n):
        ret.append(ITOA64[v & 0x3F])
        v >>= 6
    return "".join(ret)


def encode(password: str | bytes, salt: str) -> str:
    """
    Compute the 22 character encoded digest of `password` under `salt`.

    Raises:
        ValueError, if the salt is empty, longer than 8 characters or
        contains whitespace, ":" or "$".
    """
    pw = password_bytes(password)
    s = _check_salt(salt)

    # The password first, then the magic string, then the raw salt.
    ctx = hashlib.md5(pw + APR1_ID.encode() + s)

    # Then as many bytes of MD5(pw, salt, pw) as the password is long.
    mixin = hashlib.md5(pw + s + pw).digest()
    for pl in range(len(pw), 0, -16):
        ctx.update(mixin[: min(pl, 16)])

    i = len(pw)
    while i:
        if i & 1:
            ctx.update(b"\x00")
        else:
            ctx.update(pw[:1])
        i >>= 1

    final = ctx.digest()

    for i in range(ROUNDS):
        m = hashlib.md5(pw if i & 1 else final)
        if i % 3:
            m.update(s)
        if i % 7:
            m.update(pw)
        m.update(final if i & 1 else pw)
        final = m.digest()

    rearranged = [
        _to64(final[a] << 16 | final[b] << 8 | final[c], 4)
        for a, b, c in _TRANSPOSE
    ]
    rearranged.append(_to64(final[11], 2))
    return "".join(rearranged)


def format_hash(encoded: str, salt: str) -> str:
    """
    Render an encoded digest as a complete htpasswd hash string.
    """
    return f"{APR1_ID}{salt}${encoded}"


def split_apr1_hash(stored: str) -> tuple[str, str]:
    """
    Split a "$apr1$<salt>$<digest>" string into its salt and digest.

    Raises:
        MalformedHash, if the marker, the 8 character salt or the
        separator following it is missing. The salt characters are not
        validated here.
    """
    if not stored.startswith(APR1_ID):
        raise MalformedHash(f"Hash does not start with {APR1_ID!r}.")
    sep = len(APR1_ID) + SALT_LENGTH
    if len(stored) <= sep or stored[sep] != "$":
        raise MalformedHash(
            f"Malformed {APR1_ID!r} hash: expected a {SALT_LENGTH} character salt followed by '$'."
        )
    return stored[len(APR1_ID) : sep], stored[sep + 1 :]


def check_digest(password: str | bytes, salt: str, digest: str) -> bool:
    """
    Recompute the digest for `password` and compare it in constant time.

    A salt that `encode` would reject never matches.
    """
    try:
        encoded = encode(password, salt)
    except ValueError:
        return False
    return hmac.compare_digest(encoded.encode("ascii"), digest.encode("utf-8"))


def verify_apr1_hash(stored: str, password: str | bytes) -> bool:
    """
    Check `password` against a complete "$apr1$..." hash string.

    Returns True on a match and False otherwise.
    Raises MalformedHash if `stored` cannot be parsed.
    """
    salt, digest = split_apr1_hash(stored)
    return check_digest(password, salt, digest)


def gensalt() -> str:
    return "".join(secrets.choice(ITOA64) for _ in range(SALT_LENGTH))


def hash_password(password: str | bytes, salt: str | None = None) -> str:
    """
    Create a new "$apr1$" hash string, using a random salt unless one is given.
    """
    if salt is None:
        salt = gensalt()
    return format_hash(encode(password, salt), salt)
