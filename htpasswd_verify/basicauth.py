"""
HTTP basic authentication against an htpasswd store, for gateways that
need to validate an Authorization or Proxy-Authorization header.
"""

from __future__ import annotations

import binascii
import logging
from abc import ABC
from abc import abstractmethod

from htpasswd_verify.exceptions import VerificationError
from htpasswd_verify.htpasswd import Htpasswd

logger = logging.getLogger(__name__)


def mkauth(username: str, password: str, scheme: str = "basic") -> str:
    """
    Craft a basic auth string
    """
    v = binascii.b2a_base64((username + ":" + password).encode("utf8")).decode("ascii")
    return scheme + " " + v


def parse_http_basic_auth(s: str) -> tuple[str, str, str]:
    """
    Parse a basic auth header.
    Raises a ValueError if the input is invalid.
    """
    scheme, authinfo = s.split()
    if scheme.lower() != "basic":
        raise ValueError("Unknown scheme")
    try:
        user, sep, password = (
            binascii.a2b_base64(authinfo.encode()).decode("utf8", "replace").partition(":")
        )
    except binascii.Error as e:
        raise ValueError(str(e))
    if not sep:
        raise ValueError("Missing password")
    return scheme, user, password


class Validator(ABC):
    """Base class for all username/password validators."""

    @abstractmethod
    def __call__(self, username: str, password: str) -> bool:
        raise NotImplementedError


class HtpasswdValidator(Validator):
    def __init__(self, htpasswd: Htpasswd):
        self.htpasswd = htpasswd

    def __call__(self, username: str, password: str) -> bool:
        try:
            return self.htpasswd.check(username, password)
        except VerificationError as e:
            logger.warning(f"Denying {username!r}, stored hash could not be verified: {e}")
            return False


def authenticate(validator: Validator, auth_value: str) -> str | None:
    """
    Authenticate a basic auth header value.

    Returns the username if the credentials are valid, None otherwise.
    """
    try:
        scheme, username, password = parse_http_basic_auth(auth_value)
    except ValueError:
        return None
    if validator(username, password):
        return username
    return None
