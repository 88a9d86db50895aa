"""
Every exception raised on purpose by htpasswd_verify is a subclass of HtpasswdException.

"Could not verify" and "verified false" are kept apart: a wrong password is a
`False` return value, while a stored hash that cannot be evaluated raises.
"""


class HtpasswdException(Exception):
    """
    Base class for all exceptions thrown by htpasswd_verify.
    """

    def __init__(self, message=None):
        super().__init__(message)


class MalformedHash(HtpasswdException, ValueError):
    """
    A stored hash string is structurally invalid, e.g. an $apr1$ hash
    too short to hold its salt and separator.
    """


class VerificationError(HtpasswdException):
    """
    A delegated hash primitive could not evaluate the stored hash.
    """
