from htpasswd_verify.exceptions import HtpasswdException
from htpasswd_verify.exceptions import MalformedHash
from htpasswd_verify.exceptions import VerificationError
from htpasswd_verify.htpasswd import Htpasswd
from htpasswd_verify.htpasswd import load
from htpasswd_verify.md5 import encode
from htpasswd_verify.md5 import format_hash
from htpasswd_verify.md5 import verify_apr1_hash
from htpasswd_verify.version import VERSION

__version__ = VERSION

__all__ = [
    "HtpasswdException",
    "MalformedHash",
    "VerificationError",
    "Htpasswd",
    "load",
    "encode",
    "format_hash",
    "verify_apr1_hash",
]
