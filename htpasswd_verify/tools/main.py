from __future__ import annotations

import getpass
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from htpasswd_verify import exceptions
from htpasswd_verify import log
from htpasswd_verify import md5
from htpasswd_verify.htpasswd import Htpasswd
from htpasswd_verify.tools import cmdline
from htpasswd_verify.version import HTPASSWD_VERIFY

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_ERROR = 2


def read_password(prompt: str = "Password: ") -> str:
    if sys.stdin.isatty():  # pragma: no cover
        return getpass.getpass(prompt)
    return sys.stdin.readline().rstrip("\r\n")


def check(args) -> int:
    path = Path(args.file).expanduser()
    try:
        ht = Htpasswd.from_file(path, strict=args.strict)
    except exceptions.MalformedHash as e:
        logger.error(f"{path}: {e}")
        return EXIT_ERROR
    except OSError as e:
        logger.error(str(e))
        return EXIT_ERROR

    password = read_password()
    try:
        ok = ht.check(args.user, password)
    except exceptions.VerificationError as e:
        logger.error(f"{path}: {e}")
        return EXIT_ERROR
    if ok:
        logger.info(f"Password for {args.user!r} is correct.")
        return EXIT_OK
    logger.info(f"Password for {args.user!r} is incorrect.")
    return EXIT_MISMATCH


def hash_password(args) -> int:
    password = read_password()
    try:
        print(md5.hash_password(password, args.salt))
    except ValueError as e:
        logger.error(str(e))
        return EXIT_ERROR
    return EXIT_OK


def run(arguments: Sequence[str] | None = None) -> int:
    parser = cmdline.htpasswd_verify()
    args = parser.parse_args(arguments)

    if args.version:
        print(HTPASSWD_VERIFY)
        return EXIT_OK

    verbosity = "info"
    if args.quiet:
        verbosity = "error"
    if args.verbose:
        verbosity = args.verbose
    handler = log.setup_logging(verbosity)

    try:
        if args.command == "check":
            return check(args)
        elif args.command == "hash":
            return hash_password(args)
        else:
            parser.print_usage(sys.stderr)
            return EXIT_ERROR
    finally:
        handler.uninstall()


def htpasswd_verify(args=None) -> int | None:  # pragma: no cover
    sys.exit(run(args))
