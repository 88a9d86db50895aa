import argparse


def common_options(parser):
    parser.add_argument(
        "--version",
        action="store_true",
        help="show version number and exit",
        dest="version",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", dest="quiet", help="Quiet."
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        dest="verbose",
        const="debug",
        help="Increase log verbosity.",
    )


def htpasswd_verify():
    parser = argparse.ArgumentParser(
        prog="htpasswd-verify",
        description="Verify passwords against Apache htpasswd files.",
    )
    common_options(parser)
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    check = subparsers.add_parser(
        "check",
        help="Check a password read from stdin against an htpasswd file.",
        description="""
            Check the password read from stdin (or prompted for on a terminal)
            for USER in FILE. Exits with 0 on a match, 1 on a mismatch or
            unknown user and 2 if FILE cannot be read or verified.
        """,
    )
    check.add_argument("file", metavar="FILE", help="Path to the htpasswd file.")
    check.add_argument("user", metavar="USER", help="Username to check.")
    check.add_argument(
        "--strict",
        action="store_true",
        help="Reject entries that are not in one of the known hash formats.",
    )

    hash_ = subparsers.add_parser(
        "hash",
        help="Print an $apr1$ hash for a password read from stdin.",
    )
    hash_.add_argument(
        "--salt",
        type=str,
        metavar="SALT",
        help="Use this salt (up to 8 characters) instead of a random one.",
    )
    return parser
