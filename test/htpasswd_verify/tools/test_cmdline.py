from htpasswd_verify.tools import cmdline


def test_htpasswd_verify():
    parser = cmdline.htpasswd_verify()
    args = parser.parse_args(["-v", "check", "--strict", "file", "user"])
    assert args.command == "check"
    assert args.file == "file"
    assert args.user == "user"
    assert args.strict
    assert args.verbose == "debug"
    assert not args.quiet

    args = parser.parse_args(["-q", "hash", "--salt", "abc"])
    assert args.command == "hash"
    assert args.salt == "abc"
    assert args.quiet
    assert args.verbose is None

    args = parser.parse_args(["--version"])
    assert args.version
    assert args.command is None
