import io

import pytest

from htpasswd_verify.tools import main


@pytest.fixture
def stdin(monkeypatch):
    def set_stdin(text: str) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO(text))

    return set_stdin


def test_version(capsys):
    assert main.run(["--version"]) == main.EXIT_OK
    assert capsys.readouterr().out.startswith("htpasswd-verify ")


def test_no_command(capsys):
    assert main.run([]) == main.EXIT_ERROR
    assert "usage:" in capsys.readouterr().err


@pytest.mark.parametrize(
    "user, password, expected",
    [
        ("user", "password", main.EXIT_OK),
        ("user2", "zaq1@WSX", main.EXIT_OK),
        ("bcrypt_test", "password", main.EXIT_OK),
        ("sha1_test", "password", main.EXIT_OK),
        ("crypt_test", "password", main.EXIT_OK),
        ("user", "wrong", main.EXIT_MISMATCH),
        ("nobody", "password", main.EXIT_MISMATCH),
    ],
)
def test_check(tdata, stdin, capsys, user, password, expected):
    stdin(password + "\n")
    path = str(tdata.path("htpasswd_verify/data/htpasswd"))
    assert main.run(["check", path, user]) == expected
    err = capsys.readouterr().err
    if expected == main.EXIT_OK:
        assert "is correct" in err
    else:
        assert "is incorrect" in err
    assert password not in err


def test_check_quiet(tdata, stdin, capsys):
    stdin("password")
    path = str(tdata.path("htpasswd_verify/data/htpasswd"))
    assert main.run(["-q", "check", path, "user"]) == main.EXIT_OK
    assert capsys.readouterr().err == ""


def test_check_verbose(tdata, stdin, capsys):
    stdin("password")
    path = str(tdata.path("htpasswd_verify/data/htpasswd"))
    assert main.run(["-v", "check", path, "user"]) == main.EXIT_OK
    assert "Loaded 5 htpasswd users" in capsys.readouterr().err


def test_check_file_not_found(stdin, capsys):
    stdin("password")
    assert main.run(["check", "/nonexistent", "user"]) == main.EXIT_ERROR
    assert "Htpasswd file not found" in capsys.readouterr().err


def test_check_malformed(tdata, stdin, capsys):
    stdin("password")
    path = str(tdata.path("htpasswd_verify/data/htpasswd_malformed"))
    assert main.run(["check", path, "user"]) == main.EXIT_ERROR
    assert "Line 2" in capsys.readouterr().err


def test_check_strict(tmp_path, stdin, capsys):
    stdin("pass4")
    path = tmp_path / "htpasswd"
    path.write_text("user4:pass4\n")
    assert main.run(["check", str(path), "user4"]) == main.EXIT_MISMATCH
    assert main.run(["check", "--strict", str(path), "user4"]) == main.EXIT_ERROR
    assert "Unsupported htpasswd format" in capsys.readouterr().err


def test_check_verification_error(tmp_path, stdin, capsys):
    stdin("password")
    path = tmp_path / "htpasswd"
    path.write_text("broken:$2y$05$tooshort\n")
    assert main.run(["check", str(path), "broken"]) == main.EXIT_ERROR
    assert "Could not verify bcrypt hash" in capsys.readouterr().err


def test_hash(stdin, capsys):
    stdin("password\n")
    assert main.run(["hash", "--salt", "RandSalt"]) == main.EXIT_OK
    assert capsys.readouterr().out == "$apr1$RandSalt$PgCXHRrkpSt4cbyC2C6bm/\n"


def test_hash_random_salt(stdin, capsys):
    stdin("password\n")
    assert main.run(["hash"]) == main.EXIT_OK
    out = capsys.readouterr().out.strip()
    assert out.startswith("$apr1$")
    assert len(out) == 37


def test_hash_invalid_salt(stdin, capsys):
    stdin("password\n")
    assert main.run(["hash", "--salt", "bad$salt"]) == main.EXIT_ERROR
    assert "Invalid character in salt" in capsys.readouterr().err
