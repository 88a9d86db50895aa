"""
A read-only htpasswd credential store.

Lines without a ":" are skipped silently, which also takes care of blank
lines and most comments. For duplicate users, the last entry wins.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from htpasswd_verify import hashes
from htpasswd_verify.exceptions import MalformedHash

logger = logging.getLogger(__name__)


def parse_entry(line: str, *, strict: bool = False) -> tuple[str, hashes.Hash] | None:
    """
    Parse a single "username:hash" line.

    Returns None for lines without a separator. Everything after the
    first ":" is the hash.
    """
    username, sep, rest = line.partition(":")
    if not sep:
        return None
    return username, hashes.parse_hash(rest, strict=strict)


class Htpasswd(Mapping[str, hashes.Hash]):
    def __init__(self, entries: Iterable[tuple[str, hashes.Hash]] = ()):
        """
        Create a store from (username, hash) pairs. Later pairs override
        earlier ones with the same username.
        """
        self._hashes: Mapping[str, hashes.Hash] = MappingProxyType(dict(entries))

    def __getitem__(self, username: str) -> hashes.Hash:
        return self._hashes[username]

    def __iter__(self) -> Iterator[str]:
        return iter(self._hashes)

    def __len__(self) -> int:
        return len(self._hashes)

    def __repr__(self) -> str:
        return f"Htpasswd({len(self)} users)"

    @classmethod
    def from_file(cls, path: Path, *, strict: bool = False) -> Htpasswd:
        """
        Initializes and loads an htpasswd file.

        Args:
            path: The path to the htpasswd file.
            strict: Reject entries that fall back to crypt without being crypt hashes.

        Raises:
            OSError: If the file cannot be read.
            MalformedHash: If the file contains a malformed hash.
        """
        try:
            content = path.read_text("utf-8")
        except FileNotFoundError:
            raise OSError(f"Htpasswd file not found: {path}") from None
        return load(content, strict=strict)

    def check(self, username: str, password: str | bytes) -> bool:
        """
        Checks if a username and password combination is valid.

        Unknown users are reported exactly like wrong passwords.

        Raises:
            VerificationError: If the stored hash cannot be evaluated.
        """
        h = self._hashes.get(username)
        if h is None:
            logger.debug("Unknown htpasswd user.")
            return False
        return hashes.check(h, password)


def load(content: str, *, strict: bool = False) -> Htpasswd:
    """
    Create an Htpasswd store from the contents of an htpasswd file.

    Raises:
        MalformedHash: If a line holds a malformed hash. The message names the line.
    """
    entries = []
    skipped = 0
    for lineno, line in enumerate(content.splitlines(), start=1):
        try:
            entry = parse_entry(line, strict=strict)
        except MalformedHash as e:
            raise MalformedHash(f"Line {lineno}: {e}") from e
        if entry is None:
            skipped += 1
        else:
            entries.append(entry)
    ht = Htpasswd(entries)
    logger.debug(f"Loaded {len(ht)} htpasswd users, skipped {skipped} lines.")
    return ht
