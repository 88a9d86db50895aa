from __future__ import annotations

from pathlib import Path

import pytest


class TestData:
    __test__ = False

    def __init__(self, dirname: Path):
        self.dirname = dirname

    def path(self, path: str) -> Path:
        """
        Returns a path to the test data housed at 'path'.

        This function will raise ValueError if the path does not exist.
        """
        fullpath = self.dirname / path
        if not fullpath.exists():
            raise ValueError(f"dataPath: {fullpath} does not exist.")
        return fullpath


@pytest.fixture()
def tdata():
    return TestData(Path(__file__).parent)
