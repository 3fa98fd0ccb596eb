"""Shared fixtures"""

import os
import tempfile

import pytest


@pytest.fixture
def temp_dir():
    """Temporary directory removed after the test"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def make_file(temp_dir):
    """Factory writing bytes or text into a file inside temp_dir"""

    def _make_file(name: str, content: bytes | str) -> str:
        path = os.path.join(temp_dir, name)
        data = content.encode('utf-8') if isinstance(content, str) else content
        with open(path, 'wb') as f:
            f.write(data)
        return path

    return _make_file
