"""
Shared fixtures for the config file tests.
"""

import pytest


@pytest.fixture
def conf_file(tmp_path):
    """Factory writing the given text (or bytes) as a config file."""
    def _make(content: str | bytes = '', name: str = 'opencbm.conf'):
        path = tmp_path / name
        if isinstance(content, str):
            content = content.encode('latin-1')
        path.write_bytes(content)
        return path
    return _make


@pytest.fixture
def sample_text():
    return (
        '# global settings\n'
        'default=xa1541\n'
        'justtext\n'
        '\n'
        '[xa1541] # parallel cable\n'
        'lpt=0 # first port\n'
        'mode=auto\n'
        '# these belong to xu1541\n'
        '[xu1541]\n'
        'port=usb0\n'
    )
