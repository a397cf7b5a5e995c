"""Tests for config handles: open/create/get/set/close."""

import os

import pytest

from pycbmconf import (
    ConfClosedError,
    ConfHandle,
    ConfReadError,
    ConfWriteError,
    close_config,
    create_config,
    get_data,
    open_config,
    set_data
)


class TestOpen:
    def test_open_missing(self, tmp_path):
        with pytest.raises(ConfReadError):
            ConfHandle.open(str(tmp_path / 'missing.conf'))

    def test_open_config_missing(self, tmp_path):
        assert open_config(str(tmp_path / 'missing.conf')) is None

    def test_open_is_clean(self, conf_file, sample_text):
        handle = ConfHandle.open(conf_file(sample_text))
        assert not handle.dirty
        assert not handle.closed
        assert handle.get('xu1541', 'port') == 'usb0'
        handle.close()

    def test_create_missing(self, tmp_path):
        path = tmp_path / 'new.conf'
        handle = ConfHandle.create(str(path))
        assert path.exists()
        assert path.read_bytes() == b''
        assert handle.get(None, 'anything') is None
        handle.close()

    def test_create_existing(self, conf_file):
        path = conf_file('x=1\n')
        handle = create_config(str(path))
        assert get_data(handle, None, 'x') == '1'
        assert close_config(handle)
        assert path.read_bytes() == b'x=1\n'

    def test_create_in_missing_dir(self, tmp_path):
        assert create_config(str(tmp_path / 'no' / 'such.conf')) is None


class TestGetSet:
    def test_example(self, conf_file):
        path = conf_file('[A]\nx=1 #c1\n')
        handle = ConfHandle.open(str(path))
        assert handle.get('A', 'x') == '1'
        handle.set('A', 'y', '2')
        assert handle.dirty
        handle.close()
        assert path.read_bytes() == b'[A]\nx=1 #c1\ny=2\n'

    def test_set_then_get(self, conf_file):
        handle = ConfHandle.open(conf_file(''))
        triples = [
            (None, 'default', 'xa1541'),
            ('xu1541', 'port', 'usb0'),
            ('xu1541', 'empty', ''),
            ('Sect', 'Key', 'upper'),
            ('sect', 'Key', 'lower'),
        ]
        for sect, key, value in triples:
            handle.set(sect, key, value)
        for sect, key, value in triples:
            assert handle.get(sect, key) == value
        handle.close()

    def test_case_sensitive(self, conf_file):
        handle = ConfHandle.open(conf_file('[Sect]\nKey=1\n'))
        assert handle.get('Sect', 'Key') == '1'
        assert handle.get('sect', 'Key') is None
        assert handle.get('Sect', 'key') is None
        handle.close()

    def test_not_found(self, conf_file, sample_text):
        handle = ConfHandle.open(conf_file(sample_text))
        assert handle.get('nope', 'port') is None
        assert handle.get('xu1541', 'nope') is None
        assert handle.get(None, 'justtext') is None
        assert not handle.has('xu1541', 'nope')
        assert handle.has('xa1541', 'lpt')
        assert not handle.dirty
        handle.close()

    def test_new_section_goes_last(self, conf_file, sample_text):
        path = conf_file(sample_text)
        handle = ConfHandle.open(str(path))
        handle.set('xum1541', 'serial', '0')
        assert handle.get('xum1541', 'serial') == '0'
        handle.close()
        assert path.read_text('latin-1') == sample_text + '[xum1541]\nserial=0\n'

    def test_new_entry_before_comments_of_next(self, conf_file, sample_text):
        path = conf_file(sample_text)
        with ConfHandle.open(str(path)) as handle:
            handle.set('xa1541', 'cable', 'xm')
        assert path.read_text('latin-1') == sample_text.replace(
            'mode=auto\n', 'mode=auto\ncable=xm\n')

    def test_overwrite_keeps_comment(self, conf_file, sample_text):
        path = conf_file(sample_text)
        with ConfHandle.open(str(path)) as handle:
            handle.set('xa1541', 'lpt', '1')
        assert 'lpt=1 # first port\n' in path.read_text('latin-1')

    def test_raw_line_untouched(self, conf_file):
        path = conf_file('justtext\n')
        with ConfHandle.open(str(path)) as handle:
            assert handle.get(None, 'justtext') is None
            handle.set(None, 'k', 'v')
        assert path.read_bytes() == b'k=v\njusttext\n'

    def test_set_data(self, conf_file):
        handle = open_config(str(conf_file('')))
        assert set_data(handle, 'A', 'x', '1')
        assert get_data(handle, 'A', 'x') == '1'
        assert close_config(handle)


class TestClose:
    def test_clean_close_does_not_write(self, conf_file):
        path = conf_file('x=1   \n')
        handle = ConfHandle.open(str(path))
        handle.close()
        assert path.read_bytes() == b'x=1   \n'

    def test_flush(self, conf_file):
        path = conf_file('x=1\n')
        handle = ConfHandle.open(str(path))
        handle.set(None, 'x', '2')
        handle.flush()
        assert not handle.dirty
        assert path.read_bytes() == b'x=2\n'
        handle.close()

    def test_closed_handle(self, conf_file):
        handle = ConfHandle.open(str(conf_file('x=1\n')))
        handle.close()
        assert handle.closed
        handle.close()
        with pytest.raises(ConfClosedError):
            handle.get(None, 'x')
        with pytest.raises(ConfClosedError):
            handle.set(None, 'x', '2')

    def test_close_failure(self, conf_file):
        path = conf_file('x=1\n')
        handle = ConfHandle.open(str(path))
        handle.set(None, 'x', '2')
        os.mkdir(handle.staging_path)
        with pytest.raises(ConfWriteError):
            handle.close()
        assert handle.closed
        assert path.read_bytes() == b'x=1\n'

    def test_close_config_failure(self, conf_file):
        path = conf_file('x=1\n')
        handle = open_config(str(path))
        set_data(handle, None, 'x', '2')
        os.mkdir(handle.staging_path)
        assert not close_config(handle)
        assert close_config(None)
