"""Tests for `openid_handshake.kvform` module."""
import unittest

from testfixtures import LogCapture

from openid_handshake.kvform import KVFormError, kvToDict, kvToSeq


class KVToSeqTest(unittest.TestCase):
    """Test `kvToSeq` function."""

    def test_empty(self):
        self.assertEqual(kvToSeq(''), [])

    def test_pairs(self):
        self.assertEqual(kvToSeq('ns:http://specs.openid.net/auth/2.0\nis_valid:true\n'),
                         [('ns', 'http://specs.openid.net/auth/2.0'), ('is_valid', 'true')])

    def test_bytes(self):
        self.assertEqual(kvToSeq(b'is_valid:true\n'), [('is_valid', 'true')])

    def test_first_colon_only(self):
        self.assertEqual(kvToSeq('ns:http://example.com:8000/\n'), [('ns', 'http://example.com:8000/')])

    def test_empty_value(self):
        self.assertEqual(kvToSeq('key:\n'), [('key', '')])

    def test_no_colon_ignored(self):
        with LogCapture() as logbook:
            self.assertEqual(kvToSeq('garbage\nkey:value\n'), [('key', 'value')])
        logbook.check(('openid_handshake.kvform', 'DEBUG',
                       "kvToSeq warning: Line 1 does not contain a colon: 'garbage\\nkey:value\\n'"))

    def test_blank_lines(self):
        self.assertEqual(kvToSeq('\nkey:value\n\n'), [('key', 'value')])

    def test_whitespace(self):
        with LogCapture() as logbook:
            self.assertEqual(kvToSeq(' key : value\r\n'), [('key', 'value')])
        self.assertEqual(len(logbook.records), 2)

    def test_missing_newline(self):
        with LogCapture() as logbook:
            self.assertEqual(kvToSeq('key:value'), [('key', 'value')])
        logbook.check(('openid_handshake.kvform', 'DEBUG', "kvToSeq warning: Does not end in a newline: 'key:value'"))

    def test_strict(self):
        self.assertRaises(KVFormError, kvToSeq, 'key:value', strict=True)
        self.assertRaises(KVFormError, kvToSeq, 'garbage\n', strict=True)
        self.assertRaises(KVFormError, kvToSeq, ':value\n', strict=True)


class KVToDictTest(unittest.TestCase):
    """Test `kvToDict` function."""

    def test_dict(self):
        self.assertEqual(kvToDict('a:b\nc:d\n'), {'a': 'b', 'c': 'd'})

    def test_duplicate_keys(self):
        self.assertEqual(kvToDict('a:b\na:c\n'), {'a': 'c'})
