import unittest

from textstream.adapters import NullDevice
from textstream.adapters.null import ClosedLatch
from textstream.errors import ClosedResource, EndOfData
from textstream.source import StreamingMode


class ClosedLatchTest(unittest.TestCase):
    def test_latch(self):
        latch = ClosedLatch("dev")
        latch.check()
        latch.close()

        self.assertTrue(latch.closed)
        with self.assertRaises(ClosedResource):
            latch.check()


class DevNullTest(unittest.TestCase):
    def setUp(self):
        self.dev = NullDevice.null()

    def test_mode(self):
        self.assertIs(self.dev.mode, StreamingMode.NULL_SINK)
        self.assertEqual(self.dev.name, "/dev/null")

    def test_write_discards(self):
        self.assertEqual(self.dev.write(b"hello world"), 11)
        self.assertEqual(self.dev.write_string("héllo"), 6)
        self.assertEqual(self.dev.write_rune("🙂"), 4)
        self.assertEqual(self.dev.read(), b"")

    def test_read_returns_nothing(self):
        buf = bytearray(b"abc")

        self.assertEqual(self.dev.readinto(buf), 0)
        self.assertEqual(buf, bytearray(b"abc"))
        self.assertEqual(self.dev.read(10), b"")

    def test_text_operations_report_no_data(self):
        self.dev.write(b"100\n")

        self.assertEqual(self.dev.string(), "")
        self.assertEqual(self.dev.strings(), [])
        self.assertEqual(self.dev.trimmed_string(), "")
        self.assertEqual(list(self.dev.read_lines()), [])
        self.assertEqual(list(self.dev.read_words()), [])

    def test_parse_int(self):
        with self.assertRaises(EndOfData):
            self.dev.parse_int()

    def test_read_line(self):
        with self.assertRaises(EndOfData):
            self.dev.read_line()

    def test_close(self):
        self.dev.close()

        self.assertTrue(self.dev.closed)
        with self.assertRaises(ClosedResource):
            self.dev.write(b"x")
        with self.assertRaises(ClosedResource):
            self.dev.readinto(bytearray(1))
        with self.assertRaises(ClosedResource):
            self.dev.read()

    def test_text_operations_after_close(self):
        self.dev.close()

        operations = [
            self.dev.string,
            self.dev.strings,
            self.dev.trimmed_string,
            self.dev.parse_int,
            self.dev.read_line,
            self.dev.read_lines,
            self.dev.read_words,
        ]
        for op in operations:
            with self.subTest(op=op.__name__):
                with self.assertRaises(ClosedResource):
                    op()

    def test_close_twice(self):
        self.dev.close()
        self.dev.close()

        self.assertTrue(self.dev.closed)

    def test_context_manager(self):
        with NullDevice.null() as dev:
            dev.write(b"x")
        self.assertTrue(dev.closed)


class DevZeroTest(unittest.TestCase):
    def setUp(self):
        self.dev = NullDevice.zero()

    def test_readinto_fills_zeros(self):
        buf = bytearray(b"hello")

        self.assertEqual(self.dev.readinto(buf), 5)
        self.assertEqual(buf, bytearray(5))

    def test_read(self):
        self.assertEqual(self.dev.read(3), b"\x00\x00\x00")
        self.assertEqual(self.dev.read(0), b"")

    def test_unbounded_read(self):
        with self.assertRaises(ValueError):
            self.dev.read()

    def test_write_discards(self):
        self.assertEqual(self.dev.write(b"abc"), 3)

    def test_text_operations_report_no_data(self):
        self.assertEqual(self.dev.string(), "")
        self.assertEqual(list(self.dev.read_lines()), [])
        with self.assertRaises(EndOfData):
            self.dev.parse_int()
        with self.assertRaises(EndOfData):
            self.dev.read_line()

    def test_close(self):
        self.dev.close()

        with self.assertRaises(ClosedResource):
            self.dev.readinto(bytearray(4))
        with self.assertRaises(ClosedResource):
            self.dev.write(b"abc")
        with self.assertRaises(ClosedResource):
            self.dev.string()
