import io
import unittest

from fastinput.libc.scan import ByteScanner
from fastinput.store import BUFFER_SIZE, ByteStore, read_to_end


class ByteStoreTests(unittest.TestCase):
    def test_default_buffer_size(self):
        self.assertEqual(8196, BUFFER_SIZE)

    def test_empty(self):
        store = ByteStore(b"")
        self.assertEqual(0, len(store))
        self.assertFalse(store.has_more())
        self.assertIsNone(store.find_newline())

    def test_cursor_moves_forward(self):
        store = ByteStore(b"ab\ncd")
        self.assertEqual(0, store.cursor)
        newline = store.find_newline()
        self.assertEqual(2, newline)
        self.assertEqual(b"ab", bytes(store.take(newline)))
        store.skip(1)
        self.assertEqual(3, store.cursor)
        self.assertIsNone(store.find_newline())
        self.assertEqual(b"cd", bytes(store.take(len(store))))
        self.assertFalse(store.has_more())

    def test_take_is_a_view(self):
        store = ByteStore(b"hello")
        view = store.take(5)
        self.assertIsInstance(view, memoryview)
        self.assertTrue(view.readonly)

    def test_take_rejects_rewind(self):
        store = ByteStore(b"hello")
        store.take(3)
        with self.assertRaises(ValueError):
            store.take(2)
        with self.assertRaises(ValueError):
            store.take(6)
        self.assertEqual(3, store.cursor)

    def test_skip_bounds(self):
        store = ByteStore(b"ab")
        with self.assertRaises(ValueError):
            store.skip(3)
        with self.assertRaises(ValueError):
            store.skip(-1)

    def test_release(self):
        store = ByteStore(b"a\nb")
        store.release()
        self.assertFalse(store.has_more())
        self.assertEqual(3, store.cursor)
        self.assertIsNone(store.find_newline())

    def test_bytes(self):
        self.assertEqual(b"a b", bytes(ByteStore(bytearray(b"a b"))))


class ReadToEndTests(unittest.TestCase):
    def test_in_memory(self):
        self.assertEqual(b"xyz", read_to_end(memoryview(b"xyz")))
        self.assertEqual("ł".encode("utf-8"), read_to_end("ł"))

    def test_readinto_grows_buffer(self):
        data = bytes(range(256)) * 10
        self.assertEqual(data, read_to_end(io.BytesIO(data), buffer_size=7))

    def test_read_fallback(self):
        class ChunkedSource:
            def __init__(self, chunks):
                self._chunks = list(chunks)

            def read(self, size):
                return self._chunks.pop(0) if self._chunks else b""

        self.assertEqual(b"1 2\n3", read_to_end(ChunkedSource([b"1 ", b"2\n", b"3"])))

    def test_text_read(self):
        self.assertEqual("é\n".encode("utf-8"), read_to_end(io.StringIO("é\n"), buffer_size=1))


class ByteScannerTests(unittest.TestCase):
    def test_find(self):
        scanner = ByteScanner(b"a\nb\nc")
        self.assertEqual(5, len(scanner))
        self.assertEqual(1, scanner.find(ord("\n")))
        self.assertEqual(3, scanner.find(ord("\n"), 2))
        self.assertIsNone(scanner.find(ord("\n"), 4))
        self.assertIsNone(scanner.find(ord("\n"), 99))

    def test_find_at_start(self):
        self.assertEqual(0, ByteScanner(b"\n").find(ord("\n")))

    def test_empty(self):
        self.assertIsNone(ByteScanner(b"").find(ord("\n")))

    def test_close(self):
        scanner = ByteScanner(b"\n")
        scanner.close()
        self.assertIsNone(scanner.find(ord("\n")))
        self.assertEqual(0, len(scanner))


if __name__ == "__main__":
    unittest.main()
