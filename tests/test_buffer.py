import threading
import unittest

from termcapture import ENCODING, CaptureBuffer


class TestCaptureBuffer(unittest.TestCase):
    """Test the in-memory capture buffer"""

    def setUp(self):
        self.lock = threading.Lock()
        self.buffer = CaptureBuffer(self.lock)

    def test_write_appends_in_order(self):
        """Test that writes accumulate in write order"""
        self.buffer.write("a")
        self.buffer.write("b\n")
        self.buffer.write("c")
        self.assertEqual(self.buffer.getvalue(), "ab\nc")

    def test_write_returns_length(self):
        """Test that write() reports the number of characters written"""
        self.assertEqual(self.buffer.write("hello"), 5)

    def test_write_rejects_bytes(self):
        """Test that only text can be written, like io.StringIO"""
        with self.assertRaises(TypeError):
            self.buffer.write(b"bytes")

    def test_print_into_buffer(self):
        """Test that print() can target the buffer directly"""
        print("one", "two", file=self.buffer, flush=True)
        self.assertEqual(self.buffer.getvalue(), "one two\n")

    def test_stream_properties(self):
        """Test the text stream interface expected of sys.stdout"""
        self.assertTrue(self.buffer.writable())
        self.assertFalse(self.buffer.isatty())
        self.assertEqual(self.buffer.encoding, ENCODING)

    def test_reset_empties(self):
        """Test that reset() clears everything"""
        self.buffer.write("data")
        self.buffer.reset()
        self.assertEqual(self.buffer.getvalue(), "")

    def test_discard_keeps_later_text(self):
        """Test that discard() only drops the persisted prefix"""
        self.buffer.write("persisted")
        count = len(self.buffer.getvalue())
        self.buffer.write(" and newer")
        self.buffer.discard(count)
        self.assertEqual(self.buffer.getvalue(), " and newer")

    def test_discard_everything(self):
        """Test discarding the whole buffer"""
        self.buffer.write("all")
        self.buffer.discard(3)
        self.assertEqual(self.buffer.getvalue(), "")

    def test_release_then_write_reallocates(self):
        """Test that a released buffer comes back on the next write"""
        self.buffer.write("gone")
        self.buffer.release()
        self.assertEqual(self.buffer.getvalue(), "")
        self.buffer.write("back")
        self.assertEqual(self.buffer.getvalue(), "back")

    def test_release_then_reset_reallocates(self):
        """Test that reset() works on released storage"""
        self.buffer.release()
        self.buffer.reset()
        self.buffer.write("x")
        self.assertEqual(self.buffer.getvalue(), "x")

    def test_write_takes_shared_lock(self):
        """Test that write() blocks while the shared lock is held elsewhere"""
        done = threading.Event()

        def writer():
            self.buffer.write("late")
            done.set()

        with self.lock:
            thread = threading.Thread(target=writer)
            thread.start()
            self.assertFalse(done.wait(timeout=0.1))
            self.assertEqual(self.buffer.getvalue(), "")

        thread.join(timeout=2.0)
        self.assertTrue(done.is_set())
        self.assertEqual(self.buffer.getvalue(), "late")


if __name__ == "__main__":
    unittest.main()
