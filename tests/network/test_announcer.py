import socket
import unittest

from lanchat.network.announcer import Announcer


class TestAnnouncer(unittest.TestCase):

    def setUp(self):
        self.receiver = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.receiver.bind(("127.0.0.1", 0))
        self.receiver.settimeout(3)
        self.port = self.receiver.getsockname()[1]

    def tearDown(self):
        self.receiver.close()

    def test_announce_once_sends_name_and_port(self):
        announcer = Announcer("Alice", 8080, "127.0.0.1", self.port)
        try:
            self.assertTrue(announcer.announce_once())
            data, _ = self.receiver.recvfrom(1024)
        finally:
            announcer.stop()

        self.assertEqual(data, b"Alice@:8080")
        self.assertEqual(announcer.announcements_sent, 1)

    def test_loop_repeats_every_interval(self):
        announcer = Announcer("Alice", 8080, "127.0.0.1", self.port, interval=0.05)
        announcer.start()
        try:
            first, _ = self.receiver.recvfrom(1024)
            second, _ = self.receiver.recvfrom(1024)
        finally:
            announcer.stop()

        self.assertEqual(first, b"Alice@:8080")
        self.assertEqual(second, b"Alice@:8080")
        self.assertFalse(announcer.running)

    def test_send_failure_is_not_fatal(self):
        # Port 0 is never a valid destination
        announcer = Announcer("Alice", 8080, "127.0.0.1", 0)
        try:
            self.assertFalse(announcer.announce_once())
            self.assertFalse(announcer.announce_once())
        finally:
            announcer.stop()
        self.assertEqual(announcer.announcements_sent, 0)

    def test_loop_survives_send_failures(self):
        announcer = Announcer("Alice", 8080, "127.0.0.1", 0, interval=0.02)
        announcer.start()
        try:
            self.receiver.settimeout(0.2)
            with self.assertRaises(socket.timeout):
                self.receiver.recvfrom(1024)
            self.assertTrue(announcer.running)
        finally:
            announcer.stop()


if __name__ == "__main__":
    unittest.main()
