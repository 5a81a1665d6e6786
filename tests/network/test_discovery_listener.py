"""
Discovery listener tests: datagram handling in isolation, then over a real UDP socket on localhost.
"""

import socket
import time
import unittest
from unittest.mock import Mock, patch

from lanchat.manager.peer_registry import PeerRegistry
from lanchat.network.discovery_listener import DiscoveryListener
from lanchat.utils.errors import TransportSetupError


def wait_for(predicate, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.02)
    return predicate()


class TestHandleDatagram(unittest.TestCase):

    def setUp(self):
        self.registry = PeerRegistry()
        self.listener = DiscoveryListener(self.registry, 0)
        self.roster_changed = Mock()
        self.listener.on_roster_changed(self.roster_changed)

    def test_valid_announcement_upserts_peer(self):
        self.assertTrue(self.listener.handle_datagram(b"Alice@:8080", ("192.168.10.4", 9999)))

        roster = self.registry.snapshot()
        self.assertEqual(len(roster), 1)
        self.assertEqual(roster[0].name, "Alice")
        self.assertEqual(roster[0].endpoint, "192.168.10.4:8080")
        self.roster_changed.assert_called_once_with()

    def test_endpoint_uses_sender_ip_not_sender_port(self):
        self.listener.handle_datagram(b"Bob@:8123", ("10.1.2.3", 54321))
        self.assertIn("10.1.2.3:8123", self.registry)

    def test_reannouncement_updates_in_place(self):
        self.listener.handle_datagram(b"Alice@:8080", ("192.168.10.4", 9999))
        self.listener.handle_datagram(b"Alicia@:8080", ("192.168.10.4", 9999))

        self.assertEqual(len(self.registry), 1)
        self.assertEqual(self.registry.get("192.168.10.4:8080").name, "Alicia")
        self.assertEqual(self.roster_changed.call_count, 2)

    def test_malformed_datagrams_leave_registry_unchanged(self):
        self.listener.handle_datagram(b"Alice@:8080", ("192.168.10.4", 9999))
        before = self.registry.snapshot()

        for payload in (b"no separator", b"a@b@:8080", b"", b"M-SEARCH * HTTP/1.1\r\n"):
            self.assertFalse(self.listener.handle_datagram(payload, ("192.168.10.9", 9999)))

        self.assertEqual(self.registry.snapshot(), before)
        self.roster_changed.assert_called_once_with()

    def test_non_ascii_digit_ports_are_ignored(self):
        for payload in ("x@:²", "x@:١٢٣"):
            self.assertFalse(self.listener.handle_datagram(payload.encode(), ("10.0.0.1", 9999)))
        self.assertEqual(len(self.registry), 0)
        self.roster_changed.assert_not_called()

    def test_failing_callback_does_not_break_discovery(self):
        self.listener.on_roster_changed(Mock(side_effect=RuntimeError("ui gone")))
        self.assertTrue(self.listener.handle_datagram(b"Alice@:8080", ("192.168.10.4", 9999)))
        self.assertEqual(len(self.registry), 1)

    def test_peer_ttl_prunes_stale_peers(self):
        listener = DiscoveryListener(self.registry, 0, peer_ttl=30.0)
        self.registry.upsert("10.0.0.1:8080", "gone", seen_at=time.time() - 60)

        listener.handle_datagram(b"Alice@:8080", ("192.168.10.4", 9999))

        self.assertNotIn("10.0.0.1:8080", self.registry)
        self.assertIn("192.168.10.4:8080", self.registry)

    def test_no_ttl_keeps_stale_peers(self):
        self.registry.upsert("10.0.0.1:8080", "quiet", seen_at=0.0)
        self.listener.handle_datagram(b"Alice@:8080", ("192.168.10.4", 9999))
        self.assertIn("10.0.0.1:8080", self.registry)


class TestDiscoveryOverUdp(unittest.TestCase):

    def setUp(self):
        self.registry = PeerRegistry()
        self.listener = DiscoveryListener(self.registry, 0, bind_host="127.0.0.1")
        self.listener.start()
        self.client = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def tearDown(self):
        self.client.close()
        self.listener.stop()

    def test_receives_announcement(self):
        self.client.sendto(b"Carol@:8080", ("127.0.0.1", self.listener.port))
        self.assertTrue(wait_for(lambda: "127.0.0.1:8080" in self.registry))
        self.assertEqual(self.registry.get("127.0.0.1:8080").name, "Carol")

    def test_garbage_then_valid(self):
        self.client.sendto(b"garbage", ("127.0.0.1", self.listener.port))
        self.client.sendto(b"Dave@:9000", ("127.0.0.1", self.listener.port))
        self.assertTrue(wait_for(lambda: len(self.registry) == 1))
        self.assertIn("127.0.0.1:9000", self.registry)

    def test_keeps_running_after_bad_port_digits(self):
        self.client.sendto("x@:²".encode(), ("127.0.0.1", self.listener.port))
        self.client.sendto(b"Dave@:9000", ("127.0.0.1", self.listener.port))
        self.assertTrue(wait_for(lambda: len(self.registry) == 1))
        self.assertIn("127.0.0.1:9000", self.registry)
        self.assertTrue(self.listener.running)

    def test_keeps_running_when_handling_fails(self):
        with patch.object(self.listener, "handle_datagram", side_effect=[RuntimeError("boom"), True]) as handle:
            self.client.sendto(b"Eve@:9000", ("127.0.0.1", self.listener.port))
            self.client.sendto(b"Eve@:9000", ("127.0.0.1", self.listener.port))
            self.assertTrue(wait_for(lambda: handle.call_count == 2))
        self.assertTrue(self.listener.running)

    def test_stop_ends_thread(self):
        self.assertTrue(self.listener.running)
        self.listener.stop()
        self.assertFalse(self.listener.running)


class TestDiscoveryBindFailure(unittest.TestCase):

    def test_bind_failure_raises_setup_error(self):
        listener = DiscoveryListener(PeerRegistry(), 0, bind_host="203.0.113.250")
        with self.assertRaises(TransportSetupError):
            listener.start()
        self.assertFalse(listener.running)


if __name__ == "__main__":
    unittest.main()
