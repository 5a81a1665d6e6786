import threading
import unittest

from lanchat.manager.peer_registry import PeerRegistry
from lanchat.utils.errors import IndexOutOfRange


class TestPeerRegistry(unittest.TestCase):
    """Roster upsert, ordering and selection."""

    def setUp(self):
        self.registry = PeerRegistry()

    def test_upsert_new_peer(self):
        self.assertTrue(self.registry.upsert("192.168.10.4:8080", "Alice"))
        self.assertEqual(len(self.registry), 1)
        peer = self.registry.get("192.168.10.4:8080")
        self.assertEqual(peer.name, "Alice")
        self.assertEqual(peer.host, "192.168.10.4")
        self.assertEqual(peer.port, 8080)

    def test_upsert_same_endpoint_overwrites_name(self):
        self.registry.upsert("192.168.10.4:8080", "Alice", seen_at=100.0)
        self.assertFalse(self.registry.upsert("192.168.10.4:8080", "Alicia", seen_at=200.0))

        self.assertEqual(len(self.registry), 1)
        peer = self.registry.get("192.168.10.4:8080")
        self.assertEqual(peer.name, "Alicia")
        self.assertEqual(peer.last_seen, 200.0)

    def test_same_name_on_different_endpoints_is_two_peers(self):
        self.registry.upsert("192.168.10.4:8080", "Alice")
        self.registry.upsert("192.168.10.5:8080", "Alice")
        self.assertEqual(len(self.registry), 2)

    def test_snapshot_keeps_insertion_order_across_overwrites(self):
        self.registry.upsert("10.0.0.1:8080", "A")
        self.registry.upsert("10.0.0.2:8080", "B")
        self.registry.upsert("10.0.0.1:8080", "A2")

        names = [peer.name for peer in self.registry.snapshot()]
        self.assertEqual(names, ["A2", "B"])

    def test_snapshot_twice_is_identical(self):
        for i in range(5):
            self.registry.upsert(f"10.0.0.{i}:8080", f"peer{i}")
        self.assertEqual(self.registry.snapshot(), self.registry.snapshot())

    def test_snapshot_is_a_copy(self):
        self.registry.upsert("10.0.0.1:8080", "A")
        snapshot = self.registry.snapshot()
        snapshot[0].name = "changed"
        snapshot.clear()
        self.assertEqual(self.registry.get("10.0.0.1:8080").name, "A")

    def test_get_by_index_matches_snapshot(self):
        for i in range(3):
            self.registry.upsert(f"10.0.0.{i}:8080", f"peer{i}")
        snapshot = self.registry.snapshot()
        for index, peer in enumerate(snapshot):
            self.assertEqual(self.registry.get_by_index(index), peer.endpoint)

    def test_get_by_index_out_of_range(self):
        self.registry.upsert("10.0.0.1:8080", "A")
        with self.assertRaises(IndexOutOfRange):
            self.registry.get_by_index(1)
        with self.assertRaises(IndexOutOfRange):
            self.registry.get_by_index(-1)

    def test_get_by_index_on_empty_registry(self):
        with self.assertRaises(IndexError):
            self.registry.get_by_index(0)

    def test_prune_removes_only_stale_peers(self):
        self.registry.upsert("10.0.0.1:8080", "old", seen_at=100.0)
        self.registry.upsert("10.0.0.2:8080", "fresh", seen_at=195.0)

        stale = self.registry.prune(30.0, now=200.0)

        self.assertEqual([peer.name for peer in stale], ["old"])
        self.assertNotIn("10.0.0.1:8080", self.registry)
        self.assertIn("10.0.0.2:8080", self.registry)

    def test_concurrent_upserts(self):
        def worker(offset):
            for i in range(200):
                self.registry.upsert(f"10.0.{offset}.{i % 50}:8080", f"w{offset}-{i}")
                self.registry.snapshot()

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(self.registry), 4 * 50)


if __name__ == "__main__":
    unittest.main()
