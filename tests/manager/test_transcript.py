import threading

import pytest

from lanchat.manager.transcript import Transcript


def test_append_keeps_order():
    transcript = Transcript()
    transcript.append("hello")
    transcript.append("Me: hi")
    assert transcript.entries() == ["hello", "Me: hi"]


def test_evicts_oldest_past_capacity():
    transcript = Transcript(100)
    for i in range(1, 106):
        transcript.append(str(i))

    entries = transcript.entries()
    assert len(entries) == 100
    assert entries == [str(i) for i in range(6, 106)]


def test_exactly_full_keeps_everything():
    transcript = Transcript(3)
    for entry in "abc":
        transcript.append(entry)
    assert transcript.entries() == ["a", "b", "c"]


def test_concurrent_appends_stay_bounded():
    transcript = Transcript(50)

    def worker():
        for i in range(500):
            transcript.append(f"{threading.get_ident()}-{i}")

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(transcript) == 50


def test_zero_capacity_rejected():
    with pytest.raises(ValueError):
        Transcript(0)
