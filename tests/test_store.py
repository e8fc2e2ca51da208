import threading

import pytest

from receipt_processor.store.memory import MemoryReceiptStore, ReceiptStore


def test_put_then_get(store):
    store.put("a", 12)
    assert store.get("a") == 12
    assert store.get("b") is None


def test_zero_points_is_stored(store):
    store.put("zero", 0)
    assert store.get("zero") == 0
    assert "zero" in store


def test_store_is_abstract():
    with pytest.raises(TypeError):
        ReceiptStore()


def test_concurrent_puts():
    store = MemoryReceiptStore()

    def worker(n):
        for i in range(200):
            store.put(f"{n}-{i}", i)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store) == 8 * 200
    assert store.get("7-199") == 199
