"""Tests for location number allocation."""
import random
import threading
import pytest
from doorcode.core.errors import SequenceExhaustedError
from doorcode.core.models import AreaType
from doorcode.core.sequence import (
    InMemoryCounterStore,
    RandomSequenceAllocator,
    SequenceAllocator,
    collision_probability,
)


def test_first_sequence_is_0001(counter_store):
    allocator = SequenceAllocator(counter_store)
    assert allocator.next_sequence("LA", "15", AreaType.ZONE, "001") == "0001"
    assert allocator.next_sequence("LA", "15", AreaType.ZONE, "001") == "0002"


def test_scopes_are_independent(counter_store):
    allocator = SequenceAllocator(counter_store)
    allocator.next_sequence("LA", "15", AreaType.ZONE, "001")

    assert allocator.next_sequence("LA", "15", AreaType.ZONE, "002") == "0001"
    assert allocator.next_sequence("LA", "15", AreaType.STREET, "001") == "0001"
    assert counter_store.peek("NG-LA-15-Z001") == 1


def test_exhausted_scope_raises():
    store = InMemoryCounterStore()
    store._counters["NG-LA-15-Z001"] = 9999
    allocator = SequenceAllocator(store)

    with pytest.raises(SequenceExhaustedError) as exc_info:
        allocator.next_sequence("LA", "15", AreaType.ZONE, "001")
    assert exc_info.value.scope_key == "NG-LA-15-Z001"


def test_peek_sequence_does_not_consume(counter_store):
    allocator = SequenceAllocator(counter_store)
    assert allocator.peek_sequence("LA", "15", AreaType.ZONE, "001") == "0001"
    assert allocator.peek_sequence("LA", "15", AreaType.ZONE, "001") == "0001"
    assert counter_store.peek("NG-LA-15-Z001") == 0

    assert allocator.next_sequence("LA", "15", AreaType.ZONE, "001") == "0001"
    assert allocator.peek_sequence("LA", "15", AreaType.ZONE, "001") == "0002"


def test_peek_sequence_exhausted_scope():
    store = InMemoryCounterStore()
    store._counters["NG-LA-15-Z001"] = 9999

    with pytest.raises(SequenceExhaustedError):
        SequenceAllocator(store).peek_sequence("LA", "15", AreaType.ZONE, "001")
    assert store.peek("NG-LA-15-Z001") == 9999


def _allocate_concurrently(allocator, workers=8, per_worker=25):
    results = []
    lock = threading.Lock()

    def worker():
        for _ in range(per_worker):
            value = allocator.next_sequence("KD", "008", AreaType.LANDMARK, "010")
            with lock:
                results.append(value)

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return results


def test_concurrent_allocations_are_distinct(counter_store):
    results = _allocate_concurrently(SequenceAllocator(counter_store))
    assert len(results) == 200
    assert len(set(results)) == 200
    assert "0000" not in results


def test_concurrent_allocations_duckdb(temp_db):
    results = _allocate_concurrently(SequenceAllocator(temp_db), workers=4, per_worker=10)
    assert len(set(results)) == 40
    assert temp_db.peek("NG-KD-008-LMK010") == 40


def test_collision_probability():
    assert collision_probability(1) == 0.0
    assert 0.10 < collision_probability(50) < 0.13
    assert 0.49 < collision_probability(118) < 0.51
    assert collision_probability(10001) == 1.0


def test_random_allocator_format():
    allocator = RandomSequenceAllocator(random.Random(42))
    value = allocator.next_sequence("LA", "15", AreaType.ZONE, "001")
    assert len(value) == 4
    assert value.isdigit()
