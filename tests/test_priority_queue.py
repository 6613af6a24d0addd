from pathfinding.priority_queue import PriorityQueue


def test_dequeues_lowest_priority_first():
    pq = PriorityQueue()
    for element, priority in [("c", 3), ("a", 1), ("d", 4), ("b", 2)]:
        pq.enqueue(element, priority)

    assert [pq.dequeue() for _ in range(4)] == ["a", "b", "c", "d"]
    assert pq.is_empty()


def test_equal_priorities_keep_insertion_order():
    pq = PriorityQueue()
    for element in [(0, 1), (1, 0), (2, 2), (0, 0)]:
        pq.enqueue(element, 5)

    assert [pq.dequeue() for _ in range(4)] == [(0, 1), (1, 0), (2, 2), (0, 0)]


def test_empty_queue():
    pq = PriorityQueue()
    assert pq.is_empty()
    assert len(pq) == 0
    assert pq.dequeue() is None


def test_duplicates_are_kept():
    pq = PriorityQueue()
    pq.enqueue("x", 7)
    pq.enqueue("x", 2)

    assert len(pq) == 2
    assert pq.dequeue() == "x"
    assert pq.dequeue() == "x"
    assert pq.is_empty()


def test_float_priorities():
    pq = PriorityQueue()
    pq.enqueue("far", 2.5)
    pq.enqueue("near", 1.4142)
    assert pq.dequeue() == "near"
