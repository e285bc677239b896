from waysim.lru import LRUState


def test_initial_order_fills_way_zero_first():
    lru = LRUState(4)
    assert lru.order == [3, 2, 1, 0]
    assert lru.victim() == 0
    # victim() never changes the stack
    assert lru.victim() == 0
    assert lru.order == [3, 2, 1, 0]


def test_victim_is_least_recently_hit():
    lru = LRUState(4)
    for way in (2, 0, 3, 1, 0, 2):
        lru.hit(way)
    assert lru.order == [2, 0, 1, 3]
    assert lru.victim() == 3


def test_hit_on_most_recent_way_is_idempotent():
    lru = LRUState(3)
    lru.hit(1)
    before = list(lru.order)
    lru.hit(1)
    lru.hit(1)
    assert lru.order == before
    assert lru.victim() == 0


def test_swap_exchanges_positions():
    lru = LRUState(4)
    lru.hit(0)
    # [0, 3, 2, 1]
    lru.swap(0, 1)
    assert lru.order == [1, 3, 2, 0]
    assert lru.isPermutation()


def test_single_way():
    lru = LRUState(1)
    lru.hit(0)
    assert lru.victim() == 0
    assert lru.isPermutation()
