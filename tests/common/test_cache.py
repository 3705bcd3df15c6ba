from kindergarten_staff.common.cache import TTLCache


class _Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_entries_expire_after_ttl():
    clock = _Clock()
    cache = TTLCache(120, clock=clock)
    cache.set("k", "v")

    clock.now = 119.0
    assert cache.get("k") == "v"

    clock.now = 120.0
    assert cache.get("k") is None
    assert len(cache) == 0


def test_get_or_load_calls_loader_once():
    calls = []
    cache = TTLCache(None)

    def load():
        calls.append(1)
        return None

    assert cache.get_or_load("k", load) is None
    assert cache.get_or_load("k", load) is None
    assert len(calls) == 1


def test_clear_drops_everything():
    cache = TTLCache(None)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.clear()
    assert cache.get("a") is None
    assert len(cache) == 0
