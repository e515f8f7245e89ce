from digital_menu.services.client_cache import THEME_CACHE_KEY, JsonFileClientCache, MemoryClientCache
from digital_menu.services.event_bus import THEME_UPDATED_EVENT, EventBus


def test_json_file_cache_survives_new_instance(tmp_path):
    path = tmp_path / "storage" / "cache.json"

    JsonFileClientCache(path).set(THEME_CACHE_KEY, "#123456")

    assert JsonFileClientCache(path).get(THEME_CACHE_KEY) == "#123456"


def test_json_file_cache_ignores_corrupted_file(tmp_path):
    path = tmp_path / "cache.json"
    path.write_text("{not json", encoding="utf-8")
    cache = JsonFileClientCache(path)

    assert cache.get(THEME_CACHE_KEY) is None

    cache.set(THEME_CACHE_KEY, "#FFFFFF")
    assert cache.get(THEME_CACHE_KEY) == "#FFFFFF"


def test_json_file_cache_remove(tmp_path):
    cache = JsonFileClientCache(tmp_path / "cache.json")
    cache.set(THEME_CACHE_KEY, "#FFFFFF")
    cache.set("other", "value")

    cache.remove(THEME_CACHE_KEY)
    cache.remove("missing")

    assert cache.get(THEME_CACHE_KEY) is None
    assert cache.get("other") == "value"


def test_memory_cache_does_not_share_initial_dict():
    initial = {THEME_CACHE_KEY: "#000000"}
    cache = MemoryClientCache(initial)
    cache.set(THEME_CACHE_KEY, "#FFFFFF")

    assert initial[THEME_CACHE_KEY] == "#000000"


def test_event_bus_isolates_failing_handler():
    bus = EventBus()
    received = []

    def broken(_payload):
        raise RuntimeError("boom")

    bus.subscribe(THEME_UPDATED_EVENT, broken)
    bus.subscribe(THEME_UPDATED_EVENT, received.append)

    bus.emit(THEME_UPDATED_EVENT, {"appBg": "#FFFFFF"})
    bus.emit(THEME_UPDATED_EVENT)

    assert received == [{"appBg": "#FFFFFF"}, {}]


def test_event_bus_unsubscribe():
    bus = EventBus()
    handler = bus.subscribe(THEME_UPDATED_EVENT, lambda _payload: None)
    assert bus.handler_count(THEME_UPDATED_EVENT) == 1

    bus.unsubscribe(THEME_UPDATED_EVENT, handler)
    bus.unsubscribe(THEME_UPDATED_EVENT, handler)

    assert bus.handler_count(THEME_UPDATED_EVENT) == 0
