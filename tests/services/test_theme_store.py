import threading

import pytest

from checkcx.domain.theme import THEME_STORAGE_KEY, ResolvedTheme, ThemePreference
from checkcx.services.color_scheme import StaticColorSchemeQuery
from checkcx.services.local_storage import FileLocalStorage, LocalStorage
from checkcx.services.theme_store import DocumentRoot, ThemeStore


def _store(storage=None, prefers_dark=False):
    storage = storage if storage is not None else LocalStorage()
    media = StaticColorSchemeQuery(prefers_dark=prefers_dark)
    return ThemeStore(storage, media).start(), media


@pytest.mark.parametrize("stored", [None, "", "blue", "DARK"])
def test_missing_or_invalid_stored_value_defaults_to_system(stored):
    storage = LocalStorage({THEME_STORAGE_KEY: stored} if stored is not None else {})
    store, _ = _store(storage)
    assert store.get_preference() is ThemePreference.SYSTEM


def test_stored_value_is_read_on_start():
    store, _ = _store(LocalStorage({THEME_STORAGE_KEY: "dark"}))
    assert store.get_preference() is ThemePreference.DARK
    assert store.root.is_dark
    assert store.root.color_scheme == "dark"
    assert store.root.dataset["theme"] == "dark"


def test_explicit_dark_ignores_os_preference():
    store, media = _store(prefers_dark=False)
    store.set_preference("dark")
    assert store.get_resolved_theme() is ResolvedTheme.DARK
    media.set_prefers_dark(True)
    media.set_prefers_dark(False)
    assert store.get_resolved_theme() is ResolvedTheme.DARK


def test_system_follows_os_changes_without_set_preference():
    store, media = _store(prefers_dark=True)
    store.set_preference("system")
    assert store.get_resolved_theme() is ResolvedTheme.DARK
    assert store.root.is_dark

    media.set_prefers_dark(False)

    assert store.get_resolved_theme() is ResolvedTheme.LIGHT
    assert not store.root.is_dark
    assert store.root.color_scheme == "light"


def test_os_listener_only_attached_while_system():
    store, media = _store()
    assert media.listener_count() == 1

    store.set_preference("light")
    assert media.listener_count() == 0

    store.set_preference("system")
    assert media.listener_count() == 1

    store.close()
    assert media.listener_count() == 0


def test_set_preference_persists_and_applies():
    storage = LocalStorage()
    store, _ = _store(storage)

    store.set_preference(ThemePreference.LIGHT)

    assert storage.get_item(THEME_STORAGE_KEY) == "light"
    assert store.root.dataset["theme"] == "light"
    assert store.root.color_scheme == "light"


def test_invalid_preference_normalizes_to_system():
    storage = LocalStorage()
    store, _ = _store(storage)
    store.set_preference("dark")

    assert store.set_preference("blue") is ThemePreference.SYSTEM
    assert storage.get_item(THEME_STORAGE_KEY) == "system"


def test_write_in_one_context_updates_another():
    storage = LocalStorage()
    media = StaticColorSchemeQuery(prefers_dark=False)
    first = ThemeStore(storage, media, DocumentRoot()).start()
    second = ThemeStore(storage, media, DocumentRoot()).start()
    seen = []
    second.subscribe(lambda: seen.append(second.get_resolved_theme()))

    first.set_preference("dark")

    assert second.get_preference() is ThemePreference.DARK
    assert second.get_resolved_theme() is ResolvedTheme.DARK
    assert second.root.is_dark
    assert seen == [ResolvedTheme.DARK]


def test_write_from_another_process_reaches_store_on_refresh(tmp_path):
    path = str(tmp_path / "prefs.json")
    ours = FileLocalStorage(path)
    store, _ = _store(ours)

    FileLocalStorage(path).set_item(THEME_STORAGE_KEY, "dark")
    ours.refresh()

    assert store.get_resolved_theme() is ResolvedTheme.DARK


def test_other_keys_are_ignored():
    storage = LocalStorage()
    store, _ = _store(storage)
    storage.set_item("unrelated", "dark")
    assert store.get_preference() is ThemePreference.SYSTEM


def test_storage_failures_degrade_to_system():
    class BrokenStorage(LocalStorage):
        def get_item(self, key):
            raise OSError("disk gone")

        def _persist(self):
            raise OSError("read-only")

    store, _ = _store(BrokenStorage(), prefers_dark=True)
    assert store.get_preference() is ThemePreference.SYSTEM
    assert store.get_resolved_theme() is ResolvedTheme.DARK

    store.set_preference("light")
    assert store.get_resolved_theme() is ResolvedTheme.LIGHT


def test_unreadable_os_preference_resolves_light():
    class BrokenMedia(StaticColorSchemeQuery):
        @property
        def matches(self):
            raise RuntimeError("no media queries here")

    store = ThemeStore(LocalStorage(), BrokenMedia()).start()
    assert store.get_resolved_theme() is ResolvedTheme.LIGHT


def test_unsubscribe_stops_callbacks():
    store, _ = _store()
    calls = []
    unsubscribe = store.subscribe(lambda: calls.append(1))
    store.set_preference("dark")
    unsubscribe()
    store.set_preference("light")
    assert calls == [1]


def test_concurrent_writes_through_shared_storage_complete():
    storage = LocalStorage()
    barrier = threading.Barrier(2, timeout=1)
    # both writers reach the fan-out before either finishes it
    storage.add_listener(lambda event: barrier.wait())
    media = StaticColorSchemeQuery()
    first = ThemeStore(storage, media, DocumentRoot()).start()
    second = ThemeStore(storage, media, DocumentRoot()).start()

    threads = [
        threading.Thread(target=first.set_preference, args=("dark",), daemon=True),
        threading.Thread(target=second.set_preference, args=("light",), daemon=True),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=3)

    assert not any(t.is_alive() for t in threads)
    assert storage.get_item(THEME_STORAGE_KEY) in ("dark", "light")


def test_subscribers_run_without_the_store_lock():
    store, _ = _store()
    acquired = []

    def check_lock_free():
        # another thread must be able to take the lock while we run
        result = []
        t = threading.Thread(target=lambda: result.append(store._lock.acquire(timeout=1)))
        t.start()
        t.join()
        if result[0]:
            store._lock.release()
        acquired.extend(result)

    store.subscribe(check_lock_free)
    store.set_preference("dark")

    assert acquired == [True]
