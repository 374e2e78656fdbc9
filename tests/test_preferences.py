"""
Theme Preference Tests - Persistence, defaults and degraded backends
"""

import json
import pytest
import redis

from preferences import (
    DARK, LIGHT, PREFERENCE_KEY, MemoryBackend, PersistenceUnavailable, PreferenceStore,
    RedisBackend, SQLiteBackend, create_backend, parse_theme,
)


class BrokenBackend:
    """Backend whose storage is unreachable"""

    def read(self, key):
        raise PersistenceUnavailable("storage offline")

    def write(self, key, value):
        raise PersistenceUnavailable("storage offline")


class TestParseTheme:

    @pytest.mark.parametrize("raw", [None, '', 'not json', '[1, 2]', '{"theme": "sepia"}', '{"other": 1}'])
    def test_malformed_means_dark(self, raw):
        assert parse_theme(raw) == DARK

    def test_current_shape(self):
        assert parse_theme('{"theme": "light"}') == LIGHT

    def test_older_shape(self):
        assert parse_theme('{"state": {"theme": "light"}, "version": 0}') == LIGHT


class TestPreferenceStore:

    def test_defaults_to_dark(self):
        store = PreferenceStore(MemoryBackend())
        assert store.get() == DARK
        assert store.is_dark

    def test_set_persists_record(self):
        backend = MemoryBackend()
        store = PreferenceStore(backend)
        store.set(LIGHT)
        assert json.loads(backend.data[PREFERENCE_KEY]) == {"theme": "light"}

    def test_new_store_reads_persisted_theme(self):
        backend = MemoryBackend()
        PreferenceStore(backend).set(LIGHT)
        assert PreferenceStore(backend).get() == LIGHT

    def test_toggle(self):
        store = PreferenceStore(MemoryBackend())
        assert store.toggle() == LIGHT
        assert store.toggle() == DARK

    def test_invalid_theme_rejected(self):
        backend = MemoryBackend()
        store = PreferenceStore(backend)
        with pytest.raises(ValueError):
            store.set('sepia')
        assert store.get() == DARK
        assert PREFERENCE_KEY not in backend.data

    def test_listener_runs_immediately_and_on_change(self):
        seen = []
        store = PreferenceStore(MemoryBackend())
        store.on_change(seen.append)
        store.set(LIGHT)
        store.set(LIGHT)
        assert seen == [DARK, LIGHT, LIGHT]

    def test_unavailable_backend_degrades_to_memory(self):
        store = PreferenceStore(BrokenBackend())
        assert store.get() == DARK
        assert store.set(LIGHT) == LIGHT
        assert store.get() == LIGHT


class TestBackends:

    def test_sqlite_round_trip(self, tmp_path):
        db_path = str(tmp_path / 'prefs' / 'test.db')
        PreferenceStore(SQLiteBackend(db_path)).set(LIGHT)
        assert PreferenceStore(SQLiteBackend(db_path)).get() == LIGHT

    def test_sqlite_upsert(self, tmp_path):
        backend = SQLiteBackend(str(tmp_path / 'test.db'))
        backend.write('k', 'one')
        backend.write('k', 'two')
        assert backend.read('k') == 'two'
        assert backend.read('missing') is None

    def test_create_backend(self, tmp_path):
        assert isinstance(create_backend('memory'), MemoryBackend)
        assert isinstance(create_backend('redis'), MemoryBackend), "Redis without a client falls back to memory"
        assert isinstance(create_backend('sqlite', db_path=str(tmp_path / 'x.db')), SQLiteBackend)


class FakeRedis:
    """In-process stand-in for redis.Redis; values come back as bytes like the real client"""

    def __init__(self):
        self.store = {}

    def get(self, name):
        return self.store.get(name)

    def set(self, name, value):
        self.store[name] = value.encode('utf-8') if isinstance(value, str) else value
        return True


class DownRedis:
    """Client whose server is unreachable"""

    def get(self, name):
        raise redis.ConnectionError("Error 111 connecting to localhost:1. Connection refused.")

    def set(self, name, value):
        raise redis.ConnectionError("Error 111 connecting to localhost:1. Connection refused.")


class TestBackendFailures:
    """Real backends report storage failures so the store keeps working in memory"""

    def test_corrupt_sqlite_file(self, tmp_path):
        db_path = tmp_path / 'corrupt.db'
        db_path.write_bytes(b'this is not a sqlite database' * 64)

        backend = SQLiteBackend(str(db_path))
        with pytest.raises(PersistenceUnavailable):
            backend.read(PREFERENCE_KEY)
        with pytest.raises(PersistenceUnavailable):
            backend.write(PREFERENCE_KEY, '{"theme": "light"}')

        store = PreferenceStore(backend)
        assert store.get() == DARK
        assert store.set(LIGHT) == LIGHT
        assert store.get() == LIGHT

    def test_redis_down(self):
        backend = RedisBackend(DownRedis())
        with pytest.raises(PersistenceUnavailable):
            backend.read(PREFERENCE_KEY)
        with pytest.raises(PersistenceUnavailable):
            backend.write(PREFERENCE_KEY, '{"theme": "light"}')

        store = PreferenceStore(backend)
        assert store.get() == DARK
        assert store.set(LIGHT) == LIGHT
        assert store.get() == LIGHT


class TestRedisBackend:

    def test_round_trip_decodes_bytes(self):
        client = FakeRedis()
        PreferenceStore(RedisBackend(client)).set(LIGHT)

        assert client.store['preferences:' + PREFERENCE_KEY] == b'{"theme": "light"}'
        assert RedisBackend(client).read(PREFERENCE_KEY) == '{"theme": "light"}'
        assert PreferenceStore(RedisBackend(client)).get() == LIGHT

    def test_custom_prefix(self):
        client = FakeRedis()
        RedisBackend(client, prefix='em:').write('k', 'v')
        assert client.store == {'em:k': b'v'}

    def test_missing_key(self):
        assert RedisBackend(FakeRedis()).read(PREFERENCE_KEY) is None

    def test_create_backend_with_client(self):
        assert isinstance(create_backend('redis', redis_client=FakeRedis()), RedisBackend)
