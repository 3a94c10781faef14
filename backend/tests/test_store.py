"""Tests for the in-memory game session store."""

import random
import threading
from collections import Counter
from concurrent.futures import ThreadPoolExecutor

import pytest

from models import TARGET_MAX, TARGET_MIN
from services.store import GameNotFoundError, SessionStore


def test_create_returns_distinct_ids_with_targets_in_range() -> None:
    store = SessionStore()
    first = store.create()
    second = store.create()

    assert first != second
    assert len(store) == 2
    for game_id in (first, second):
        assert TARGET_MIN <= store.get(game_id).target <= TARGET_MAX


def test_create_uses_injected_rng() -> None:
    store = SessionStore(rng=random.Random(1234))
    expected = random.Random(1234).randint(TARGET_MIN, TARGET_MAX)
    game_id = store.create()
    assert store.get(game_id).target == expected


def test_create_with_explicit_target() -> None:
    store = SessionStore()
    game_id = store.create(target=50)
    state = store.get(game_id)
    assert state.id == game_id
    assert state.target == 50
    assert state.guesses == []


@pytest.mark.parametrize("target", [0, 101, -3])
def test_create_rejects_out_of_range_target(target: int) -> None:
    store = SessionStore()
    with pytest.raises(ValueError):
        store.create(target=target)
    assert len(store) == 0


def test_record_guess_preserves_order() -> None:
    store = SessionStore()
    game_id = store.create(target=30)

    store.record_guess(game_id, 10)
    updated = store.record_guess(game_id, 40)

    assert updated.guesses == [10, 40]
    assert store.get(game_id).guesses == [10, 40]
    assert store.get(game_id).target == 30


def test_returned_state_is_a_snapshot() -> None:
    store = SessionStore()
    game_id = store.create(target=30)
    snapshot = store.record_guess(game_id, 10)

    snapshot.guesses.append(999)

    assert store.get(game_id).guesses == [10]


@pytest.mark.parametrize("game_id", ["nonexistent", "", None, 42])
def test_unknown_or_malformed_id_raises_not_found(game_id: object) -> None:
    store = SessionStore()
    store.create()
    with pytest.raises(GameNotFoundError):
        store.get(game_id)  # type: ignore[arg-type]
    with pytest.raises(GameNotFoundError):
        store.record_guess(game_id, 5)  # type: ignore[arg-type]
    assert game_id not in store


def test_not_found_is_a_key_error() -> None:
    store = SessionStore()
    with pytest.raises(KeyError):
        store.get("missing")


def test_concurrent_guesses_on_one_game_are_neither_lost_nor_duplicated() -> None:
    store = SessionStore()
    game_id = store.create(target=50)
    workers = 16
    per_worker = 50
    start = threading.Barrier(workers)

    def _guess_many(worker: int) -> None:
        start.wait()
        for i in range(per_worker):
            store.record_guess(game_id, worker * 1000 + i)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        list(pool.map(_guess_many, range(workers)))

    guesses = store.get(game_id).guesses
    expected = [w * 1000 + i for w in range(workers) for i in range(per_worker)]
    assert len(guesses) == workers * per_worker
    assert Counter(guesses) == Counter(expected)
    # Each worker's own guesses keep their submission order.
    for w in range(workers):
        own = [g for g in guesses if g // 1000 == w]
        assert own == sorted(own)


def test_concurrent_creates_and_guesses_across_games() -> None:
    store = SessionStore()

    def _play(_: int) -> str:
        game_id = store.create()
        store.record_guess(game_id, 1)
        store.record_guess(game_id, 2)
        return game_id

    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(_play, range(64)))

    assert len(set(ids)) == 64
    assert len(store) == 64
    for game_id in ids:
        assert store.get(game_id).guesses == [1, 2]


def test_clear_empties_store() -> None:
    store = SessionStore()
    game_id = store.create()
    store.clear()
    assert len(store) == 0
    assert game_id not in store
