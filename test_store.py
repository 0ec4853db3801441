"""Contract tests shared by every task store backend."""
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from tasktracker.errors import NotFoundError, ValidationError
from tasktracker.schemas.task import TaskUpdate
from tasktracker.store import MemoryTaskStore, SqlTaskStore, build_store
from tasktracker.store.locking import ReadWriteLock
from tasktracker.config import Settings


def test_create_returns_fresh_incomplete_task(store):
    task = store.create("Buy milk")
    assert task.id == 1
    assert task.description == "Buy milk"
    assert task.completed is False


def test_create_trims_description(store):
    assert store.create("  Walk the dog \n").description == "Walk the dog"


@pytest.mark.parametrize("description", ["", "   ", "\t\n"])
def test_create_rejects_blank_description(store, description):
    with pytest.raises(ValidationError):
        store.create(description)
    assert store.list() == []


def test_ids_strictly_increase(store):
    ids = [store.create(f"task {n}").id for n in range(10)]
    assert ids == sorted(ids)
    assert len(set(ids)) == len(ids)


def test_ids_not_reused_after_delete(store):
    first = store.create("a")
    second = store.create("b")
    store.delete(second.id)
    store.delete(first.id)
    third = store.create("c")
    assert third.id > second.id


def test_duplicate_descriptions_allowed(store):
    a = store.create("same")
    b = store.create("same")
    assert a.id != b.id
    assert len(store.list()) == 2


def test_update_completed_only(store):
    task = store.create("Buy milk")
    updated = store.update(task.id, TaskUpdate(completed=True))
    assert updated.completed is True
    assert updated.description == "Buy milk"


def test_update_description_only(store):
    task = store.create("Buy milk")
    store.update(task.id, TaskUpdate(completed=True))
    updated = store.update(task.id, TaskUpdate(description="Buy oat milk"))
    assert updated.description == "Buy oat milk"
    assert updated.completed is True


def test_update_without_fields_returns_task_unchanged(store):
    task = store.create("Buy milk")
    assert store.update(task.id, TaskUpdate()) == task


def test_update_can_clear_completed(store):
    task = store.create("Buy milk")
    store.update(task.id, TaskUpdate(completed=True))
    assert store.update(task.id, TaskUpdate(completed=False)).completed is False


def test_update_unknown_id(store):
    store.create("Buy milk")
    before = store.list()
    with pytest.raises(NotFoundError) as excinfo:
        store.update(42, TaskUpdate(completed=True))
    assert excinfo.value.task_id == 42
    assert store.list() == before


def test_delete_then_operations_fail(store):
    task = store.create("Buy milk")
    store.delete(task.id)
    assert store.list() == []
    store.create("Keep me")
    before = store.list()
    with pytest.raises(NotFoundError):
        store.delete(task.id)
    assert store.list() == before
    with pytest.raises(NotFoundError):
        store.update(task.id, TaskUpdate(completed=True))


def test_returned_tasks_are_copies(store):
    task = store.create("Buy milk")
    task.description = "tampered"
    task.completed = True

    listed = store.list()
    assert listed[0].description == "Buy milk"
    assert listed[0].completed is False

    listed[0].description = "tampered again"
    updated = store.update(task.id, TaskUpdate())
    assert updated.description == "Buy milk"

    updated.completed = True
    assert store.list()[0].completed is False


@pytest.mark.parametrize("task_id", [2**63, 2**70])
def test_ids_beyond_row_range_are_not_found(store, task_id):
    store.create("Buy milk")
    before = store.list()
    with pytest.raises(NotFoundError):
        store.update(task_id, TaskUpdate(completed=True))
    with pytest.raises(NotFoundError):
        store.delete(task_id)
    assert store.list() == before


def test_round_trip(store):
    task = store.create("Water plants")
    assert any(t.description == "Water plants" and not t.completed for t in store.list())
    store.delete(task.id)
    assert all(t.id != task.id for t in store.list())


def test_concurrent_creates_yield_distinct_ids(store):
    count = 200
    with ThreadPoolExecutor(max_workers=16) as pool:
        created = list(pool.map(lambda n: store.create(f"task {n}"), range(count)))

    ids = [task.id for task in created]
    assert len(set(ids)) == count
    assert sorted(t.id for t in store.list()) == sorted(ids)


def test_concurrent_mixed_operations(store):
    seeded = [store.create(f"seed {n}") for n in range(50)]

    def work(n):
        task = seeded[n]
        store.update(task.id, TaskUpdate(completed=True))
        store.list()
        if n % 2:
            store.delete(task.id)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(work, range(len(seeded))))

    remaining = store.list()
    assert len(remaining) == 25
    assert all(t.completed for t in remaining)


def test_build_store_picks_backend():
    assert isinstance(build_store(Settings(task_store_backend="memory")), MemoryTaskStore)
    sql_store = build_store(Settings(task_store_backend="sql", database_url="sqlite://"))
    try:
        assert isinstance(sql_store, SqlTaskStore)
    finally:
        sql_store.close()
    with pytest.raises(ValueError):
        build_store(Settings(task_store_backend="mongo"))


def test_sql_store_persists_across_instances(tmp_path):
    url = f"sqlite:///{tmp_path / 'tasks.db'}"
    first = SqlTaskStore(url)
    task = first.create("Buy milk")
    first.delete(first.create("gone").id)
    first.close()

    second = SqlTaskStore(url)
    try:
        assert [t.description for t in second.list()] == ["Buy milk"]
        assert second.create("next").id > task.id + 1
    finally:
        second.close()


def test_write_lock_excludes_readers():
    lock = ReadWriteLock()
    events = []
    writer_in = threading.Event()
    release_writer = threading.Event()

    def writer():
        with lock.write():
            writer_in.set()
            release_writer.wait(timeout=5)
            events.append("write done")

    def reader():
        with lock.read():
            events.append("read")

    w = threading.Thread(target=writer)
    w.start()
    assert writer_in.wait(timeout=5)
    r = threading.Thread(target=reader)
    r.start()
    r.join(timeout=0.2)
    assert events == []

    release_writer.set()
    w.join(timeout=5)
    r.join(timeout=5)
    assert events == ["write done", "read"]


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    with lock.read():
        done = threading.Event()

        def reader():
            with lock.read():
                done.set()

        t = threading.Thread(target=reader)
        t.start()
        assert done.wait(timeout=5)
        t.join(timeout=5)


def test_lock_released_after_failed_create():
    task_store = MemoryTaskStore()
    with pytest.raises(ValidationError):
        task_store.create("")
    assert task_store.create("after failure").id == 1
