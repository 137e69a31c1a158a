import threading

import pytest

from domekit.taskqueue import Task, TaskQueue


def test_all_tasks_run_and_are_counted():
    seen = []
    lock = threading.Lock()

    def handler(task):
        with lock:
            seen.append(task.data)
        return task.data * 2

    tasks = [Task(type=1, data=n) for n in range(20)]
    with TaskQueue(handler) as queue:
        for task in tasks:
            queue.push(task)
        queue.wait_for_empty()
    assert queue.completion_count == len(tasks)
    assert sorted(seen) == list(range(20))
    assert [t.result_code for t in tasks] == [n * 2 for n in range(20)]


def test_handler_error_is_recorded():
    def handler(task):
        raise ValueError("bad task")

    task = Task(data="x")
    with TaskQueue(handler, pool_size=1) as queue:
        queue.push(task)
        queue.wait_for_empty()
    assert isinstance(task.error, ValueError)
    assert queue.completion_count == 1


def test_full_and_empty():
    started = threading.Event()
    release = threading.Event()

    def handler(task):
        started.set()
        release.wait(5)

    queue = TaskQueue(handler, pool_size=1, size=4)
    try:
        assert queue.is_empty()
        queue.push(Task())
        assert started.wait(5)
        for _ in range(3):
            queue.push(Task())
        assert queue.is_full()
        assert not queue.is_empty()
        release.set()
        queue.wait_for_empty()
        assert queue.is_empty()
        assert not queue.is_full()
    finally:
        release.set()
        queue.close()
    assert queue.completion_count == 4


@pytest.mark.parametrize("size", [0, 1, 3, 100])
def test_size_must_be_power_of_two(size):
    with pytest.raises(ValueError):
        TaskQueue(lambda task: None, size=size)


def test_pool_size_must_be_positive():
    with pytest.raises(ValueError):
        TaskQueue(lambda task: None, pool_size=0)


def test_push_after_close_raises():
    queue = TaskQueue(lambda task: None)
    queue.close()
    assert queue.closed
    with pytest.raises(RuntimeError):
        queue.push(Task())


def test_defaults_follow_source_configuration():
    with TaskQueue(lambda task: None) as queue:
        assert queue.pool_size == 4
        assert queue.size == 256


def test_close_is_idempotent():
    queue = TaskQueue(lambda task: None, pool_size=2)
    queue.close()
    queue.close()
    assert queue.completion_count == 0