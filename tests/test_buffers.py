import threading

import pytest

from voicepitch.buffers import ProducerConsumerQueue, SampleBuffer, allocate_sample_buffers


def test_push_until_full():
    q = ProducerConsumerQueue(3)
    assert [q.push(i) for i in range(5)] == [True, True, True, False, False]
    assert len(q) == 3


def test_fifo_order():
    q = ProducerConsumerQueue(4)
    for item in "abcd":
        q.push(item)
    out = []
    while len(q):
        out.append(q.front())
        q.pop()
    assert out == list("abcd")


def test_front_does_not_remove():
    q = ProducerConsumerQueue(2)
    q.push("x")
    assert q.front() == "x"
    assert q.front() == "x"
    assert len(q) == 1


def test_space_freed_after_pop():
    q = ProducerConsumerQueue(1)
    assert q.push(1)
    assert not q.push(2)
    q.pop()
    assert q.push(2)
    assert q.front() == 2


def test_empty_front_and_pop_raise():
    q = ProducerConsumerQueue(2)
    with pytest.raises(IndexError):
        q.front()
    with pytest.raises(IndexError):
        q.pop()


@pytest.mark.parametrize("size", [0, -1])
def test_bad_size(size):
    with pytest.raises(ValueError):
        ProducerConsumerQueue(size)


def test_wraparound_many_times():
    q = ProducerConsumerQueue(3)
    seen = []
    for i in range(100):
        assert q.push(i)
        seen.append(q.front())
        q.pop()
    assert seen == list(range(100))
    assert len(q) == 0


def test_threaded_producer_consumer_preserves_order():
    q = ProducerConsumerQueue(8)
    n = 2000
    received = []

    def produce():
        for i in range(n):
            while not q.push(i):
                pass

    def consume():
        while len(received) < n:
            try:
                item = q.front()
            except IndexError:
                continue
            q.pop()
            received.append(item)

    threads = [threading.Thread(target=produce), threading.Thread(target=consume)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=30)
    assert received == list(range(n))
    assert len(q) == 0
    assert q.push("done") is True
    assert q.front() == "done"


def test_allocate_buffers():
    bufs = allocate_sample_buffers(16, 2048)
    assert len(bufs) == 16
    for buf in bufs:
        assert buf.capacity == 2048
        assert buf.size == 0
        assert len(buf.data) == 2048


@pytest.mark.parametrize("size", [1, 5, 6, 7, 9])
def test_allocation_is_padded(size):
    bufs = allocate_sample_buffers(2, size)
    for buf in bufs:
        assert len(buf.data) % 4 == 0
        assert size <= len(buf.data) < size + 4
        assert buf.capacity == size


def test_buffers_are_distinct():
    a, b = allocate_sample_buffers(2, 4)
    a.data[0] = 7
    assert b.data[0] == 0


@pytest.mark.parametrize("count,size", [(0, 10), (1, 10), (4, 0), (-2, 8)])
def test_allocate_errors(count, size):
    with pytest.raises(ValueError):
        allocate_sample_buffers(count, size)


def test_queue_of_sample_buffers():
    bufs = allocate_sample_buffers(4, 8)
    q = ProducerConsumerQueue(4)
    for buf in bufs:
        assert q.push(buf)
    assert q.front() is bufs[0]
    assert isinstance(q.front(), SampleBuffer)