import logging

from checkcx.services.inflight_counter import InflightCounter


def test_start_start_end_leaves_one_in_flight():
    counter = InflightCounter()
    counter.start()
    counter.start()
    counter.end()
    assert counter.peek() == 1
    assert counter.is_loading()


def test_extra_end_calls_clamp_at_zero(caplog):
    counter = InflightCounter()
    caplog.set_level(logging.WARNING)

    counter.end()
    counter.end()

    assert counter.peek() == 0
    assert not counter.is_loading()
    assert "no request in flight" in caplog.text


def test_unmatched_end_still_notifies_observers():
    counter = InflightCounter()
    calls = []
    counter.subscribe(lambda: calls.append(counter.peek()))

    counter.end()

    assert calls == [0]


def test_peek_never_negative_for_mixed_sequences():
    counter = InflightCounter()
    for op in "sseeeseesss" + "e" * 6:
        if op == "s":
            counter.start()
        else:
            counter.end()
        assert counter.peek() >= 0
        assert counter.is_loading() == (counter.peek() > 0)
    assert counter.peek() == 0


def test_observers_see_the_mutated_count():
    counter = InflightCounter()
    seen = []
    counter.subscribe(lambda: seen.append(counter.peek()))

    counter.start()
    counter.start()
    counter.end()
    counter.end()
    counter.end()

    assert seen == [1, 2, 1, 0, 0]


def test_same_callback_registered_twice_is_called_twice():
    counter = InflightCounter()
    calls = []

    def observer():
        calls.append(1)

    unsubscribe_first = counter.subscribe(observer)
    counter.subscribe(observer)
    counter.start()
    assert len(calls) == 2

    unsubscribe_first()
    unsubscribe_first()
    counter.end()
    assert len(calls) == 3


def test_peek_does_not_notify():
    counter = InflightCounter()
    calls = []
    counter.subscribe(lambda: calls.append(1))
    counter.peek()
    counter.is_loading()
    assert calls == []


def test_failing_observer_does_not_block_others(caplog):
    counter = InflightCounter()
    calls = []

    def boom():
        raise RuntimeError("observer bug")

    counter.subscribe(boom)
    counter.subscribe(lambda: calls.append(counter.peek()))

    counter.start()

    assert calls == [1]
    assert "observer" in caplog.text
