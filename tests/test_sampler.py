import random
import threading
import time

import pytest

from randpass.config import DEFAULT_ALPHABET
from randpass.sampler import (
    GenerationStatus,
    PasswordSampler,
    RunContext,
    generate,
    generate_passwords,
    validate,
)


def _collect(request, cancel_after=None, **kwargs):
    items = []

    def on_item(index, password):
        items.append((index, password))

    def on_cancel_check():
        return cancel_after is not None and len(items) >= cancel_after

    result = generate(request, on_item, on_cancel_check, **kwargs)
    return result, items


def test_two_passwords_of_three_from_ab():
    request = validate("AB", 3, 2, 0, seed=1)
    result, items = _collect(request)

    assert result.status is GenerationStatus.COMPLETED
    assert result.completed
    assert len(result.passwords) == 2
    for password in result.passwords:
        assert len(password) == 3
        assert set(password) <= {"A", "B"}
    assert [password for _index, password in items] == list(result.passwords)


def test_default_alphabet_run():
    request = validate(DEFAULT_ALPHABET, 10, 5, 0)
    result, _items = _collect(request)

    assert len(result.passwords) == 5
    for password in result.passwords:
        assert len(password) == 10
        assert set(password) <= set(DEFAULT_ALPHABET)


def test_output_callback_uses_one_based_indexes_in_order():
    request = validate("XYZ", 4, 6, 0)
    _result, items = _collect(request)
    assert [index for index, _password in items] == [1, 2, 3, 4, 5, 6]


def test_draws_match_the_general_purpose_generator():
    request = validate("ABCDEFGH", 5, 3, 0, seed=1234)
    result, _items = _collect(request)

    rng = random.Random(1234)
    expected = ["".join("ABCDEFGH"[rng.randrange(8)] for _ in range(5)) for _ in range(3)]
    assert list(result.passwords) == expected


def test_same_seed_same_passwords():
    assert generate_passwords("abc", 8, 4, seed=99) == generate_passwords("abc", 8, 4, seed=99)


def test_explicit_rng_is_used():
    request = validate("AB", 6, 2, 0)
    first, _ = _collect(request, rng=random.Random(5))
    second, _ = _collect(request, rng=random.Random(5))
    assert first.passwords == second.passwords


def test_multi_unit_characters_are_never_split():
    alphabet = "\U0001F600\U0001F3B2\U0001F40D"
    request = validate(alphabet, 7, 20, 0, seed=3)
    result, _items = _collect(request)

    for password in result.passwords:
        assert len(password) == 7
        assert set(password) <= set(alphabet)
        # Would raise on a lone surrogate.
        password.encode("utf-8")


def test_combining_sequences_are_drawn_whole():
    request = validate("e\u0301a\u0308", 5, 10, 0, seed=8)
    result, _items = _collect(request)
    for password in result.passwords:
        assert len(password) == 10
        assert password.replace("e\u0301", "").replace("a\u0308", "") == ""


def test_repeated_characters_weight_the_draw():
    request = validate("AAB", 100, 30, 0, seed=2024)
    result, _items = _collect(request)
    text = "".join(result.passwords)
    share = text.count("A") / len(text)
    assert 0.6 < share < 0.73


@pytest.mark.parametrize("k", [0, 1, 3])
def test_cancel_after_k_items(k):
    request = validate("AB", 4, 10, 0, seed=11)
    result, items = _collect(request, cancel_after=k)

    assert result.status is GenerationStatus.CANCELLED
    assert result.cancelled
    assert len(items) == k
    assert len(result.passwords) == k

    # Items emitted before the cancel are the same as in an uncancelled run.
    full, _ = _collect(request)
    assert result.passwords == full.passwords[:k]


def test_progress_reported_before_each_item():
    events = []
    request = validate("AB", 2, 3, 0)
    generate(
        request,
        lambda index, _password: events.append(("item", index)),
        lambda: False,
        on_progress=lambda index, total: events.append(("progress", index, total)),
    )
    assert events == [
        ("progress", 1, 3),
        ("item", 1),
        ("progress", 2, 3),
        ("item", 2),
        ("progress", 3, 3),
        ("item", 3),
    ]


def test_cancel_is_checked_after_progress_and_delay():
    events = []
    request = validate("AB", 2, 3, 250)

    def on_cancel_check():
        events.append("check")
        return True

    result = generate(
        request,
        lambda index, _password: events.append("item"),
        on_cancel_check,
        on_progress=lambda index, total: events.append("progress"),
        sleep=lambda seconds: events.append(("sleep", seconds)),
    )
    assert events == ["progress", ("sleep", 0.25), "check"]
    assert result.passwords == ()


def test_zero_delay_never_sleeps():
    calls = []
    request = validate("AB", 2, 3, 0)
    generate(request, lambda *_: None, lambda: False, sleep=calls.append)
    assert calls == []


def test_run_context_starts_clear():
    context = RunContext()
    assert not context.cancelled
    assert not context.finished


def test_run_context_wait_wakes_on_cancel():
    context = RunContext()
    context.cancel()
    started = time.monotonic()
    context.wait(5.0)
    assert time.monotonic() - started < 1.0


def test_sampler_cancelled_before_start_produces_nothing():
    request = validate("AB", 3, 5, 0)
    sampler = PasswordSampler(request)
    sampler.cancel()
    result = sampler.run()

    assert result.cancelled
    assert result.passwords == ()
    assert sampler.context.finished


def test_sampler_marks_finished_when_callback_raises():
    request = validate("AB", 3, 5, 0)
    sampler = PasswordSampler(request)

    def boom(_index, _password):
        raise RuntimeError("renderer broke")

    with pytest.raises(RuntimeError):
        sampler.run(on_item=boom)
    assert sampler.context.finished


def test_sampler_cancel_from_another_thread_interrupts_delay():
    request = validate("AB", 3, 3, 5000)
    sampler = PasswordSampler(request)
    results = []

    worker = threading.Thread(target=lambda: results.append(sampler.run()))
    started = time.monotonic()
    worker.start()
    sampler.cancel()

    assert sampler.context.wait_finished(timeout=3.0)
    worker.join(timeout=3.0)
    assert time.monotonic() - started < 3.0
    assert results[0].cancelled
    assert results[0].passwords == ()


def test_sampler_collects_passwords_in_order():
    request = validate("0123456789", 6, 4, 0, seed=77)
    seen = []
    result = PasswordSampler(request).run(on_item=lambda index, password: seen.append(password))
    assert list(result.passwords) == seen
    assert len(seen) == 4


def test_sampler_uses_given_context():
    context = RunContext()
    context.cancel()
    sampler = PasswordSampler(validate("AB", 3, 5, 0), context=context)

    assert sampler.run().cancelled
    assert context.finished


def test_sampler_runs_continue_a_shared_generator():
    request = validate("0123456789", 8, 3, 0)
    rng = random.Random(3)
    first = PasswordSampler(request).run(rng=rng).passwords
    second = PasswordSampler(request).run(rng=rng).passwords

    replay = random.Random(3)
    assert PasswordSampler(request).run(rng=replay).passwords == first
    assert PasswordSampler(request).run(rng=replay).passwords == second
    assert first != second


def test_generate_passwords_defaults():
    passwords = generate_passwords()
    assert len(passwords) == 5
    assert all(len(password) == 10 for password in passwords)
