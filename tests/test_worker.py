import random

import pytest

QtCore = pytest.importorskip("PySide6.QtCore")

from randpass.sampler import validate  # noqa: E402
from randpass.worker import GeneratorWorker  # noqa: E402


@pytest.fixture(scope="module")
def qt_app():
    app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
    yield app


def _wire(worker):
    seen = {"progress": [], "items": [], "finished": [], "failed": []}
    worker.progress.connect(lambda index, total: seen["progress"].append((index, total)))
    worker.passwordGenerated.connect(lambda index, password: seen["items"].append((index, password)))
    worker.finished.connect(lambda result: seen["finished"].append(result))
    worker.failed.connect(lambda message: seen["failed"].append(message))
    return seen


def test_worker_emits_each_password_then_finishes(qt_app):
    worker = GeneratorWorker(validate("AB", 3, 4, 0, seed=5))
    seen = _wire(worker)

    worker.run()

    assert seen["progress"] == [(1, 4), (2, 4), (3, 4), (4, 4)]
    assert [index for index, _password in seen["items"]] == [1, 2, 3, 4]
    assert len(seen["finished"]) == 1
    result = seen["finished"][0]
    assert result.completed
    assert list(result.passwords) == [password for _index, password in seen["items"]]
    assert seen["failed"] == []
    assert worker.context.finished


def test_cancelled_worker_reports_cancelled_result(qt_app):
    worker = GeneratorWorker(validate("AB", 3, 4, 0))
    seen = _wire(worker)

    worker.cancel()
    worker.run()

    assert seen["items"] == []
    assert seen["finished"][0].cancelled


def test_worker_reports_failure(qt_app):
    worker = GeneratorWorker(validate("AB", 3, 2, 0))
    seen = _wire(worker)

    def broken(*_args, **_kwargs):
        raise RuntimeError("sampler exploded")

    worker.sampler.run = broken
    worker.run()

    assert seen["failed"] == ["sampler exploded"]
    assert seen["finished"] == []


def test_worker_draws_from_the_generator_it_is_given(qt_app):
    request = validate("ABCDEFGH", 6, 3, 0)
    batches = []
    for _ in range(2):
        worker = GeneratorWorker(request, rng=random.Random(17))
        seen = _wire(worker)
        worker.run()
        batches.append(seen["finished"][0].passwords)

    assert batches[0] == batches[1]
