"""Pytest fixtures for ecommerce_cart tests."""

import pytest

from ecommerce_cart import Cart, Observer, Product


class RecordingObserver(Observer):
    """Observer that appends its label to a shared log on every update."""

    def __init__(self, label, log):
        self.label = label
        self.log = log

    def update(self):
        self.log.append(self.label)


class FailingObserver(Observer):
    def update(self):
        raise RuntimeError("observer exploded")


@pytest.fixture
def cart():
    """A fresh, non-shared cart."""
    return Cart()


@pytest.fixture
def shared_cart_reset():
    """Forget the process-wide cart before and after the test."""
    Cart._instance = None
    yield
    Cart._instance = None


@pytest.fixture
def apples():
    return Product("Apples", 10, 5)


@pytest.fixture
def notification_log():
    return []


@pytest.fixture
def make_observer(notification_log):
    """Create recording observers that share one notification log."""

    def _make(label):
        return RecordingObserver(label, notification_log)

    return _make


@pytest.fixture
def failing_observer():
    return FailingObserver()
