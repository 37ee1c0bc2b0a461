"""Root-level pytest fixtures for all tests.

This module provides fixtures that are available to all tests in the project.
"""

import pytest
from test_helpers import reset_all_globals


@pytest.fixture(autouse=True)
def reset_global_state():
    """Automatically reset all global repository instances after each test.

    This fixture ensures test isolation by resetting all singleton instances
    to None after each test completes, preventing state leakage between tests.
    """
    yield
    reset_all_globals()


class InlineWorker:
    """Worker double that runs tasks and callbacks immediately on the calling thread."""

    def __init__(self):
        self.stopped = False
        self.submitted = 0

    def submit(self, func, *args, on_success=None, on_error=None, **kwargs):
        self.submitted += 1
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            if on_error:
                on_error(exc)
            return
        if on_success:
            on_success(result)

    def call_after(self, callback, *args):
        callback(*args)

    def is_stopped(self):
        return self.stopped

    def shutdown(self, timeout=10.0):
        self.stopped = True


class ManualWorker(InlineWorker):
    """Worker double that holds tasks until a test runs them, in any order."""

    def __init__(self):
        super().__init__()
        self.tasks = []

    def submit(self, func, *args, on_success=None, on_error=None, **kwargs):
        self.submitted += 1
        self.tasks.append((func, args, kwargs, on_success, on_error))

    def run(self, index=0):
        func, args, kwargs, on_success, on_error = self.tasks.pop(index)
        InlineWorker.submit(self, func, *args, on_success=on_success, on_error=on_error, **kwargs)

    def run_all(self):
        while self.tasks:
            self.run(0)


@pytest.fixture
def inline_worker():
    return InlineWorker()


@pytest.fixture
def manual_worker():
    return ManualWorker()
