import pytest


class FakeScheduler:
    """Sustituto de `widget.after` con reloj manual."""

    def __init__(self):
        self.now = 0
        self._next_id = 0
        self._tasks = {}

    def after(self, ms, fn=None):
        self._next_id += 1
        after_id = f"after#{self._next_id}"
        self._tasks[after_id] = (self.now + ms, fn)
        return after_id

    def after_cancel(self, after_id):
        self._tasks.pop(after_id, None)

    @property
    def pending(self):
        return len(self._tasks)

    def advance(self, ms):
        self.now += ms
        while True:
            due = sorted(
                (when, after_id)
                for after_id, (when, _fn) in self._tasks.items()
                if when <= self.now
            )
            if not due:
                return
            _, after_id = due[0]
            _, fn = self._tasks.pop(after_id)
            if fn:
                fn()


class FakeClient:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def calculate(self, function_id, params):
        self.calls.append((function_id, params))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def fake_client():
    return FakeClient(result={})


@pytest.fixture
def client_factory():
    return FakeClient
