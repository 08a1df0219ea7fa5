# tests/helpers.py

from models.task import Task


def make_task(id, title="Task", **kw) -> Task:
    kw.setdefault("category", "Development")
    kw.setdefault("created_at", "2025-04-01")
    return Task(id=id, title=title, **kw)


class SignalSpy:
    """Records every emission of a Qt signal."""

    def __init__(self, signal):
        self.calls = []
        signal.connect(self._record)

    def _record(self, *args):
        self.calls.append(args)

    def __len__(self):
        return len(self.calls)
