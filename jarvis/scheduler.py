import time
from dataclasses import dataclass, field
from typing import Callable


@dataclass
class Task:
    id: int
    action: str
    entities: dict = field(default_factory=dict)
    execute_at: float = 0.0


class TaskScheduler:
    """Deferred tasks that fire when the owner polls ``tick()``.

    Nothing runs on a background thread: a task becomes due once the clock
    passes its deadline and is handed back by the next ``tick()``.
    """

    def __init__(
        self,
        max_tasks: int = 5,
        max_delay_seconds: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_tasks = max_tasks
        self.max_delay_seconds = max_delay_seconds
        self.clock = clock
        self._tasks: list[Task] = []
        self._next_id = 1

    def schedule(self, action: str, delay_seconds: float, entities: dict | None = None) -> int | None:
        if delay_seconds <= 0 or delay_seconds > self.max_delay_seconds:
            return None
        if len(self._tasks) >= self.max_tasks:
            return None
        task = Task(
            id=self._next_id,
            action=action,
            entities=dict(entities or {}),
            execute_at=self.clock() + delay_seconds,
        )
        self._next_id += 1
        self._tasks.append(task)
        return task.id

    def cancel(self, task_id: int | None) -> bool:
        if task_id is None:
            return False
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                del self._tasks[i]
                return True
        return False

    def pending(self, task_id: int | None) -> bool:
        return any(t.id == task_id for t in self._tasks)

    def tick(self) -> list[Task]:
        now = self.clock()
        due = [t for t in self._tasks if t.execute_at <= now]
        if due:
            self._tasks = [t for t in self._tasks if t.execute_at > now]
        return sorted(due, key=lambda t: t.execute_at)

    def clear_all(self):
        self._tasks.clear()

    def count(self) -> int:
        return len(self._tasks)
