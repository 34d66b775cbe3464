from PySide6.QtCore import QObject, Signal
from typing import final
from .task_api import Task
from .utils__rollup import RollupField, recursive_sum


@final
class TaskModel(QObject):
    """
    Owns the task forest.

    The forest is only mutated by the drag session that owns this model,
    views read it through `tasks` and redraw on `refreshed`.
    """

    refreshed = Signal()  # Notify view to refresh

    def __init__(self, tasks: list[Task]) -> None:
        super().__init__()
        self._tasks: list[Task] = tasks

    @property
    def tasks(self) -> list[Task]:
        return self._tasks

    def snapshot(self) -> list[Task]:
        """Deep copy of the forest, taken before a transaction mutates it"""
        return [task.model_copy(deep=True) for task in self._tasks]

    def restore(self, snapshot: list[Task]) -> None:
        """Discard the current forest in favour of a snapshot"""
        self._tasks = snapshot
        self.refreshed.emit()

    def commit(self, tasks: list[Task]) -> None:
        """Replace the forest, observers are told once `refresh` is called"""
        self._tasks = tasks

    def refresh(self) -> None:
        """Notify views that the forest changed"""
        self.refreshed.emit()

    def total(self, field: RollupField) -> float:
        """Rollup of a field over the whole forest"""
        return sum(recursive_sum(task, field) for task in self._tasks)
