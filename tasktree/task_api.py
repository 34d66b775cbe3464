from pydantic import BaseModel
from typing import NamedTuple


class Task(BaseModel):
    id: int
    title: str = ""
    hours: float = 0
    costs: float = 0
    children: list["Task"] = []


class TaskLookup(NamedTuple):
    """Result of a tree lookup: the task and its index path from the root"""

    task: Task | None
    index_path: list[int]


class TaskRow(NamedTuple):
    """A display row, hours and costs are rollups for tasks with children"""

    id: int
    title: str
    hours: float
    costs: float
    depth: int


class TaskTreeError(Exception):
    """Base class for errors raised while restructuring the task tree"""


class TaskNotFoundError(TaskTreeError, KeyError):
    """A task id required by a drop is not in the forest"""

    def __init__(self, task_id: int) -> None:
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f"Task {self.task_id} not found"


class AnchorResolutionError(TaskTreeError):
    """No parent could be confirmed at the depth requested by a drop"""
