from typing import Literal
from .task_api import Task, TaskRow
from .utils__tree_index import iter_tasks

RollupField = Literal["hours", "costs"]


def recursive_sum(task: Task, field: RollupField) -> float:
    """Sum a field over a task and all of its descendants"""
    if field not in ("hours", "costs"):
        raise ValueError(f"Cannot sum field: {field}")
    total: float = getattr(task, field)
    for child in task.children:
        total += recursive_sum(child, field)
    return total


def task_row(task: Task, depth: int = 0) -> TaskRow:
    """
    Build the display row for a task.

    A parent shows its title joined with its direct children's titles and the
    rolled up hours and costs, a leaf shows its own values.
    """
    if not task.children:
        return TaskRow(task.id, task.title, task.hours, task.costs, depth)
    title = " + ".join([task.title, *(child.title for child in task.children)])
    return TaskRow(
        task.id,
        title,
        recursive_sum(task, "hours"),
        recursive_sum(task, "costs"),
        depth,
    )


def task_rows(tasks: list[Task]) -> list[TaskRow]:
    return [task_row(task, depth) for task, depth in iter_tasks(tasks)]
