from typing import Iterator
from .task_api import Task, TaskLookup


def find_task(task_id: int, tasks: list[Task]) -> TaskLookup:
    """Find a task by id anywhere in the forest.

    Siblings at each level are scanned before descending into children.

    Args:
        task_id: ID of the task to find
        tasks: The sequence to search (the forest root or a children list)

    Returns:
        TaskLookup with the task and its index path, or TaskLookup(None, [])
    """
    for index, task in enumerate(tasks):
        if task.id == task_id:
            return TaskLookup(task, [index])
    for index, task in enumerate(tasks):
        found, inner_path = find_task(task_id, task.children)
        if found is not None:
            return TaskLookup(found, [index, *inner_path])
    return TaskLookup(None, [])


def find_preceding_task(task_id: int, tasks: list[Task]) -> TaskLookup:
    """Find the sibling immediately before the task with the given id.

    The first task of a sibling sequence has no predecessor, so the lookup
    clamps to index 0 and returns the task itself. A drop onto itself at
    position 0 still needs an anchor.
    """
    for index, task in enumerate(tasks):
        if task.id == task_id:
            before = max(index - 1, 0)
            return TaskLookup(tasks[before], [before])
    for index, task in enumerate(tasks):
        found, inner_path = find_preceding_task(task_id, task.children)
        if found is not None:
            return TaskLookup(found, [index, *inner_path])
    return TaskLookup(None, [])


def remove_task(task_id: int, tasks: list[Task]) -> Task | None:
    """Detach the task with the given id from whichever sequence holds it

    Returns:
        The removed task with its children untouched, or None if absent
    """
    for index, task in enumerate(tasks):
        if task.id == task_id:
            return tasks.pop(index)
    for task in tasks:
        if (removed := remove_task(task_id, task.children)) is not None:
            return removed
    return None


def tasks_at_depth(tasks: list[Task], depth: int) -> list[Task]:
    """Collect every task at the given depth, or at the deepest level reached.

    If an intermediate level has no children anywhere, the last non-empty
    level is returned instead of an empty list.
    """
    current_depth = 0
    current = tasks
    while current_depth < depth:
        below = [child for task in current for child in task.children]
        if not below:
            break
        current = below
        current_depth += 1
    return current


def is_ancestor_of(candidate: Task, task_id: int) -> bool:
    """Check whether the task with the given id is nested anywhere under candidate"""
    for child in candidate.children:
        if child.id == task_id or is_ancestor_of(child, task_id):
            return True
    return False


def iter_tasks(tasks: list[Task], depth: int = 0) -> Iterator[tuple[Task, int]]:
    """Yield (task, depth) pairs in depth-first pre-order"""
    for task in tasks:
        yield task, depth
        yield from iter_tasks(task.children, depth + 1)


def collect_ids(tasks: list[Task]) -> list[int]:
    return [task.id for task, _ in iter_tasks(tasks)]
