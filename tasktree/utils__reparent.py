import logging
from .task_api import AnchorResolutionError, Task
from .utils__tree_index import is_ancestor_of, tasks_at_depth

logger = logging.getLogger(__name__)


def reparent(
    tasks: list[Task],
    dragged: Task,
    target: Task,
    target_index_path: list[int],
    depth: int,
) -> list[Task]:
    """
    Splice a detached task in after the drop target at the given depth.

    At depth 0 the task goes into the root sequence. Deeper drops look for the
    parent one level up: the target itself when it lives there, otherwise the
    task at that level which contains the target. The target row is often a
    nested child of the intended parent because children render inline.

    Args:
        tasks: The forest, with the dragged task already removed
        dragged: The detached task to insert
        target: The anchor task
        target_index_path: Fresh index path of the anchor, truncated to depth + 1
        depth: Resolved drop depth

    Returns:
        The forest to commit. A new root list at depth 0, otherwise `tasks`
        itself with the parent's children mutated.

    Raises:
        AnchorResolutionError: when no parent can be confirmed
    """
    if not target_index_path:
        raise AnchorResolutionError(f"Task {target.id} has no index path")
    target_index = target_index_path[-1]

    if depth == 0:
        return [*tasks[: target_index + 1], dragged, *tasks[target_index + 1 :]]

    # Parents live one level above the dropped task
    possible_parents = tasks_at_depth(tasks, depth - 1)
    parent = next((task for task in possible_parents if task is target), None)
    if parent is None:
        parent = next(
            (task for task in possible_parents if is_ancestor_of(task, target.id)),
            None,
        )
    if parent is None:
        raise AnchorResolutionError(
            f"No parent for task {dragged.id} at depth {depth} near task {target.id}"
        )

    logger.debug(
        "Inserting task %s under %s at position %s", dragged.id, parent.id, target_index + 1
    )
    parent.children.insert(target_index + 1, dragged)
    return tasks
