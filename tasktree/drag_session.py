import logging
from enum import Enum
from typing import Protocol
from PySide6.QtCore import QObject, Signal
from .task_api import Task, TaskNotFoundError
from .task_model import TaskModel
from .utils__depth_resolver import DEFAULT_PIXELS_PER_LEVEL, drag_offset, resolve_depth
from .utils__reparent import reparent
from .utils__tree_index import find_preceding_task, find_task, remove_task

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def render(self, tasks: list[Task]) -> None: ...


class DragState(Enum):
    """Enum representing the phases of a drag gesture"""

    IDLE = "idle"
    ARMED = "armed"  # Drag started, offset captured
    RESOLVING = "resolving"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class DropOutcome(Enum):
    """Enum representing how a drop was handled"""

    COMMITTED = "committed"
    CANCELLED = "cancelled"  # Dropped onto itself at its current depth
    IGNORED = "ignored"  # Dragged task no longer exists
    ROLLED_BACK = "rolled_back"


class DragSession(QObject):
    """
    Runs drag and drop transactions against a TaskModel.

    Every drop is atomic: the forest is snapshotted first, and any exception
    while restructuring restores the snapshot before the renderer is asked to
    redraw. The renderer only ever sees the final forest of a transaction.

    Usage:
        session = DragSession(model, renderer, container_left=tree.x())
        session.drag_start(task_id, event_x)
        session.drop(task_id, target_id, event_x)
    """

    committed = Signal(int, int)  # dragged_id, target_id
    rolled_back = Signal(str)  # error message
    highlight_requested = Signal(int)  # target_id
    highlight_cleared = Signal(int)  # target_id

    def __init__(
        self,
        model: TaskModel,
        renderer: Renderer,
        container_left: float = 0,
        pixels_per_level: int = DEFAULT_PIXELS_PER_LEVEL,
    ) -> None:
        super().__init__()
        self.model = model
        self.renderer = renderer
        self.container_left = container_left
        self.pixels_per_level = pixels_per_level
        self._state = DragState.IDLE
        self._offset_x: float = 0
        self._dragged_id: int | None = None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def dragged_id(self) -> int | None:
        """The id captured at drag start, None when no drag is in progress"""
        return self._dragged_id

    def drag_start(self, task_id: int, client_x: float) -> None:
        """Capture where the row was grabbed relative to the container"""
        self._offset_x = drag_offset(client_x, self.container_left)
        self._dragged_id = task_id
        self._state = DragState.ARMED

    def drag_enter(self, target_id: int) -> None:
        self.highlight_requested.emit(target_id)

    def drag_leave(self, target_id: int) -> None:
        self.highlight_cleared.emit(target_id)

    def resolve_depth(self, client_x: float) -> int:
        """Depth for a drop at client_x, relative to where the drag began"""
        return resolve_depth(
            client_x - self._offset_x, self.container_left, self.pixels_per_level
        )

    def drop(self, dragged_id: int, target_id: int, client_x: float) -> DropOutcome:
        """
        Move the dragged task next to the target at the depth given by client_x.

        Args:
            dragged_id: ID of the task being dragged
            target_id: ID of the task the pointer was released over
            client_x: Pointer x at release

        Returns:
            How the drop was handled
        """
        self._state = DragState.RESOLVING
        snapshot = self.model.snapshot()
        try:
            outcome = self._apply_drop(dragged_id, target_id, client_x)
        except Exception as e:
            logger.exception(
                "Drop of task %s onto %s failed, restoring previous tasks",
                dragged_id,
                target_id,
            )
            self.model.restore(snapshot)
            self._state = DragState.ROLLED_BACK
            self.renderer.render(self.model.tasks)
            self.rolled_back.emit(str(e))
            outcome = DropOutcome.ROLLED_BACK
        self._reset()
        return outcome

    def _apply_drop(
        self, dragged_id: int, target_id: int, client_x: float
    ) -> DropOutcome:
        tasks = self.model.tasks
        depth = self.resolve_depth(client_x)
        logger.debug(
            "Drop task %s onto %s at x=%s, depth %s", dragged_id, target_id, client_x, depth
        )
        dragged, dragged_path = find_task(dragged_id, tasks)

        if dragged_id == target_id and depth == len(dragged_path) - 1:
            self.highlight_cleared.emit(target_id)
            return DropOutcome.CANCELLED

        if dragged is None:
            logger.warning("Dragged task %s not found, ignoring drop", dragged_id)
            return DropOutcome.IGNORED

        if dragged_id == target_id:
            # Same row, new depth: anchor on the row above
            target, target_path = find_preceding_task(target_id, tasks)
            remove_task(dragged_id, tasks)
        else:
            remove_task(dragged_id, tasks)
            target, target_path = find_task(target_id, tasks)
        if target is None:
            raise TaskNotFoundError(target_id)

        if depth < len(target_path) - 1:
            target_path = target_path[: depth + 1]

        new_tasks = reparent(tasks, dragged, target, target_path, depth)
        self.model.commit(new_tasks)
        self._state = DragState.COMMITTED
        logger.info("Moved task %s next to %s at depth %s", dragged_id, target.id, depth)
        self.renderer.render(self.model.tasks)
        self.model.refresh()
        self.committed.emit(dragged_id, target_id)
        return DropOutcome.COMMITTED

    def _reset(self) -> None:
        self._state = DragState.IDLE
        self._offset_x = 0
        self._dragged_id = None
