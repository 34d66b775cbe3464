from typing import Dict
from PySide6.QtCore import QMimeData, QPoint, Qt
from PySide6.QtGui import QCursor, QDrag, QDragEnterEvent, QDragLeaveEvent, QDragMoveEvent, QDropEvent
from PySide6.QtWidgets import QTreeWidget, QTreeWidgetItem, QWidget
from .drag_session import DragSession, DropOutcome
from .task_api import Task
from .utils__rollup import task_row


class TaskTreeItem(QTreeWidgetItem):
    """
    QTreeWidgetItem that keeps the task id in the UserRole data

    The id is stored as a Python int rather than read back from the item
    text, which stays valid after the widget is cleared and rebuilt.
    """

    def __init__(self, parent: QTreeWidget | QTreeWidgetItem, task: Task, depth: int):
        super().__init__(parent)
        row = task_row(task, depth)
        self.setText(0, f"⦾ {row.title}")
        self.setText(1, f"{row.hours:g}")
        self.setText(2, f"{row.costs:g}")
        self.setData(0, Qt.ItemDataRole.UserRole, task.id)
        self.setFlags(self.flags() | Qt.ItemFlag.ItemIsDragEnabled | Qt.ItemFlag.ItemIsDropEnabled)

    @property
    def task_id(self) -> int:
        return int(self.data(0, Qt.ItemDataRole.UserRole))


class TaskTree(QTreeWidget):
    """
    Draws the task forest and feeds pointer drags into a DragSession.

    Usage:
        tree = TaskTree(indent_px=100)
        session = DragSession(model, tree)
        tree.attach(session)
        tree.render(model.tasks)
    """

    def __init__(self, indent_px: int = 100, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.items: Dict[int, TaskTreeItem] = {}
        self.session: DragSession | None = None
        self.setColumnCount(3)
        self.setHeaderLabels(["Title", "Hours", "Costs"])
        self.setIndentation(indent_px)
        self.setAnimated(False)
        self.drag_drop_handler = DragDropHandler(self)

    def attach(self, session: DragSession) -> None:
        """Route drags to the session, the container's left edge is captured once here"""
        self.session = session
        session.container_left = self.viewport().mapToGlobal(QPoint(0, 0)).x()
        session.highlight_requested.connect(self.highlight_row)
        session.highlight_cleared.connect(self.clear_highlight)

    def render(self, tasks: list[Task]) -> None:  # pyright: ignore [reportIncompatibleMethodOverride]
        """Rebuild every row from the given forest"""
        self.setUpdatesEnabled(False)
        try:
            self.clear()
            self.items.clear()
            # Use reversed to keep sibling order when popping from the stack
            stack: list[tuple[QTreeWidget | QTreeWidgetItem, Task, int]] = [
                (self, task, 0) for task in reversed(tasks)
            ]
            while stack:
                parent_widget, task, depth = stack.pop()
                item = TaskTreeItem(parent_widget, task, depth)
                self.items[task.id] = item
                for child in reversed(task.children):
                    stack.append((item, child, depth + 1))
            self.expandAll()
        finally:
            self.setUpdatesEnabled(True)

    def highlight_row(self, task_id: int) -> None:
        if item := self.items.get(task_id):
            for column in range(self.columnCount()):
                item.setBackground(column, self.palette().highlight())

    def clear_highlight(self, task_id: int) -> None:
        if item := self.items.get(task_id):
            for column in range(self.columnCount()):
                item.setBackground(column, self.palette().base())

    def startDrag(self, supportedActions: Qt.DropAction) -> None:
        self.drag_drop_handler.startDrag(supportedActions)

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:
        self.drag_drop_handler.dragEnterEvent(event)

    def dragMoveEvent(self, event: QDragMoveEvent) -> None:
        self.drag_drop_handler.dragMoveEvent(event)

    def dragLeaveEvent(self, event: QDragLeaveEvent) -> None:
        self.drag_drop_handler.dragLeaveEvent(event)

    def dropEvent(self, event: QDropEvent) -> None:
        self.drag_drop_handler.dropEvent(event)


class DragDropHandler:
    """Translates Qt drag events into DragSession calls"""

    def __init__(self, tree_widget: TaskTree) -> None:
        self.tree_widget = tree_widget
        self._hover_id: int | None = None

        # Drops are applied to the model, never moved by Qt itself
        self.tree_widget.setDragEnabled(True)
        self.tree_widget.setAcceptDrops(True)
        self.tree_widget.setDropIndicatorShown(False)
        self.tree_widget.setDragDropMode(QTreeWidget.DragDropMode.DragDrop)
        self.tree_widget.setSelectionMode(QTreeWidget.SelectionMode.SingleSelection)

    def startDrag(self, supportedActions: Qt.DropAction) -> None:
        """Start a drag carrying the task id as plain text"""
        item = self.tree_widget.currentItem()
        session = self.tree_widget.session
        if not isinstance(item, TaskTreeItem) or session is None:
            return
        session.drag_start(item.task_id, QCursor.pos().x())
        mime_data = QMimeData()
        mime_data.setText(str(item.task_id))
        drag = QDrag(self.tree_widget)
        drag.setMimeData(mime_data)
        drag.exec(Qt.DropAction.MoveAction)

    def dragEnterEvent(self, event: QDragEnterEvent) -> None:
        if event.mimeData().hasText():
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event: QDragMoveEvent) -> None:
        """Move the drop-zone highlight to the row under the pointer"""
        if self.tree_widget.session is None:
            event.ignore()
            return
        item = self.tree_widget.itemAt(event.position().toPoint())
        self.hover(item.task_id if isinstance(item, TaskTreeItem) else None)
        event.acceptProposedAction()

    def dragLeaveEvent(self, event: QDragLeaveEvent) -> None:
        self._clear_hover()
        event.accept()

    def dropEvent(self, event: QDropEvent) -> None:
        """Hand the drop to the session, which redraws the tree itself"""
        point = event.position().toPoint()
        target_item = self.tree_widget.itemAt(point)
        if self.tree_widget.session is None or not isinstance(target_item, TaskTreeItem):
            self._clear_hover()
            event.ignore()
            return
        try:
            dragged_id = int(event.mimeData().text())
        except ValueError:
            self._clear_hover()
            event.ignore()
            return
        client_x = self.tree_widget.viewport().mapToGlobal(point).x()
        self.drop_on(dragged_id, target_item.task_id, client_x)
        event.acceptProposedAction()

    def hover(self, hover_id: int | None) -> None:
        """Move the highlight to another row, None when over no row"""
        session = self.tree_widget.session
        if session is None or hover_id == self._hover_id:
            return
        if self._hover_id is not None:
            session.drag_leave(self._hover_id)
        if hover_id is not None:
            session.drag_enter(hover_id)
        self._hover_id = hover_id

    def drop_on(self, dragged_id: int, target_id: int, client_x: float) -> DropOutcome | None:
        """Clear the highlight, then drop. Drops that change nothing do not redraw"""
        session = self.tree_widget.session
        self._clear_hover()
        if session is None:
            return None
        return session.drop(dragged_id, target_id, client_x)

    def _clear_hover(self) -> None:
        session = self.tree_widget.session
        if self._hover_id is not None and session is not None:
            session.drag_leave(self._hover_id)
        self._hover_id = None
