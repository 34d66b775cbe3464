from tasktree.drag_session import DragSession, DropOutcome
from tasktree.task_model import TaskModel
from tasktree.widgets__task_tree import DragDropHandler


class TreeStub:
    """Stands in for TaskTree, the handler only configures and reads it"""

    def __init__(self, session: DragSession) -> None:
        self.session = session

    def setDragEnabled(self, enabled: bool) -> None: ...
    def setAcceptDrops(self, enabled: bool) -> None: ...
    def setDropIndicatorShown(self, shown: bool) -> None: ...
    def setDragDropMode(self, mode) -> None: ...
    def setSelectionMode(self, mode) -> None: ...


class NullRenderer:
    def __init__(self) -> None:
        self.calls = 0

    def render(self, tasks) -> None:
        self.calls += 1


def make_handler(forest):
    renderer = NullRenderer()
    session = DragSession(TaskModel(forest), renderer)
    requested: list[int] = []
    cleared: list[int] = []
    session.highlight_requested.connect(requested.append)
    session.highlight_cleared.connect(cleared.append)
    handler = DragDropHandler(TreeStub(session))  # pyright: ignore [reportArgumentType]
    return handler, renderer, requested, cleared


def test_hover_moves_highlight(forest):
    """Test moving between rows clears the previous highlight"""
    handler, _, requested, cleared = make_handler(forest)
    handler.hover(2)
    handler.hover(2)
    handler.hover(3)
    handler.hover(None)
    assert requested == [2, 3]
    assert cleared == [2, 3]


def test_ignored_drop_clears_highlight(forest):
    """Test a drop that does not redraw still removes the highlight"""
    handler, renderer, _, cleared = make_handler(forest)
    handler.hover(2)
    outcome = handler.drop_on(99, 2, 0)
    assert outcome == DropOutcome.IGNORED
    assert cleared == [2]
    assert renderer.calls == 0
