import pytest
from PySide6.QtCore import QCoreApplication
from tasktree.task_api import Task
from tasktree.settings import default_tasks


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    """Signals are delivered directly, but Qt expects an application instance"""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def forest() -> list[Task]:
    """Tasks 1-4 at the root, 5 under 4, 6 under 5"""
    return default_tasks()


def shape(tasks: list[Task]) -> list:
    """Reduce a forest to nested (id, children) pairs for comparisons"""
    return [(task.id, shape(task.children)) for task in tasks]
