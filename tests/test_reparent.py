import pytest
from tasktree.task_api import AnchorResolutionError, Task
from tasktree.utils__reparent import reparent
from conftest import shape


def test_insert_at_root():
    """Test a depth 0 drop lands right after the target"""
    tasks = [Task(id=1), Task(id=2), Task(id=3)]
    result = reparent(tasks, Task(id=9), tasks[1], [1], 0)
    assert [t.id for t in result] == [1, 2, 9, 3]


def test_insert_under_target():
    """Test a target one level up becomes the parent"""
    tasks = [Task(id=1), Task(id=2)]
    result = reparent(tasks, Task(id=9), tasks[0], [0], 1)
    assert shape(result) == [(1, [(9, [])]), (2, [])]


def test_insert_under_ancestor_of_target():
    """Test a nested target resolves to its ancestor at the parent level"""
    tasks = [Task(id=2, children=[Task(id=3)])]
    target = tasks[0].children[0]
    result = reparent(tasks, Task(id=1), target, [0, 0], 1)
    assert result is tasks
    assert shape(result) == [(2, [(3, []), (1, [])])]


def test_insert_after_deeply_nested_target():
    """Test a target two levels below the parent level"""
    tasks = [
        Task(id=1),
        Task(id=4, children=[Task(id=5, children=[Task(id=6)])]),
    ]
    target = tasks[1].children[0].children[0]
    result = reparent(tasks, Task(id=9), target, [1, 0], 1)
    assert shape(result) == [(1, []), (4, [(5, [(6, [])]), (9, [])])]


def test_no_parent_found():
    """Test that an unresolvable parent raises instead of guessing"""
    tasks = [Task(id=1, children=[Task(id=2)])]
    with pytest.raises(AnchorResolutionError):
        reparent(tasks, Task(id=9), Task(id=99), [0], 1)
    assert shape(tasks) == [(1, [(2, [])])]


def test_empty_index_path():
    """Test that a target without a position is rejected"""
    tasks = [Task(id=1)]
    with pytest.raises(AnchorResolutionError):
        reparent(tasks, Task(id=9), tasks[0], [], 0)
