import json
import pytest
from pydantic import ValidationError
from tasktree.settings import Settings, load_settings


def test_defaults_without_file():
    """Test the built in forest and level width"""
    settings = load_settings(None)
    assert settings.pixels_per_level == 50
    assert settings.indent_px == 100
    assert [task.id for task in settings.tasks] == [1, 2, 3, 4]
    assert settings.tasks[3].children[0].children[0].id == 6


def test_missing_file_uses_defaults(tmp_path):
    """Test a path that does not exist"""
    settings = load_settings(tmp_path / "missing.json")
    assert len(settings.tasks) == 4


def test_load_from_json(tmp_path):
    """Test reading tasks and options from a file"""
    path = tmp_path / "tasks.json"
    path.write_text(
        json.dumps(
            {
                "pixels_per_level": 25,
                "tasks": [
                    {"id": 10, "title": "Design", "hours": 2, "costs": 4,
                     "children": [{"id": 11, "title": "Review", "hours": 1, "costs": 1}]},
                ],
            }
        ),
        encoding="utf-8",
    )
    settings = load_settings(path)
    assert settings.pixels_per_level == 25
    assert settings.tasks[0].title == "Design"
    assert settings.tasks[0].children[0].id == 11


def test_duplicate_ids_rejected():
    """Test that ids must be unique across the forest"""
    with pytest.raises(ValidationError):
        Settings.model_validate(
            {"tasks": [{"id": 1, "children": [{"id": 1}]}]}
        )


def test_pixels_per_level_must_be_positive():
    """Test an invalid level width"""
    with pytest.raises(ValidationError):
        Settings(pixels_per_level=0)


def test_assignment_is_validated():
    """Test that overriding an option later is checked too"""
    settings = load_settings(None)
    with pytest.raises(ValidationError):
        settings.pixels_per_level = 0
    assert settings.pixels_per_level == 50
