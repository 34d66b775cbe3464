from pathlib import Path
from pydantic import BaseModel, ConfigDict, field_validator
from .task_api import Task
from .utils__depth_resolver import DEFAULT_PIXELS_PER_LEVEL
from .utils__tree_index import collect_ids


def default_tasks() -> list[Task]:
    """The forest the application starts with when no file is given"""
    return [
        Task(id=1, title="Task 1", hours=3, costs=12.5),
        Task(id=2, title="Task 2", hours=2, costs=7.5),
        Task(id=3, title="Task 3", hours=4, costs=17.5),
        Task(
            id=4,
            title="Task 4",
            hours=5,
            costs=18.5,
            children=[
                Task(
                    id=5,
                    title="Task 5",
                    hours=1,
                    costs=1.5,
                    children=[Task(id=6, title="Task 6", hours=4, costs=5)],
                )
            ],
        ),
    ]


class Settings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    pixels_per_level: int = DEFAULT_PIXELS_PER_LEVEL
    indent_px: int = 100  # Row indentation per depth
    tasks: list[Task] = []

    @field_validator("pixels_per_level", "indent_px")
    @classmethod
    def check_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @field_validator("tasks")
    @classmethod
    def check_unique_ids(cls, tasks: list[Task]) -> list[Task]:
        ids = collect_ids(tasks)
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate task ids: {duplicates}")
        return tasks


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a JSON file

    Args:
        path: JSON file, if None or missing the defaults are used

    Returns:
        Settings, seeded with the default forest when the file has no tasks
    """
    if path is None or not path.exists():
        settings = Settings()
    else:
        settings = Settings.model_validate_json(path.read_text(encoding="utf-8"))
    if not settings.tasks:
        settings.tasks = default_tasks()
    return settings
