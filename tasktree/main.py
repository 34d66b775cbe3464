#!/usr/bin/env python
import logging
import signal
import sys
from pathlib import Path
import typer
from pydantic import ValidationError
from PySide6.QtWidgets import QApplication, QMainWindow
from .drag_session import DragSession, DropOutcome
from .settings import Settings, load_settings
from .task_api import Task
from .task_model import TaskModel
from .utils__rollup import task_rows
from .widgets__task_tree import TaskTree

app = typer.Typer(pretty_exceptions_enable=False)

state: dict[str, Path | None] = {"config": None}


class EchoRenderer:
    """Prints the forest as indented rows with hours and costs"""

    def render(self, tasks: list[Task]) -> None:
        for row in task_rows(tasks):
            indent = "    " * row.depth
            typer.echo(f"{indent}[{row.id}] {row.title}  {row.hours:g}h  {row.costs:g}")


def build_settings(pixels_per_level: int | None) -> Settings:
    settings = load_settings(state["config"])
    if pixels_per_level is not None:
        try:
            settings.pixels_per_level = pixels_per_level
        except ValidationError as e:
            raise typer.BadParameter(
                f"must be positive, got {pixels_per_level}", param_hint="--pixels-per-level"
            ) from e
    return settings


@app.callback()
def configure(
    config: Path | None = None,
    verbose: bool = False,
) -> None:
    """
    Reorder and nest tasks by dragging them

    Args:
        config: JSON settings file with `tasks`, `pixels_per_level` and `indent_px`
        verbose: Log every drop at debug level
    """
    state["config"] = config
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        force=True,
    )


@app.command()
def run(pixels_per_level: int | None = None) -> None:
    """Open the task table window"""
    settings = build_settings(pixels_per_level)
    qt_app = QApplication(sys.argv)

    model = TaskModel(settings.tasks)
    window = QMainWindow()
    window.setWindowTitle("Tasks")
    tree = TaskTree(indent_px=settings.indent_px)
    window.setCentralWidget(tree)
    window.resize(800, 400)

    session = DragSession(model, tree, pixels_per_level=settings.pixels_per_level)
    session.rolled_back.connect(
        lambda message: window.statusBar().showMessage(f"Move failed: {message}", 5000)
    )
    window.show()
    tree.attach(session)
    tree.render(model.tasks)

    signal.signal(signal.SIGINT, signal.SIG_DFL)
    sys.exit(qt_app.exec())


@app.command()
def show() -> None:
    """Print the tasks with rolled up hours and costs"""
    settings = build_settings(None)
    EchoRenderer().render(settings.tasks)


@app.command()
def move(
    dragged: int,
    target: int,
    depth: int = 0,
    pixels_per_level: int | None = None,
) -> None:
    """
    Drop one task onto another without opening a window

    Args:
        dragged: ID of the task to move
        target: ID of the task to drop onto
        depth: Nesting depth of the drop
    """
    settings = build_settings(pixels_per_level)
    model = TaskModel(settings.tasks)
    session = DragSession(model, EchoRenderer(), pixels_per_level=settings.pixels_per_level)
    session.drag_start(dragged, 0)
    outcome = session.drop(dragged, target, depth * settings.pixels_per_level)
    if outcome in (DropOutcome.CANCELLED, DropOutcome.IGNORED):
        typer.echo(f"Nothing moved ({outcome.value})")
    elif outcome == DropOutcome.ROLLED_BACK:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
