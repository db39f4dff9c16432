"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from backpick.backup.navigator import ItemKind, PickItem

_KIND_BY_WORD = {
    "done": ItemKind.FINISH,
    "..": ItemKind.PARENT,
    "enter": ItemKind.ENTER,
    "toggle": ItemKind.TOGGLE,
}


class ScriptedPicker:
    """Picker double that replays scripted answers.

    ``choices`` answers ``pick_one`` in order: None cancels, "done", "..",
    "enter" and "toggle" pick the item of that kind, any other string picks
    the entry whose base name equals it.
    """

    def __init__(
        self,
        choices: Sequence[str | None] = (),
        answers: Sequence[bool | None] = (),
        folder: Path | None = None,
    ) -> None:
        self._choices = list(choices)
        self._answers = list(answers)
        self._folder = folder
        self.listings: list[tuple[str, list[PickItem]]] = []
        self.questions: list[str] = []
        self.messages: list[str] = []
        self.folder_requested = False

    def pick_one(self, items: Sequence[PickItem], prompt: str) -> PickItem | None:
        self.listings.append((prompt, list(items)))
        if not self._choices:
            msg = f"Picker ran out of scripted choices at: {prompt}"
            raise AssertionError(msg)
        choice = self._choices.pop(0)
        if choice is None:
            return None
        kind = _KIND_BY_WORD.get(choice)
        for item in items:
            if kind is not None and item.kind == kind:
                return item
            if kind is None and item.path is not None and item.path.name == choice:
                if item.kind in (ItemKind.DIRECTORY, ItemKind.FILE):
                    return item
        msg = f"No item {choice!r} in listing for: {prompt}"
        raise AssertionError(msg)

    def ask_yes_no(self, question: str, default: bool) -> bool | None:
        self.questions.append(question)
        if not self._answers:
            return default
        return self._answers.pop(0)

    def choose_folder(self, prompt: str) -> Path | None:
        self.folder_requested = True
        return self._folder

    def notify(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def scripted_picker() -> type[ScriptedPicker]:
    """The ScriptedPicker class, for building picker doubles in tests."""
    return ScriptedPicker


@pytest.fixture
def make_tree() -> Callable[[Path, dict[str, str | None]], Path]:
    """Create files and directories from a mapping.

    Keys are POSIX paths relative to the base; a str value writes a file
    with that content, None creates an empty directory.
    """

    def _make(base: Path, layout: dict[str, str | None]) -> Path:
        for rel, content in layout.items():
            target = base / rel
            if content is None:
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content)
        return base

    return _make


@pytest.fixture
def project(tmp_path: Path, make_tree: Callable[[Path, dict[str, str | None]], Path]) -> Path:
    """A small project tree with source, docs, and excluded entries."""
    root = tmp_path / "project"
    return make_tree(
        root,
        {
            "README.md": "# readme",
            "main.py": "print('hi')",
            ".env": "SECRET=1",
            "yarn.lock": "lock",
            "src/app.py": "app",
            "src/util.py": "util",
            "src/pkg/core.py": "core",
            "docs/guide.md": "guide",
            "empty": None,
            "node_modules/lib/index.js": "js",
            ".git/HEAD": "ref",
        },
    )
