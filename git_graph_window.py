# git_graph_window.py

import logging
from typing import Optional

from PyQt6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QVBoxLayout,
    QWidget,
)

from git_graph_filter import ALL_BRANCHES, branch_choices, branch_from_choice
from git_graph_view import GitGraphView
from threads import GraphLoadResult


class GitGraphWindow(QMainWindow):
    """Graph view with a branch selector and a commit search box above it."""

    def __init__(self, repo_path: str, branch: Optional[str] = None, search: str = "", parent=None):
        super().__init__(parent)
        self.repo_path = repo_path
        self.setWindowTitle(f"Git Graph - {repo_path}")
        self.resize(1000, 700)

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)

        top_bar = QWidget()
        top_layout = QHBoxLayout(top_bar)
        top_layout.setContentsMargins(10, 5, 10, 5)
        top_layout.setSpacing(10)

        top_layout.addWidget(QLabel("Branch:"))
        self.branch_combo = QComboBox()
        self.branch_combo.setMinimumWidth(150)
        self.branch_combo.addItem(branch or ALL_BRANCHES)
        self.branch_combo.currentTextChanged.connect(self._on_branch_changed)
        top_layout.addWidget(self.branch_combo)

        top_layout.addStretch(1)

        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search message, author or sha")
        self.search_edit.setClearButtonEnabled(True)
        self.search_edit.setMinimumWidth(250)
        self.search_edit.setText(search)
        self.search_edit.textChanged.connect(self._on_search_changed)
        top_layout.addWidget(self.search_edit)

        self.match_label = QLabel()
        top_layout.addWidget(self.match_label)

        layout.addWidget(top_bar)

        self.graph_view = GitGraphView()
        self.graph_view.graph_loaded.connect(self._on_graph_loaded)
        self.graph_view.load_failed.connect(self._on_load_failed)
        layout.addWidget(self.graph_view)

        self.setCentralWidget(central)

        self.graph_view.set_search_term(search)
        self.graph_view.load_repository(repo_path, branch)

    def update_branches(self, branches, current=None):
        self.branch_combo.blockSignals(True)
        self.branch_combo.clear()
        self.branch_combo.addItems(branches)
        if current and current in branches:
            self.branch_combo.setCurrentText(current)
        elif branches:
            self.branch_combo.setCurrentIndex(0)
        self.branch_combo.blockSignals(False)

    def _on_branch_changed(self, choice: str):
        branch = branch_from_choice(choice)
        logging.debug("GitGraphWindow: showing %s", branch or "all refs")
        self.graph_view.load_repository(self.repo_path, branch)

    def _on_search_changed(self, text: str):
        self._show_match_count(self.graph_view.set_search_term(text))

    def _show_match_count(self, count: int):
        if self.search_edit.text().strip():
            self.match_label.setText(f"{count} matching")
        else:
            self.match_label.clear()

    def _on_graph_loaded(self, result: GraphLoadResult):
        self.update_branches(branch_choices(result.refs), result.branch or ALL_BRANCHES)
        self._show_match_count(self.graph_view.set_search_term(self.search_edit.text()))

    def _on_load_failed(self, message: str):
        QMessageBox.warning(self, "Git Graph", message)
