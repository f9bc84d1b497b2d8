# git_graph_view.py

import logging
from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QAction, QPainter
from PyQt6.QtWidgets import QApplication, QGraphicsScene, QGraphicsView, QMenu

from git_graph_colors import BranchColorizer, NEUTRAL_COLOR
from git_graph_data import Commit, GraphLayout, Ref
from git_graph_filter import matching_shas
from git_graph_items import (
    COMMIT_RADIUS,
    REF_PADDING_X,
    CommitCircle,
    CommitMessageItem,
    EdgeLine,
    ReferenceLabel,
)
from git_graph_layout import LAYOUT_HORIZONTAL_SPACING, LAYOUT_VERTICAL_SPACING, node_position
from settings import settings
from threads import GraphLoadResult, GraphLoadThread

SEARCH_DIMMED_OPACITY = 0.25


class GitGraphView(QGraphicsView):
    commit_item_clicked = pyqtSignal(str)
    load_failed = pyqtSignal(str)
    graph_loaded = pyqtSignal(object)  # GraphLoadResult

    def __init__(self, parent=None):
        super().__init__(parent)
        self.scene = QGraphicsScene(self)
        self.setScene(self.scene)

        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setDragMode(QGraphicsView.DragMode.ScrollHandDrag)  # Enable panning
        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.AnchorUnderMouse)  # Zoom towards mouse

        self.colorizer = BranchColorizer()
        self.h_spacing, self.v_spacing = LAYOUT_HORIZONTAL_SPACING, LAYOUT_VERTICAL_SPACING

        self._commit_items: dict[str, CommitCircle] = {}
        self._edge_items: list[EdgeLine] = []
        self._ref_labels: list[ReferenceLabel] = []
        self._message_items: dict[str, CommitMessageItem] = {}
        self._commits: list[Commit] = []
        self._search_term = ""
        self.repo_path: Optional[str] = None

        self._zoom_factor_base = 1.1  # Base factor for zooming

        # Each load gets a new id; results of older loads are dropped.
        self._request_id = 0
        self._load_threads: dict[int, GraphLoadThread] = {}

        self.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.customContextMenuRequested.connect(self._show_context_menu)

    def clear_graph(self):
        self.scene.clear()
        self._commit_items.clear()
        self._edge_items.clear()
        self._ref_labels.clear()
        self._message_items.clear()

    def populate_graph(
        self,
        layout: GraphLayout,
        commits_by_sha: Optional[dict[str, Commit]] = None,
        refs: Optional[list[Ref]] = None,
        current_branch: Optional[str] = None,
    ):
        self.clear_graph()
        if not layout.nodes:
            return

        commits_by_sha = commits_by_sha or {}
        refs_by_name = {ref.name: ref for ref in refs or []}

        # First pass: commit circles, reference labels and messages
        for node in layout.nodes:
            x, y = node_position(node, self.h_spacing, self.v_spacing)
            color = self.colorizer.color_of(node.labels[0]) if node.labels else NEUTRAL_COLOR

            commit = commits_by_sha.get(node.sha)
            commit_item = CommitCircle(node, commit, color=color)
            commit_item.setPos(x, y)
            self.scene.addItem(commit_item)
            self._commit_items[node.sha] = commit_item

            # Labels and messages start right of the widest lane.
            label_x = layout.lane_count * self.h_spacing + COMMIT_RADIUS + REF_PADDING_X
            for label in node.labels:
                ref = refs_by_name.get(label, Ref(name=label, sha=node.sha))
                is_head = current_branch is not None and label == current_branch and not ref.is_remote
                ref_label = ReferenceLabel(ref, is_head=is_head)
                ref_label.setPos(label_x, y - ref_label.boundingRect().height() / 2)
                self.scene.addItem(ref_label)
                self._ref_labels.append(ref_label)
                label_x += ref_label.boundingRect().width() + REF_PADDING_X

            message_item = CommitMessageItem(commit.message if commit else node.sha[:7])
            message_item.setPos(label_x, y - message_item.boundingRect().height() / 2)
            self.scene.addItem(message_item)
            self._message_items[node.sha] = message_item

        # Second pass: edges
        for edge in layout.edges:
            child_item = self._commit_items.get(edge.from_sha)
            parent_item = self._commit_items.get(edge.to_sha)
            if child_item is None or parent_item is None:
                continue
            edge_item = EdgeLine(child_item, parent_item, edge.kind, color=edge.color)
            self.scene.addItem(edge_item)
            self._edge_items.append(edge_item)

        self.scene.setSceneRect(self.scene.itemsBoundingRect().adjusted(-20, -50, 50, 50))

    def load_repository(self, repo_path: str = ".", branch: Optional[str] = None):
        """Reads and lays out the repository in the background, then shows it."""
        self._request_id += 1
        self.repo_path = repo_path
        self.h_spacing, self.v_spacing = settings.get_graph_spacing()

        thread = GraphLoadThread(
            self._request_id,
            repo_path,
            limit=settings.get_max_commits(),
            branch=branch,
            include_remotes=settings.get_show_remote_branches(),
            parent=self,
        )
        thread.finished.connect(self._on_graph_loaded)
        thread.error.connect(self._on_graph_load_error)
        self._load_threads[self._request_id] = thread
        thread.start()

    def _on_graph_loaded(self, request_id: int, result: GraphLoadResult):
        self._forget_thread(request_id)
        if request_id != self._request_id:
            logging.debug("GitGraphView: dropping stale graph load %d", request_id)
            return
        self._commits = result.commits
        commits_by_sha = {commit.sha: commit for commit in result.commits}
        self.populate_graph(result.layout, commits_by_sha, result.refs, result.current_branch)
        self.set_search_term(self._search_term)
        # Only a path that actually loaded becomes a recent repository.
        settings.add_recent_repository(result.repo_path)
        self.graph_loaded.emit(result)

    def set_search_term(self, term: str) -> int:
        """
        Dims every commit that does not match `term` and scrolls to the newest match.
        Returns the number of matching commits; a blank term shows everything.
        """
        self._search_term = term
        if not term.strip():
            for sha, item in self._commit_items.items():
                item.setOpacity(1.0)
                self._message_items[sha].setOpacity(1.0)
            return len(self._commit_items)

        matches = matching_shas(self._commits, term)
        first_match = None
        for sha, item in self._commit_items.items():
            opacity = 1.0 if sha in matches else SEARCH_DIMMED_OPACITY
            item.setOpacity(opacity)
            self._message_items[sha].setOpacity(opacity)
            if first_match is None and sha in matches:
                first_match = item
        if first_match is not None:
            self.centerOn(first_match)
        return len(matches.intersection(self._commit_items))

    def _on_graph_load_error(self, request_id: int, message: str):
        self._forget_thread(request_id)
        if request_id != self._request_id:
            return
        logging.error("GitGraphView: loading graph failed: %s", message)
        self.clear_graph()
        self.load_failed.emit(message)

    def _forget_thread(self, request_id: int):
        thread = self._load_threads.pop(request_id, None)
        if thread is not None:
            thread.wait()
            thread.deleteLater()

    def wheelEvent(self, event):
        """Ctrl + wheel zooms, plain wheel scrolls."""
        if event.modifiers() & Qt.KeyboardModifier.ControlModifier:
            if event.angleDelta().y() > 0:
                self.zoom_in()
            else:
                self.zoom_out()
            event.accept()
        else:
            super().wheelEvent(event)

    def zoom_in(self):
        self.scale(self._zoom_factor_base, self._zoom_factor_base)

    def zoom_out(self):
        self.scale(1.0 / self._zoom_factor_base, 1.0 / self._zoom_factor_base)

    def keyPressEvent(self, event):
        if event.key() == Qt.Key.Key_Plus or event.key() == Qt.Key.Key_Equal:
            if event.modifiers() & Qt.KeyboardModifier.ControlModifier:  # Ctrl + / Ctrl =
                self.zoom_in()
        elif event.key() == Qt.Key.Key_Minus:
            if event.modifiers() & Qt.KeyboardModifier.ControlModifier:  # Ctrl -
                self.zoom_out()
        else:
            super().keyPressEvent(event)

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            item = self.itemAt(event.pos())
            if isinstance(item, CommitCircle):
                self.commit_item_clicked.emit(item.node.sha)
        super().mousePressEvent(event)

    def _show_context_menu(self, pos):
        """Show context menu for right-click on a commit circle."""
        scene_pos = self.mapToScene(pos)
        item = self.scene.itemAt(scene_pos, self.transform())

        if isinstance(item, CommitCircle):
            menu = QMenu(self)

            copy_action = QAction("Copy Commit", self)
            copy_action.triggered.connect(lambda: self._copy_commit_sha(item.node.sha))
            menu.addAction(copy_action)

            menu.exec(self.viewport().mapToGlobal(pos))

    def _copy_commit_sha(self, sha):
        QApplication.clipboard().setText(sha)
