# git_graph_items.py

from typing import Optional

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QPainterPath, QPen
from PyQt6.QtWidgets import QGraphicsEllipseItem, QGraphicsItem, QGraphicsPathItem, QGraphicsTextItem

from git_graph_colors import NEUTRAL_COLOR
from git_graph_data import Commit, CommitNode, EdgeKind, Ref
from git_graph_layout import curve_control_points

# --- Configuration for items ---
COMMIT_RADIUS = 10

SELECTED_COMMIT_COLOR = QColor(Qt.GlobalColor.yellow)
HOVER_COMMIT_COLOR = QColor(Qt.GlobalColor.lightGray)

EDGE_THICKNESS = 2

REF_PADDING_X = 4
REF_PADDING_Y = 2
REF_BACKGROUND_COLOR_BRANCH = QColor("#e6f7ff")  # Light blue
REF_BORDER_COLOR_BRANCH = QColor("#91d5ff")
REF_TEXT_COLOR_BRANCH = QColor(Qt.GlobalColor.black)

REF_BACKGROUND_COLOR_REMOTE = QColor("#f5f5f5")  # Light gray
REF_BORDER_COLOR_REMOTE = QColor("#d9d9d9")
REF_TEXT_COLOR_REMOTE = QColor("#595959")

REF_BACKGROUND_COLOR_TAG = QColor("#fffbe6")  # Light yellow
REF_BORDER_COLOR_TAG = QColor("#ffe58f")
REF_TEXT_COLOR_TAG = QColor(Qt.GlobalColor.black)

REF_BACKGROUND_COLOR_HEAD = QColor("#f6ffed")  # Light green
REF_BORDER_COLOR_HEAD = QColor("#b7eb8f")
REF_TEXT_COLOR_HEAD = QColor(Qt.GlobalColor.black)

# Configuration for CommitMessageItem
COMMIT_MSG_MAX_LENGTH = 60
COMMIT_MSG_COLOR = QColor("#444444")  # Dark gray for commit messages
COMMIT_MSG_FONT_FAMILY = "Arial"
COMMIT_MSG_FONT_SIZE = 9


class CommitCircle(QGraphicsEllipseItem):
    def __init__(
        self,
        node: CommitNode,
        commit: Optional[Commit] = None,
        color: str = NEUTRAL_COLOR,
        parent: QGraphicsItem = None,
    ):
        super().__init__(-COMMIT_RADIUS, -COMMIT_RADIUS, 2 * COMMIT_RADIUS, 2 * COMMIT_RADIUS, parent)
        self.node = node
        self.commit = commit
        self.base_color = QColor(color)
        self.current_brush_color = self.base_color

        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemIsSelectable, True)
        self.setAcceptHoverEvents(True)

        self.setBrush(QBrush(self.base_color))
        self.setPen(QPen(Qt.GlobalColor.black, 1))

        if commit is not None:
            self.setToolTip(
                f"SHA: {commit.sha}\n"
                f"Author: {commit.author_name} <{commit.author_email}>\n"
                f"Message: {commit.message}"
            )
        else:
            self.setToolTip(f"SHA: {node.sha}")

    def itemChange(self, change, value):
        if change == QGraphicsItem.GraphicsItemChange.ItemSelectedChange:
            if value:  # Selected
                self.current_brush_color = SELECTED_COMMIT_COLOR
            else:  # Deselected
                self.current_brush_color = self.base_color
            self.setBrush(QBrush(self.current_brush_color))
        return super().itemChange(change, value)

    def hoverEnterEvent(self, event):
        if not self.isSelected():
            self.setBrush(QBrush(HOVER_COMMIT_COLOR))
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event):
        if not self.isSelected():
            self.setBrush(QBrush(self.current_brush_color))
        super().hoverLeaveEvent(event)


class EdgeLine(QGraphicsPathItem):
    """Child-to-parent edge: straight inside a lane, S-curve across lanes."""

    def __init__(
        self,
        child_item: CommitCircle,
        parent_item: CommitCircle,
        kind: EdgeKind,
        color: str = NEUTRAL_COLOR,
        parent: QGraphicsItem = None,
    ):
        super().__init__(parent)
        self.child_item = child_item
        self.parent_item = parent_item
        self.kind = kind
        self.line_color = QColor(color)

        self.setPen(
            QPen(
                self.line_color,
                EDGE_THICKNESS,
                Qt.PenStyle.SolidLine,
                Qt.PenCapStyle.RoundCap,
                Qt.PenJoinStyle.RoundJoin,
            )
        )
        self.setZValue(-1)  # Draw edges behind commits

        self.update_path()

    def update_path(self):
        start_pos = self.child_item.scenePos()
        end_pos = self.parent_item.scenePos()

        path = QPainterPath()
        path.moveTo(start_pos)
        if self.kind == EdgeKind.CONTINUATION:
            path.lineTo(end_pos)
        else:
            c1, c2 = curve_control_points((start_pos.x(), start_pos.y()), (end_pos.x(), end_pos.y()))
            path.cubicTo(QPointF(*c1), QPointF(*c2), end_pos)
        self.setPath(path)


class ReferenceLabel(QGraphicsTextItem):
    def __init__(self, ref: Ref, is_head: bool = False, parent: QGraphicsItem = None):
        super().__init__(ref.name, parent)
        self.ref = ref

        self.setFont(QFont("Arial", 8))

        if is_head:
            self.bg_color = REF_BACKGROUND_COLOR_HEAD
            self.border_color = REF_BORDER_COLOR_HEAD
            self.text_color = REF_TEXT_COLOR_HEAD
        elif ref.is_tag:
            self.bg_color = REF_BACKGROUND_COLOR_TAG
            self.border_color = REF_BORDER_COLOR_TAG
            self.text_color = REF_TEXT_COLOR_TAG
        elif ref.is_remote:
            self.bg_color = REF_BACKGROUND_COLOR_REMOTE
            self.border_color = REF_BORDER_COLOR_REMOTE
            self.text_color = REF_TEXT_COLOR_REMOTE
        else:  # Local branch
            self.bg_color = REF_BACKGROUND_COLOR_BRANCH
            self.border_color = REF_BORDER_COLOR_BRANCH
            self.text_color = REF_TEXT_COLOR_BRANCH

        self.setDefaultTextColor(self.text_color)

    def paint(self, painter, option, widget=None):
        painter.setPen(QPen(self.border_color, 1))
        painter.setBrush(QBrush(self.bg_color))
        painter.drawRoundedRect(self.boundingRect(), 3, 3)

        super().paint(painter, option, widget)

    def boundingRect(self) -> QRectF:
        # Include padding for the background
        rect = super().boundingRect()
        rect.adjust(-REF_PADDING_X, -REF_PADDING_Y, REF_PADDING_X, REF_PADDING_Y)
        return rect


class CommitMessageItem(QGraphicsTextItem):
    def __init__(self, full_message: str, parent: QGraphicsItem = None):
        super().__init__(parent)

        self.full_message = full_message

        if len(full_message) > COMMIT_MSG_MAX_LENGTH:
            display_text = full_message[: COMMIT_MSG_MAX_LENGTH - 3] + "..."
        else:
            display_text = full_message

        self.setPlainText(display_text)
        self.setFont(QFont(COMMIT_MSG_FONT_FAMILY, COMMIT_MSG_FONT_SIZE))
        self.setDefaultTextColor(COMMIT_MSG_COLOR)

        if display_text != full_message:
            self.setToolTip(f"Full message: {full_message}")
