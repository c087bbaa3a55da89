"""Meme canvas using QGraphicsView with an interactive caption overlay."""

from __future__ import annotations

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import (
    QBrush,
    QColor,
    QFont,
    QFontMetricsF,
    QPainter,
    QPen,
    QPixmap,
    QResizeEvent,
)
from PySide6.QtWidgets import (
    QApplication,
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsObject,
    QGraphicsPixmapItem,
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSimpleTextItem,
    QGraphicsView,
)

from src.models.caption import Caption
from src.models.image_store import ImageStore
from src.utils.config import CANVAS_MIN_HEIGHT, CANVAS_MIN_WIDTH, CAPTION_FONT_FAMILY
from src.utils.coords import ImageBox, fit_box, percent_to_display
from src.utils.i18n import tr

_SELECT_PAD = 6
_DELETE_RADIUS = 10
_CAPTION_Z_BASE = 10
_BUSY_Z = 1000
_BUSY_BANNER_H = 48


def caption_font(font_size: float) -> QFont:
    """QFont for a caption at a display-space pixel size."""
    font = QFont(CAPTION_FONT_FAMILY)
    font.setPixelSize(max(1, round(font_size)))
    font.setBold(True)
    return font


class _DeleteHandle(QGraphicsEllipseItem):
    """Small × button attached to the selected caption."""

    def __init__(self, caption_id: str, parent: QGraphicsItem) -> None:
        super().__init__(-_DELETE_RADIUS, -_DELETE_RADIUS, 2 * _DELETE_RADIUS, 2 * _DELETE_RADIUS, parent)
        self.caption_id = caption_id
        self.setBrush(QBrush(QColor(220, 50, 50)))
        self.setPen(QPen(QColor(255, 255, 255), 1.5))
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setZValue(1)

    def paint(self, painter: QPainter, option, widget=None) -> None:
        super().paint(painter, option, widget)
        painter.setPen(QPen(QColor(255, 255, 255), 2))
        d = _DELETE_RADIUS * 0.45
        painter.drawLine(QPointF(-d, -d), QPointF(d, d))
        painter.drawLine(QPointF(-d, d), QPointF(d, -d))


class CaptionItem(QGraphicsObject):
    """One caption, centered on its position.

    Preview outline: four copies of the glyphs offset diagonally by the
    stroke width, then the fill on top.
    """

    def __init__(self, caption: Caption, selected: bool = False) -> None:
        super().__init__()
        self.caption_id = caption.id
        self._caption = caption
        self._selected = selected
        self._font = caption_font(caption.font_size)
        metrics = QFontMetricsF(self._font)
        text_rect = metrics.boundingRect(QRectF(), Qt.AlignmentFlag.AlignCenter, caption.display_text)
        pad = caption.stroke_width + _SELECT_PAD
        self._text_rect = QRectF(
            -text_rect.width() / 2, -text_rect.height() / 2, text_rect.width(), text_rect.height()
        )
        self._bounds = self._text_rect.adjusted(-pad, -pad, pad, pad)
        self.setCursor(Qt.CursorShape.OpenHandCursor)

        self._delete_handle: _DeleteHandle | None = None
        if selected:
            self._delete_handle = _DeleteHandle(caption.id, self)
            self._delete_handle.setPos(self._bounds.topRight())

    @property
    def caption(self) -> Caption:
        return self._caption

    def boundingRect(self) -> QRectF:
        return self._bounds

    def paint(self, painter: QPainter, option, widget=None) -> None:
        caption = self._caption
        text = caption.display_text
        flags = int(Qt.AlignmentFlag.AlignCenter)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        painter.setFont(self._font)

        w = caption.stroke_width
        if w > 0:
            painter.setPen(QColor(caption.stroke_color))
            for dx, dy in ((w, w), (-w, w), (w, -w), (-w, -w)):
                painter.drawText(self._text_rect.translated(dx, dy), flags, text)

        painter.setPen(QColor(caption.color))
        painter.drawText(self._text_rect, flags, text)

        if self._selected:
            painter.setPen(QPen(QColor(0, 188, 212), 2, Qt.PenStyle.DashLine))
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawRect(self._bounds)


class MemeCanvasWidget(QGraphicsView):
    """Displays the working image fitted to the view with draggable captions.

    Pointer gestures are reported as signals; positions are scene
    coordinates, which map 1:1 to viewport pixels.
    """

    caption_pressed = Signal(str)
    caption_drag_started = Signal(str)
    caption_dropped = Signal(str, float, float)  # (id, scene x, scene y)
    caption_delete_clicked = Signal(str)
    background_clicked = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setMinimumSize(CANVAS_MIN_WIDTH, CANVAS_MIN_HEIGHT)
        self.setRenderHint(QPainter.RenderHint.Antialiasing)

        self._scene = QGraphicsScene(self)
        self.setScene(self._scene)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setStyleSheet("background-color: #0f172a; border: none;")

        # Base image layer
        self._image_item = QGraphicsPixmapItem()
        self._image_item.setTransformationMode(Qt.TransformationMode.SmoothTransformation)
        self._image_item.setZValue(0)
        self._scene.addItem(self._image_item)
        self._source_pixmap: QPixmap | None = None
        self._image_data: bytes | None = None
        self._image_box = ImageBox(0.0, 0.0, 0.0, 0.0)

        # Captions
        self._captions: list[Caption] = []
        self._selected_id: str | None = None
        self._caption_items: dict[str, CaptionItem] = {}

        # Placeholder
        self._placeholder = QGraphicsSimpleTextItem(tr("Upload an image or pick a template"))
        self._placeholder.setBrush(QBrush(QColor(148, 163, 184)))
        self._scene.addItem(self._placeholder)

        # Busy overlay
        self._busy_rect = QGraphicsRectItem()
        self._busy_rect.setBrush(QBrush(QColor(0, 0, 0, 180)))
        self._busy_rect.setPen(QPen(Qt.PenStyle.NoPen))
        self._busy_rect.setZValue(_BUSY_Z)
        self._busy_rect.setVisible(False)
        self._scene.addItem(self._busy_rect)
        self._busy_text = QGraphicsSimpleTextItem()
        self._busy_text.setBrush(QBrush(QColor(255, 255, 255)))
        busy_font = QFont()
        busy_font.setPointSize(16)
        busy_font.setBold(True)
        self._busy_text.setFont(busy_font)
        self._busy_text.setZValue(_BUSY_Z + 1)
        self._busy_text.setVisible(False)
        self._scene.addItem(self._busy_text)

        # Drag tracking
        self._press_caption_id: str | None = None
        self._press_pos: QPointF | None = None
        self._dragging = False

    # ---------------------------------------------------------------- state

    def set_image(self, image: ImageStore) -> None:
        """Show the working image (no-op if the same bytes are already shown)."""
        if image.data is self._image_data:
            return
        self._image_data = image.data
        # 새 이미지에는 이전 드래그를 이어가지 않는다
        self._cancel_drag()
        if image.has_image:
            pixmap = QPixmap()
            pixmap.loadFromData(image.data)
            self._source_pixmap = pixmap if not pixmap.isNull() else None
        else:
            self._source_pixmap = None
        self._fit_image()

    def set_captions(self, captions: list[Caption], selected_id: str | None) -> None:
        """Store the session's caption list; items are rebuilt unless a drag is live."""
        self._captions = list(captions)
        self._selected_id = selected_id
        if not self._dragging:
            self._rebuild_caption_items()

    def set_busy_message(self, message: str) -> None:
        """Show *message* in a top status banner; empty string hides it."""
        visible = bool(message)
        self._busy_text.setText(message)
        self._busy_rect.setVisible(visible)
        self._busy_text.setVisible(visible)
        self._layout_busy_overlay()

    def is_busy_visible(self) -> bool:
        return self._busy_rect.isVisible()

    # ------------------------------------------------------------- geometry

    def image_box(self) -> ImageBox:
        """Displayed image rectangle in scene (= viewport) px."""
        return self._image_box

    def displayed_width(self) -> float:
        return self._image_box.width

    def caption_item(self, caption_id: str) -> CaptionItem | None:
        return self._caption_items.get(caption_id)

    def _fit_image(self) -> None:
        view_size = self.viewport().size()
        self._scene.setSceneRect(0, 0, view_size.width(), view_size.height())
        pixmap = self._source_pixmap
        if pixmap is None:
            self._image_item.setVisible(False)
            self._image_box = ImageBox(0.0, 0.0, 0.0, 0.0)
            self._placeholder.setVisible(True)
            rect = self._placeholder.boundingRect()
            self._placeholder.setPos(
                (view_size.width() - rect.width()) / 2, (view_size.height() - rect.height()) / 2
            )
        else:
            self._placeholder.setVisible(False)
            self._image_box = fit_box(pixmap.width(), pixmap.height(), view_size.width(), view_size.height())
            scaled = pixmap.scaled(
                max(1, round(self._image_box.width)), max(1, round(self._image_box.height)),
                Qt.AspectRatioMode.IgnoreAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )
            self._image_item.setPixmap(scaled)
            self._image_item.setPos(self._image_box.left, self._image_box.top)
            self._image_item.setVisible(True)
        self._rebuild_caption_items()
        self._layout_busy_overlay()

    def _rebuild_caption_items(self) -> None:
        for item in self._caption_items.values():
            self._scene.removeItem(item)
        self._caption_items.clear()
        if self._image_box.is_empty:
            return
        for z, caption in enumerate(self._captions):
            item = CaptionItem(caption, selected=caption.id == self._selected_id)
            item.setZValue(_CAPTION_Z_BASE + z)  # later captions on top
            x, y = percent_to_display(caption.x, caption.y, self._image_box)
            item.setPos(x, y)
            self._scene.addItem(item)
            self._caption_items[caption.id] = item

    def _layout_busy_overlay(self) -> None:
        # 상단 배너만 덮음: 대기 중에도 캡션 편집 가능
        scene_rect = self._scene.sceneRect()
        rect = QRectF(scene_rect.left(), scene_rect.top(), scene_rect.width(), _BUSY_BANNER_H)
        self._busy_rect.setRect(rect)
        text_rect = self._busy_text.boundingRect()
        self._busy_text.setPos(
            rect.center().x() - text_rect.width() / 2, rect.center().y() - text_rect.height() / 2
        )

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        # 퍼센트 좌표는 그대로, 픽셀 박스만 다시 계산
        self._fit_image()

    # ---------------------------------------------------------- hit testing

    def _hit(self, view_pos) -> tuple[str, str | None]:
        """Return ("delete" | "caption" | "background", caption_id)."""
        scene_pos = self.mapToScene(view_pos)
        for item in self._scene.items(scene_pos):
            if isinstance(item, _DeleteHandle):
                return "delete", item.caption_id
            if isinstance(item, CaptionItem):
                return "caption", item.caption_id
        return "background", None

    # ---------------------------------------------------------------- mouse

    def _cancel_drag(self) -> None:
        if self._press_caption_id is None:
            return
        self._press_caption_id = None
        self._press_pos = None
        self._dragging = False
        self.unsetCursor()

    def mousePressEvent(self, event) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        kind, caption_id = self._hit(event.pos())
        if kind == "delete":
            self.caption_delete_clicked.emit(caption_id)
            event.accept()
            return
        if kind == "caption":
            self._press_caption_id = caption_id
            self._press_pos = self.mapToScene(event.pos())
            self._dragging = False
            self.caption_pressed.emit(caption_id)
            event.accept()
            return
        self.background_clicked.emit()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:
        if self._press_caption_id is None or self._press_pos is None:
            super().mouseMoveEvent(event)
            return
        scene_pos = self.mapToScene(event.pos())
        if not self._dragging:
            distance = (scene_pos - self._press_pos).manhattanLength()
            if distance < QApplication.startDragDistance():
                event.accept()
                return
            self._dragging = True
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
            self.caption_drag_started.emit(self._press_caption_id)
        item = self._caption_items.get(self._press_caption_id)
        if item is not None:
            item.setPos(scene_pos)  # 드롭 위치 = 포인터 위치
        event.accept()

    def mouseReleaseEvent(self, event) -> None:
        if event.button() != Qt.MouseButton.LeftButton or self._press_caption_id is None:
            super().mouseReleaseEvent(event)
            return
        caption_id = self._press_caption_id
        was_dragging = self._dragging
        self._press_caption_id = None
        self._press_pos = None
        self._dragging = False
        self.unsetCursor()
        if was_dragging:
            scene_pos = self.mapToScene(event.pos())
            self.caption_dropped.emit(caption_id, scene_pos.x(), scene_pos.y())
            # 드롭이 세션을 바꾸지 않았어도 최신 목록으로 복원
            self._rebuild_caption_items()
        event.accept()
