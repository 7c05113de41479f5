from __future__ import annotations

from PySide6.QtCore import Qt, QPointF, QRectF
from PySide6.QtGui import QColor, QFont, QMouseEvent, QPainter, QPaintEvent, QPen, QRadialGradient
from PySide6.QtWidgets import QWidget

from balloonspots.controller.screen import BalloonScreen, Phase
from balloonspots.model.balloon import Balloon
from balloonspots.model.geometry import Point
from balloonspots.spots.gestures import PanGesture

# Press + release closer than this is a tap, not a drag
TAP_SLOP_PX = 6.0

BALLOON_COLORS = ["#FF595E", "#FFCA3A", "#8AC926", "#1982C4", "#6A4C93", "#FF924C", "#52A675", "#4267AC"]


def _to_point(pos: QPointF) -> Point:
    return Point(pos.x(), pos.y())


class BalloonCanvas(QWidget):
    """
    Paints the scene of a `BalloonScreen` and feeds it mouse input:
      - drag anywhere -> pan gesture (vertical motion spreads/gathers the ring),
      - click on a balloon -> tap (the balloon flies away).
    """
    def __init__(self, screen: BalloonScreen, parent: QWidget | None = None) -> None:
        super().__init__(parent=parent)
        self.screen = screen
        self.gesture = PanGesture()
        self._press_point: Point | None = None
        self._dragging = False

        bounds = screen.bounds
        self.setFixedSize(int(bounds.width), int(bounds.height))
        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent)

        screen.stepped.connect(self.update)
        screen.phase_changed.connect(lambda *_: self.update())

    # ------------------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------------------

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            return
        point = _to_point(event.position())
        self._press_point = point
        self._dragging = False
        self.gesture.begin(point)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._press_point is None:
            return
        point = _to_point(event.position())
        self.gesture.update(point)
        if not self._dragging and point.distance_to(self._press_point) > TAP_SLOP_PX:
            self._dragging = True
        if self._dragging:
            self.screen.pan(self.gesture)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if self._press_point is None or event.button() != Qt.MouseButton.LeftButton:
            return
        if not self._dragging:
            self.screen.tap_at(_to_point(event.position()))
        self.gesture.end()
        self.screen.pan(self.gesture)
        self.gesture.reset()
        self._press_point = None
        self._dragging = False

    # ------------------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------------------

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor("#F4F7FB"))

        phase = self.screen.phase
        if phase == Phase.BLACK_HOLE:
            self._paint_black_hole(painter)

        for balloon in self.screen.scene:
            self._paint_balloon(painter, balloon)

        if phase == Phase.FINISHED:
            self._paint_the_end(painter)
        painter.end()

    def _paint_balloon(self, painter: QPainter, balloon: Balloon) -> None:
        color = QColor(BALLOON_COLORS[balloon.ident % len(BALLOON_COLORS)])
        frame = balloon.frame
        body = QRectF(frame.x, frame.y, frame.width, frame.height * 0.8)

        # string
        painter.setPen(QPen(QColor("#555555"), 1.2))
        bottom = QPointF(body.center().x(), body.bottom())
        painter.drawLine(bottom, QPointF(bottom.x(), frame.bottom))

        painter.setPen(QPen(color.darker(130), 1.5))
        painter.setBrush(color)
        painter.drawEllipse(body)

        # highlight
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QColor(255, 255, 255, 90))
        painter.drawEllipse(QRectF(body.x() + body.width() * 0.2, body.y() + body.height() * 0.15,
                                   body.width() * 0.25, body.height() * 0.2))

    def _paint_black_hole(self, painter: QPainter) -> None:
        center = self.screen.escape.black_hole_center
        radius = self.screen.config.escape.vortex_minimum_radius * 0.6
        gradient = QRadialGradient(QPointF(center.x, center.y), radius)
        gradient.setColorAt(0.0, QColor("#000000"))
        gradient.setColorAt(0.55, QColor("#1B1035"))
        gradient.setColorAt(1.0, QColor(27, 16, 53, 0))
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(gradient)
        painter.drawEllipse(QPointF(center.x, center.y), radius, radius)

    def _paint_the_end(self, painter: QPainter) -> None:
        font = QFont(self.font())
        font.setPointSize(36)
        font.setBold(True)
        painter.setFont(font)
        painter.setPen(QColor("#222222"))
        painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, self.tr("The End"))
