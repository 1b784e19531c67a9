# retro_chip8/ui/display_view.py
"""
CHIP-8 画面をウィンドウサイズに合わせて拡大描画するウィジェット。
"""
from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QColor, QPainter
from PySide6.QtWidgets import QWidget

from retro_chip8.common.constants import DISPLAY_HEIGHT, DISPLAY_WIDTH
from retro_chip8.common.types import Frame
from retro_chip8.config.models import DisplayConfig
from retro_chip8.driver.interfaces import Renderer

# @intent:responsibility ドライバループから受け取ったフレームを保持し、paintEventで描画します。
class DisplayView(QWidget):
    def __init__(self, config: DisplayConfig, parent=None):
        super().__init__(parent)
        self._foreground = QColor(config.foreground)
        self._background = QColor(config.background)
        self._frame: Frame = tuple(tuple([False] * DISPLAY_WIDTH) for _ in range(DISPLAY_HEIGHT))
        self.setMinimumSize(DISPLAY_WIDTH, DISPLAY_HEIGHT)
        self.resize(DISPLAY_WIDTH * config.scale, DISPLAY_HEIGHT * config.scale)
        # キー入力はメインウィンドウで処理する
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)

    # @intent:responsibility Renderer インターフェースの実装。再描画を要求するだけで、描画はイベントループが行います。
    def render(self, frame: Frame) -> None:
        self._frame = frame
        self.update()

    def frame(self) -> Frame:
        return self._frame

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._background)

        rows = len(self._frame)
        cols = len(self._frame[0]) if rows else 0
        if rows and cols:
            cell_w = self.width() / cols
            cell_h = self.height() / rows
            for y, row in enumerate(self._frame):
                for x, lit in enumerate(row):
                    if lit:
                        painter.fillRect(QRectF(x * cell_w, y * cell_h, cell_w, cell_h), self._foreground)
        painter.end()

# @intent:rationale QWidgetのメタクラスはABCMetaと共存できないため、仮想サブクラスとして登録します。
Renderer.register(DisplayView)
