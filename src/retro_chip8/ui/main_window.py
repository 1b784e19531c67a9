# retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
画面ウィジェットを保持し、QTimer でドライバループを駆動し、キー入力をキーパッドへ渡します。
"""
import os
from typing import Optional

from PySide6.QtCore import Qt, QTimer, Slot
from PySide6.QtGui import QCloseEvent, QFocusEvent, QKeyEvent
from PySide6.QtWidgets import QMainWindow

from retro_chip8.common.errors import Chip8Error
from retro_chip8.config.models import EmulatorConfig
from retro_chip8.core.cpu import Chip8Cpu
from retro_chip8.driver.input import KeyMapper
from retro_chip8.driver.interfaces import AudioSink
from retro_chip8.driver.loop import DriverLoop
from retro_chip8.driver.scheduler import CycleScheduler
from .display_view import DisplayView

# ドライバループを駆動する間隔 (ms)。実際の実行量はスケジューラが経過時間から決める。
PUMP_INTERVAL_MS = 1

# @intent:responsibility アプリケーションのメインウィンドウを定義し、インタプリタとホストを結び付けます。
class Chip8Window(QMainWindow):
    """
    ウィンドウを閉じると実行は終了します。
    インタプリタのフォルトが発生した場合も、フォルトを記録した上でウィンドウを閉じます。
    """
    def __init__(self, cpu: Chip8Cpu, scheduler: CycleScheduler, config: EmulatorConfig,
                 audio: Optional[AudioSink] = None, parent=None):
        super().__init__(parent)
        title = "Retro CHIP-8"
        if config.rom_path:
            title += f" - {os.path.basename(config.rom_path)}"
        self.setWindowTitle(title)

        self._view = DisplayView(config.display, self)
        self.setCentralWidget(self._view)
        self.resize(self._view.size())

        self._cpu = cpu
        self._key_mapper = KeyMapper(cpu.keypad, config.key_map)
        self._driver = DriverLoop(cpu, scheduler, renderer=self._view, audio=audio)
        self._fault: Optional[Chip8Error] = None

        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.timeout.connect(self._pump)

    @property
    def fault(self) -> Optional[Chip8Error]:
        return self._fault

    @property
    def driver(self) -> DriverLoop:
        return self._driver

    @property
    def view(self) -> DisplayView:
        return self._view

    def start(self) -> None:
        self._driver.start()
        self._timer.start(PUMP_INTERVAL_MS)

    # @intent:responsibility タイマーごとにドライバループを進め、フォルト時は実行を止めてウィンドウを閉じます。
    @Slot()
    def _pump(self):
        try:
            self._driver.pump()
        except Chip8Error as e:
            self._fault = e
            self._timer.stop()
            self.close()

    def keyPressEvent(self, event: QKeyEvent):
        if event.key() == Qt.Key.Key_Escape:
            self.close()
            return
        if event.isAutoRepeat():
            return
        if not self._key_mapper.handle(event.text(), True):
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            return
        if not self._key_mapper.handle(event.text(), False):
            super().keyReleaseEvent(event)

    # @intent:responsibility フォーカスを失うと解放イベントが届かないため、全てのキーを解放します。
    def focusOutEvent(self, event: QFocusEvent):
        self._cpu.keypad.release_all()
        super().focusOutEvent(event)

    def closeEvent(self, event: QCloseEvent):
        self._timer.stop()
        self._driver.stop()
        super().closeEvent(event)
