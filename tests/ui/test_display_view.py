import sys
import unittest

from PySide6.QtCore import QEvent, Qt
from PySide6.QtGui import QColor, QFocusEvent, QKeyEvent
from PySide6.QtWidgets import QApplication

from retro_chip8.config.models import DisplayConfig, EmulatorConfig
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.driver.interfaces import NullAudioSink, Renderer
from retro_chip8.ui.display_view import DisplayView
from retro_chip8.ui.main_window import Chip8Window


class TestDisplayView(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def test_is_a_renderer(self):
        view = DisplayView(DisplayConfig())
        self.assertIsInstance(view, Renderer)
        self.assertEqual((view.width(), view.height()), (640, 320))

    def test_render_paints_lit_pixels(self):
        view = DisplayView(DisplayConfig(scale=4, foreground="#FFFFFF", background="#000000"))
        frame = tuple(tuple(x == 0 and y == 0 for x in range(64)) for y in range(32))
        view.render(frame)
        self.assertEqual(view.frame(), frame)

        image = view.grab().toImage()
        self.assertEqual(image.pixelColor(1, 1), QColor("#FFFFFF"))
        self.assertEqual(image.pixelColor(10, 10), QColor("#000000"))


class TestChip8Window(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def _window(self, rom, **kwargs):
        config = EmulatorConfig(rom_path="test.ch8", **kwargs)
        cpu, scheduler = SystemBuilder().build_system(config, rom=rom)
        return cpu, Chip8Window(cpu, scheduler, config, audio=NullAudioSink())

    def test_title_and_view(self):
        _, window = self._window(bytes([0x12, 0x00]))
        self.assertEqual(window.windowTitle(), "Retro CHIP-8 - test.ch8")
        self.assertIs(window.centralWidget(), window.view)

    def test_key_events_update_keypad(self):
        cpu, window = self._window(bytes([0x12, 0x00]))
        window.keyPressEvent(QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_W, Qt.KeyboardModifier.NoModifier, "w"))
        self.assertTrue(cpu.keypad.is_pressed(0x5))
        window.keyReleaseEvent(QKeyEvent(QEvent.Type.KeyRelease, Qt.Key.Key_W, Qt.KeyboardModifier.NoModifier, "w"))
        self.assertFalse(cpu.keypad.is_pressed(0x5))

    def test_auto_repeat_is_ignored(self):
        cpu, window = self._window(bytes([0x12, 0x00]))
        event = QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_W, Qt.KeyboardModifier.NoModifier, "w", True)
        window.keyPressEvent(event)
        self.assertFalse(cpu.keypad.is_pressed(0x5))

    def test_focus_out_releases_keys(self):
        cpu, window = self._window(bytes([0x12, 0x00]))
        window.keyPressEvent(QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_Q, Qt.KeyboardModifier.NoModifier, "q"))
        self.assertTrue(cpu.keypad.is_pressed(0x4))
        window.focusOutEvent(QFocusEvent(QEvent.Type.FocusOut))
        self.assertFalse(cpu.keypad.is_pressed(0x4))

    def test_fault_stops_window(self):
        cpu, window = self._window(bytes([0xFF, 0xFF]), cycle_delay_ms=0)
        window.start()
        window._pump()
        self.assertIsNotNone(window.fault)
        self.assertTrue(cpu.is_halted)
        self.assertEqual(type(window.fault).__name__, "UnimplementedOpcode")

    def test_pump_executes_program(self):
        # LD I, 0x050; DRW V0, V0, 5; JP 0x204
        cpu, window = self._window(bytes([0xA0, 0x50, 0xD0, 0x05, 0x12, 0x04]), cycle_delay_ms=0)
        window.start()
        window.driver.pump()
        self.assertEqual(cpu.display.lit_pixel_count(), 14)
        window.close()
