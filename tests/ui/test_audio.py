import array
import sys
import unittest
from unittest import mock

from PySide6.QtMultimedia import QAudioDevice
from PySide6.QtWidgets import QApplication

from retro_chip8.config.models import SoundConfig
from retro_chip8.ui.audio import SquareWaveGenerator, QtToneSink


def samples(data):
    wave = array.array('h')
    wave.frombytes(data)
    return list(wave)


class TestSquareWaveGenerator(unittest.TestCase):
    def test_one_period(self):
        # 22050 Hz / 441 Hz = 50 サンプル周期、前半が正、後半が負
        generator = SquareWaveGenerator(tone_hz=441, volume=0.5)
        generator.start()
        self.assertTrue(generator.isOpen())

        wave = samples(generator.readData(100))
        self.assertEqual(wave, [16383] * 25 + [-16383] * 25)

    def test_read_longer_than_period_continues_wave(self):
        generator = SquareWaveGenerator(tone_hz=441, volume=1.0)
        generator.start()
        data = generator.readData(250)
        self.assertEqual(len(data), 250)
        wave = samples(data)
        period = [32767] * 25 + [-32767] * 25
        self.assertEqual(wave, (period * 3)[:125])

    def test_consecutive_reads_resume_mid_period(self):
        generator = SquareWaveGenerator(tone_hz=441, volume=1.0)
        generator.start()
        first = samples(generator.readData(30))
        second = samples(generator.readData(100))
        period = [32767] * 25 + [-32767] * 25
        self.assertEqual(first + second, (period * 2)[:65])

    def test_volume_is_clamped(self):
        generator = SquareWaveGenerator(tone_hz=441, volume=3.0)
        self.assertEqual(max(samples(generator.readData(100))), 32767)
        silent = SquareWaveGenerator(tone_hz=441, volume=-1.0)
        self.assertEqual(set(samples(silent.readData(100))), {0})

    def test_device_properties(self):
        generator = SquareWaveGenerator(tone_hz=441, volume=1.0)
        self.assertTrue(generator.isSequential())
        self.assertEqual(generator.writeData(b"\x00\x01"), 0)
        self.assertGreaterEqual(generator.bytesAvailable(), 100)


class TestQtToneSink(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def test_without_output_device_sink_is_disabled(self):
        with mock.patch("retro_chip8.ui.audio.QMediaDevices") as devices:
            devices.defaultAudioOutput.return_value = QAudioDevice()
            sink = QtToneSink(SoundConfig())
        self.assertFalse(sink.available)
        sink.set_active(True)
        sink.set_active(False)
        sink.close()
        self.assertFalse(sink.available)
