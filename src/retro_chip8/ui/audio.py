# retro_chip8/ui/audio.py
"""
QtMultimedia による矩形波ビープ出力。
"""
import array
import logging
from typing import Optional

from PySide6.QtCore import QIODevice
from PySide6.QtMultimedia import QAudioFormat, QAudioSink, QMediaDevices

from retro_chip8.config.models import SoundConfig
from retro_chip8.driver.interfaces import AudioSink

logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050

# @intent:responsibility 1周期分の矩形波を繰り返し供給する、終わりのない読み取り専用デバイス。
class SquareWaveGenerator(QIODevice):
    def __init__(self, tone_hz: int, volume: float, sample_rate: int = SAMPLE_RATE, parent=None):
        super().__init__(parent)
        period = max(2, sample_rate // max(1, tone_hz))
        amplitude = int(32767 * min(max(volume, 0.0), 1.0))
        samples = array.array('h', [amplitude if n < period // 2 else -amplitude for n in range(period)])
        self._buffer = samples.tobytes()
        self._pos = 0

    def start(self) -> None:
        self.open(QIODevice.OpenModeFlag.ReadOnly)

    def readData(self, maxlen):
        out = bytearray()
        while len(out) < maxlen:
            chunk = self._buffer[self._pos:self._pos + (maxlen - len(out))]
            out += chunk
            self._pos = (self._pos + len(chunk)) % len(self._buffer)
        return bytes(out)

    def writeData(self, data):
        return 0

    def bytesAvailable(self):
        return len(self._buffer) + super().bytesAvailable()

    def isSequential(self):
        return True

# @intent:responsibility サウンドタイマーに連動して矩形波の出力を再開/一時停止します。
# @intent:rationale 出力デバイスが無い環境 (CI, ヘッドレス) では警告を出して無音で動作します。
class QtToneSink(AudioSink):
    def __init__(self, config: SoundConfig):
        self._sink: Optional[QAudioSink] = None
        self._generator: Optional[SquareWaveGenerator] = None

        device = QMediaDevices.defaultAudioOutput()
        if device.isNull():
            logger.warning("No audio output device found; sound disabled.")
            return

        audio_format = QAudioFormat()
        audio_format.setSampleRate(SAMPLE_RATE)
        audio_format.setChannelCount(1)
        audio_format.setSampleFormat(QAudioFormat.SampleFormat.Int16)
        if not device.isFormatSupported(audio_format):
            logger.warning("Audio device %s does not support 16-bit mono; sound disabled.", device.description())
            return

        self._generator = SquareWaveGenerator(config.tone_hz, config.volume)
        self._generator.start()
        self._sink = QAudioSink(device, audio_format)
        self._sink.start(self._generator)
        self._sink.suspend()

    @property
    def available(self) -> bool:
        return self._sink is not None

    def set_active(self, active: bool) -> None:
        if self._sink is None:
            return
        if active:
            self._sink.resume()
        else:
            self._sink.suspend()

    def close(self) -> None:
        if self._sink is not None:
            self._sink.stop()
            self._sink = None
        if self._generator is not None:
            self._generator.close()
            self._generator = None
