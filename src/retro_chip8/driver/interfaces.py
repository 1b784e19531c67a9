# retro_chip8/driver/interfaces.py
"""
ドライバループが利用する外部コラボレータ (レンダラー、オーディオ出力) の抽象インターフェース。
"""
from abc import ABC, abstractmethod

from retro_chip8.common.types import Frame

# @intent:responsibility 画面スナップショットを1フレームごとに描画する責務を負います。
class Renderer(ABC):
    @abstractmethod
    def render(self, frame: Frame) -> None:
        """
        64x32 のフレームを描画します。frame[y][x] が点灯状態です。
        """
        pass

# @intent:responsibility サウンドタイマーが0より大きい間だけビープ音を出力する責務を負います。
class AudioSink(ABC):
    @abstractmethod
    def set_active(self, active: bool) -> None:
        pass

    def close(self) -> None:
        """出力デバイスを解放します。既定では何もしません。"""

class NullAudioSink(AudioSink):
    """
    音を出さないオーディオ出力。--no-sound 指定時やテストで使用します。
    """
    def __init__(self):
        self.active = False

    def set_active(self, active: bool) -> None:
        self.active = active
