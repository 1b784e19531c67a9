# retro_chip8/driver/loop.py
"""
ドライバループ。

CPUステップ (サイクル遅延で間引き) と 60Hz のタイマー/描画tickを交互に実行します。
ループ自体は pump() 単位で進み、待機 (スリープ) はホスト側のイベントループが担います。
"""
import logging
import time
from typing import Callable, Optional

from retro_chip8.core.cpu import Chip8Cpu
from retro_chip8.driver.interfaces import AudioSink, NullAudioSink, Renderer
from retro_chip8.driver.scheduler import CycleScheduler

logger = logging.getLogger(__name__)

# @intent:responsibility インタプリタと外部コラボレータを結び、時間経過に応じて実行を進めます。
class DriverLoop:
    def __init__(self, cpu: Chip8Cpu, scheduler: CycleScheduler, renderer: Optional[Renderer] = None,
                 audio: Optional[AudioSink] = None, clock: Callable[[], float] = time.monotonic):
        self._cpu = cpu
        self._scheduler = scheduler
        self._renderer = renderer
        self._audio = audio if audio is not None else NullAudioSink()
        self._clock = clock
        self._sound_on = False
        self.frames_rendered = 0

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    def start(self) -> None:
        self._scheduler.start(self._clock())
        self._render_if_dirty()

    # @intent:responsibility 期限を迎えたCPUステップとタイマーtickを実行します。
    # @intent:post-condition インタプリタのフォルトはそのまま呼び出し元へ送出されます。
    # @intent:return 実行したCPUステップ数 (キー入力待ち中のポーリングも含む)。
    def pump(self) -> int:
        steps, ticks = self._scheduler.advance(self._clock())

        for _ in range(steps):
            self._cpu.step()
            if self._cpu.is_waiting_for_key:
                # キー入力待ち中は命令を進めず、残りのステップを破棄する
                break

        for _ in range(ticks):
            self._cpu.timers.tick()

        if ticks:
            self._render_if_dirty()
            self._update_audio()
        return steps

    def _render_if_dirty(self) -> None:
        display = self._cpu.display
        if self._renderer is not None and display.dirty:
            self._renderer.render(display.snapshot())
            display.mark_clean()
            self.frames_rendered += 1

    def _update_audio(self) -> None:
        active = self._cpu.timers.sound_active
        if active != self._sound_on:
            self._sound_on = active
            self._audio.set_active(active)
            logger.debug("Sound %s", "on" if active else "off")

    def stop(self) -> None:
        if self._sound_on:
            self._audio.set_active(False)
            self._sound_on = False
        self._audio.close()
