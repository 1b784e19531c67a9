# retro_chip8/driver/scheduler.py
"""
CPUの命令サイクルと60Hzのタイマー/描画サイクルを、単一スレッド上で独立に刻むスケジューラ。
"""
import math
from typing import Optional, Tuple

from retro_chip8.common.constants import DEFAULT_CYCLE_DELAY_MS, TIMER_HZ

# @intent:responsibility 経過時間から、実行すべきCPUステップ数とタイマーtick数を算出します。
# @intent:rationale 2つのケイデンスはそれぞれ開始時刻からの絶対経過時間で数えるため、
#                  CPU速度の調整がタイマー精度やフレームレートに影響しません。
class CycleScheduler:
    """
    advance(now) は前回呼び出し以降に期限を迎えた (cpu_steps, timer_ticks) を返します。
    長時間呼び出されなかった場合の追いつき量は上限で打ち切られます。
    """
    # 浮動小数点の丸めで境界上のtickを取りこぼさないための許容誤差
    _EPSILON = 1e-9

    def __init__(self, cycle_delay_ms: float = DEFAULT_CYCLE_DELAY_MS, timer_hz: int = TIMER_HZ,
                 max_steps_per_advance: int = 1000, max_ticks_per_advance: int = 60):
        if cycle_delay_ms < 0:
            raise ValueError("cycle_delay_ms must not be negative.")
        if timer_hz <= 0:
            raise ValueError("timer_hz must be positive.")
        self._cycle_delay = cycle_delay_ms / 1000.0
        self._timer_hz = timer_hz
        self._max_steps = max_steps_per_advance
        self._max_ticks = max_ticks_per_advance
        self._start: Optional[float] = None
        self._steps_issued = 0
        self._ticks_issued = 0

    @property
    def cycle_delay_ms(self) -> float:
        return self._cycle_delay * 1000.0

    @property
    def timer_hz(self) -> int:
        return self._timer_hz

    def start(self, now: float) -> None:
        self._start = now
        self._steps_issued = 0
        self._ticks_issued = 0

    def advance(self, now: float) -> Tuple[int, int]:
        if self._start is None:
            self.start(now)
            return 0, 0
        elapsed = max(0.0, now - self._start)

        # Timer cadence
        tick_target = math.floor(elapsed * self._timer_hz + self._EPSILON)
        ticks = tick_target - self._ticks_issued
        if ticks > self._max_ticks:
            ticks = self._max_ticks
        self._ticks_issued = tick_target

        # CPU cadence
        if self._cycle_delay == 0:
            return self._max_steps, ticks
        step_target = math.floor(elapsed / self._cycle_delay + self._EPSILON)
        steps = step_target - self._steps_issued
        if steps > self._max_steps:
            steps = self._max_steps
        self._steps_issued = step_target

        return steps, ticks
