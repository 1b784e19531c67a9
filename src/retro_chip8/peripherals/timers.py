# retro_chip8/peripherals/timers.py
"""
遅延タイマー (DT) とサウンドタイマー (ST)。
"""

# @intent:responsibility 2つの独立した8bitカウンタを保持し、60Hzのtickごとに1ずつ減算します。
# @intent:rationale tick()はドライバが固定60Hzで呼び出すため、CPUの命令実行速度には依存しません。
class TimerSubsystem:
    def __init__(self):
        self._delay = 0
        self._sound = 0

    @staticmethod
    def _check(value: int) -> int:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Timer value {value} is not an 8-bit value.")
        return value

    def get_delay(self) -> int:
        return self._delay

    def set_delay(self, value: int) -> None:
        self._delay = self._check(value)

    def get_sound(self) -> int:
        return self._sound

    def set_sound(self, value: int) -> None:
        self._sound = self._check(value)

    delay = property(get_delay, set_delay)
    sound = property(get_sound, set_sound)

    # @intent:responsibility 両方のカウンタを、0より大きい場合のみ1減算します。
    def tick(self) -> None:
        if self._delay > 0:
            self._delay -= 1
        if self._sound > 0:
            self._sound -= 1

    # @intent:responsibility サウンド出力はSTが0より大きい間だけ有効です。
    @property
    def sound_active(self) -> bool:
        return self._sound > 0

    def reset(self) -> None:
        self._delay = 0
        self._sound = 0
