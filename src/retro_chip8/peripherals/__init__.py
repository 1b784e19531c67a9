"""
CPUが所有する周辺機器 (画面、キーパッド、タイマー、乱数源)。
"""
from .display import DisplayBuffer
from .keypad import Keypad
from .rng import Lfsr
from .timers import TimerSubsystem
