from dataclasses import dataclass, field
from typing import Optional

from retro_chip8.common.constants import DEFAULT_CYCLE_DELAY_MS, TIMER_HZ
from retro_chip8.common.types import KeyMap

# @intent:data_structure ホストキーボードの既定配列。
#   1 2 3 4      1 2 3 C
#   q w e r  ->  4 5 6 D
#   a s d f      7 8 9 E
#   z x c v      A 0 B F
DEFAULT_KEY_MAP: KeyMap = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "q": 0x4, "w": 0x5, "e": 0x6, "r": 0xD,
    "a": 0x7, "s": 0x8, "d": 0x9, "f": 0xE,
    "z": 0xA, "x": 0x0, "c": 0xB, "v": 0xF,
}

@dataclass
class DisplayConfig:
    scale: int = 10
    foreground: str = "#FFFFFF"
    background: str = "#000000"

@dataclass
class SoundConfig:
    enabled: bool = True
    tone_hz: int = 440
    volume: float = 0.25

@dataclass
class EmulatorConfig:
    rom_path: Optional[str] = None
    cycle_delay_ms: float = DEFAULT_CYCLE_DELAY_MS
    timer_hz: int = TIMER_HZ
    sprite_wrap: bool = True  # False: 画面端でクリップ
    display: DisplayConfig = field(default_factory=DisplayConfig)
    sound: SoundConfig = field(default_factory=SoundConfig)
    key_map: KeyMap = field(default_factory=lambda: dict(DEFAULT_KEY_MAP))
    log_level: str = "WARNING"
