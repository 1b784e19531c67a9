# retro_chip8/common/constants.py
"""
CHIP-8 のメモリマップ、フォントセット、画面サイズなどの固定値。
"""
from typing import Tuple

# @intent:constant メモリ空間 (0x000-0xFFF) の定義。
MEMORY_SIZE = 0x1000
MAX_ADDRESS = MEMORY_SIZE - 1

# @intent:constant 組み込みフォントとプログラムのロード位置。
FONT_START_ADDRESS = 0x050
FONT_GLYPH_SIZE = 5
PROGRAM_START_ADDRESS = 0x200
MAX_ROM_SIZE = MAX_ADDRESS - PROGRAM_START_ADDRESS + 1  # 3584 bytes

# @intent:constant レジスタとスタック。
REGISTER_COUNT = 16
FLAG_REGISTER = 0xF
STACK_DEPTH = 16
INSTRUCTION_SIZE = 2

# @intent:constant モノクロ画面のサイズ (ピクセル)。
DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

KEY_COUNT = 16

# @intent:constant タイマーは命令実行速度とは独立に 60Hz で減算される。
TIMER_HZ = 60
DEFAULT_CYCLE_DELAY_MS = 10

# @intent:constant 0-F の16進数字グリフ (各 5 バイト, 4x5 ピクセル)。
FONT_SET: Tuple[int, ...] = (
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
)
