# retro_chip8/transport/memory.py
"""
Transport Layer (メモリ)

このモジュールは、CHIP-8 の 4KB フラットなアドレス空間を表現し、
全ての読み書きを境界チェックした上で記録する責務を負います。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

from retro_chip8.common.constants import (
    FONT_SET, FONT_START_ADDRESS, MAX_ROM_SIZE, MEMORY_SIZE, PROGRAM_START_ADDRESS,
)
from retro_chip8.common.errors import MemoryFault, RomTooLarge

# @intent:responsibility メモリアクセスを記録するためのタイプを定義します。
class MemoryAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 個々のメモリアクセス操作を記録します。
@dataclass(frozen=True)
class MemoryAccess:
    """
    メモリ上で行われた単一のアクセス（読み込みまたは書き込み）を記録するデータクラス。
    """
    address: int
    data: int  # 8bit value
    access_type: MemoryAccessType

# @intent:responsibility バイト単位でアドレス指定可能な 4KB のメモリ。
# @intent:rationale 全てのアクセスを記録し、Snapshotに含めることで実行の観測可能性を高めます。
class Memory:
    """
    CHIP-8 のメインメモリ (0x000-0xFFF)。
    フォントセットとROMはロード時に一度だけ書き込まれますが、
    実行中の書き込み (自己書き換えコード) も正当な操作として扱います。
    """
    def __init__(self, size: int = MEMORY_SIZE):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("Memory size must be a positive integer.")
        self._memory = bytearray(size)
        self._size = size
        self._activity_log: List[MemoryAccess] = []

    def get_size(self) -> int:
        return self._size

    # @intent:pre-condition アドレスは 0 以上 size 未満である必要があります。
    def _check_address(self, address: int) -> None:
        if not 0 <= address < self._size:
            raise MemoryFault(address)

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出し、ログに記録します。
    def read_byte(self, address: int) -> int:
        self._check_address(address)
        data = self._memory[address]
        self._activity_log.append(MemoryAccess(address, data, MemoryAccessType.READ))
        return data

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込み、ログに記録します。
    def write_byte(self, address: int, data: int) -> None:
        self._check_address(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data
        self._activity_log.append(MemoryAccess(address, data, MemoryAccessType.WRITE))

    # @intent:responsibility ビッグエンディアンで16bitワードを読み出します (命令フェッチ用)。
    def read_word(self, address: int) -> int:
        high = self.read_byte(address)
        low = self.read_byte(address + 1)
        return (high << 8) | low

    # @intent:responsibility ログを記録せずに読み出します。逆アセンブラやUIなどのインスペクタ用。
    def peek(self, address: int) -> int:
        self._check_address(address)
        return self._memory[address]

    def peek_range(self, start: int, length: int) -> bytes:
        if length < 0:
            raise ValueError("Length must not be negative.")
        if length:
            self._check_address(start)
            self._check_address(start + length - 1)
        return bytes(self._memory[start:start + length])

    def _load(self, start: int, data: Iterable[int]) -> None:
        for offset, byte in enumerate(data):
            self._memory[start + offset] = byte

    # @intent:responsibility 組み込みフォント (80バイト) を 0x050 から書き込みます。
    def load_font_set(self) -> None:
        self._load(FONT_START_ADDRESS, FONT_SET)

    # @intent:responsibility ROMイメージを 0x200 から書き込みます。
    # @intent:pre-condition ROMは 0x200-0xFFF に収まる必要があり、超える場合は何も書き込みません。
    def load_rom(self, data: bytes) -> None:
        if len(data) > MAX_ROM_SIZE:
            raise RomTooLarge(len(data), MAX_ROM_SIZE)
        self._load(PROGRAM_START_ADDRESS, data)

    # @intent:responsibility 記録されたアクティビティログを取得し、クリアします。
    def get_and_clear_activity_log(self) -> List[MemoryAccess]:
        log = self._activity_log
        self._activity_log = []
        return log
