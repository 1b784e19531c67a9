# retro_chip8/common/errors.py
"""
エミュレータ全体で使用される例外の階層。

コア内部のフォルトは全て致命的であり、回復・リトライの経路は存在しません。
ホスト側 (ui.app) はこれらの型を見て終了コードと診断メッセージを決定します。
"""
from typing import Optional


class Chip8Error(Exception):
    """全てのエミュレータ例外の基底クラス。"""


# @intent:responsibility ROMファイルの読み込み失敗 (存在しない、読めない、大きすぎる) を表します。
class RomLoadError(Chip8Error):
    pass


class RomTooLarge(RomLoadError):
    def __init__(self, size: int, capacity: int):
        super().__init__(f"ROM is {size} bytes but only {capacity} bytes fit from 0x200 to 0xFFF.")
        self.size = size
        self.capacity = capacity


# @intent:responsibility 設定ファイルの値が不正であることを表します。
class ConfigError(Chip8Error, ValueError):
    pass


# @intent:responsibility 0x000-0xFFF の範囲外へのメモリアクセスを表します。
# @intent:rationale 旧来の RAM デバイスが IndexError を投げていた互換性のため IndexError も継承します。
class MemoryFault(Chip8Error, IndexError):
    def __init__(self, address: int):
        super().__init__(f"Memory access out of range at address {address:#06x}.")
        self.address = address


# @intent:responsibility 命令実行中に発生した致命的なフォルト。失敗した PC を保持します。
class CpuFault(Chip8Error):
    def __init__(self, message: str, pc: int, opcode: Optional[int] = None):
        super().__init__(message)
        self.pc = pc
        self.opcode = opcode


class InvalidOpcode(CpuFault):
    pass


class UnimplementedOpcode(InvalidOpcode):
    def __init__(self, opcode: int, pc: int):
        super().__init__(f"Unimplemented opcode {opcode:04X} at PC {pc:#05x}.", pc, opcode)


class StackOverflow(CpuFault):
    def __init__(self, pc: int, depth: int):
        super().__init__(f"Stack overflow at PC {pc:#05x}: call depth already {depth}.", pc)
        self.depth = depth


class StackUnderflow(CpuFault):
    def __init__(self, pc: int):
        super().__init__(f"Stack underflow at PC {pc:#05x}: return with empty stack.", pc)
