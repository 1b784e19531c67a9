# retro_chip8/instructions/base.py
"""
命令実装用の共通定義。

デコード済み命令 (Operation) と、その閉じたバリアント集合 (InstructionKind)、
および命令の実行関数に渡される周辺機器の束 (Peripherals) を定義します。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Tuple

from retro_chip8.peripherals.display import DisplayBuffer
from retro_chip8.peripherals.keypad import Keypad
from retro_chip8.peripherals.timers import TimerSubsystem
from retro_chip8.transport.memory import Memory

# @intent:responsibility CHIP-8 命令のバリアントを列挙します。デコーダはこの集合の外の値を返しません。
class InstructionKind(Enum):
    CLS = "00E0"
    RET = "00EE"
    JP = "1NNN"
    CALL = "2NNN"
    SE_BYTE = "3XNN"
    SNE_BYTE = "4XNN"
    SE_REG = "5XY0"
    LD_BYTE = "6XNN"
    ADD_BYTE = "7XNN"
    LD_REG = "8XY0"
    OR = "8XY1"
    AND = "8XY2"
    XOR = "8XY3"
    ADD_REG = "8XY4"
    SUB = "8XY5"
    SHR = "8XY6"
    SUBN = "8XY7"
    SHL = "8XYE"
    SNE_REG = "9XY0"
    LD_I = "ANNN"
    JP_V0 = "BNNN"
    RND = "CXNN"
    DRW = "DXYN"
    SKP = "EX9E"
    SKNP = "EXA1"
    LD_VX_DT = "FX07"
    LD_VX_K = "FX0A"
    LD_DT_VX = "FX15"
    LD_ST_VX = "FX18"
    ADD_I = "FX1E"
    LD_F = "FX29"
    LD_B = "FX33"
    STORE_REGS = "FX55"
    LOAD_REGS = "FX65"

# @intent:map 逆アセンブル/トレース表示用のニーモニックとオペランド書式。
MNEMONICS: Dict[InstructionKind, Tuple[str, Tuple[str, ...]]] = {
    InstructionKind.CLS: ("CLS", ()),
    InstructionKind.RET: ("RET", ()),
    InstructionKind.JP: ("JP", ("0x{nnn:03X}",)),
    InstructionKind.CALL: ("CALL", ("0x{nnn:03X}",)),
    InstructionKind.SE_BYTE: ("SE", ("V{x:X}", "0x{nn:02X}")),
    InstructionKind.SNE_BYTE: ("SNE", ("V{x:X}", "0x{nn:02X}")),
    InstructionKind.SE_REG: ("SE", ("V{x:X}", "V{y:X}")),
    InstructionKind.LD_BYTE: ("LD", ("V{x:X}", "0x{nn:02X}")),
    InstructionKind.ADD_BYTE: ("ADD", ("V{x:X}", "0x{nn:02X}")),
    InstructionKind.LD_REG: ("LD", ("V{x:X}", "V{y:X}")),
    InstructionKind.OR: ("OR", ("V{x:X}", "V{y:X}")),
    InstructionKind.AND: ("AND", ("V{x:X}", "V{y:X}")),
    InstructionKind.XOR: ("XOR", ("V{x:X}", "V{y:X}")),
    InstructionKind.ADD_REG: ("ADD", ("V{x:X}", "V{y:X}")),
    InstructionKind.SUB: ("SUB", ("V{x:X}", "V{y:X}")),
    InstructionKind.SHR: ("SHR", ("V{x:X}",)),
    InstructionKind.SUBN: ("SUBN", ("V{x:X}", "V{y:X}")),
    InstructionKind.SHL: ("SHL", ("V{x:X}",)),
    InstructionKind.SNE_REG: ("SNE", ("V{x:X}", "V{y:X}")),
    InstructionKind.LD_I: ("LD", ("I", "0x{nnn:03X}")),
    InstructionKind.JP_V0: ("JP", ("V0", "0x{nnn:03X}")),
    InstructionKind.RND: ("RND", ("V{x:X}", "0x{nn:02X}")),
    InstructionKind.DRW: ("DRW", ("V{x:X}", "V{y:X}", "{n}")),
    InstructionKind.SKP: ("SKP", ("V{x:X}",)),
    InstructionKind.SKNP: ("SKNP", ("V{x:X}",)),
    InstructionKind.LD_VX_DT: ("LD", ("V{x:X}", "DT")),
    InstructionKind.LD_VX_K: ("LD", ("V{x:X}", "K")),
    InstructionKind.LD_DT_VX: ("LD", ("DT", "V{x:X}")),
    InstructionKind.LD_ST_VX: ("LD", ("ST", "V{x:X}")),
    InstructionKind.ADD_I: ("ADD", ("I", "V{x:X}")),
    InstructionKind.LD_F: ("LD", ("F", "V{x:X}")),
    InstructionKind.LD_B: ("LD", ("B", "V{x:X}")),
    InstructionKind.STORE_REGS: ("LD", ("[I]", "V{x:X}")),
    InstructionKind.LOAD_REGS: ("LD", ("V{x:X}", "[I]")),
}

# @intent:responsibility デコード済みの1命令。オペコードのニブルから各フィールドを取り出します。
@dataclass(frozen=True)
class Operation:
    """
    kind がバリアントを、opcode が元の16bitワードを表します。
    x, y, n, nn, nnn はオペコードから導出される読み取り専用のフィールドです。
    """
    kind: InstructionKind
    opcode: int
    address: int = 0  # フェッチしたアドレス
    length: int = 2

    @property
    def x(self) -> int:
        return (self.opcode >> 8) & 0xF

    @property
    def y(self) -> int:
        return (self.opcode >> 4) & 0xF

    @property
    def n(self) -> int:
        return self.opcode & 0xF

    @property
    def nn(self) -> int:
        return self.opcode & 0xFF

    @property
    def nnn(self) -> int:
        return self.opcode & 0xFFF

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    @property
    def mnemonic(self) -> str:
        return MNEMONICS[self.kind][0]

    @property
    def operands(self) -> List[str]:
        fields = dict(x=self.x, y=self.y, n=self.n, nn=self.nn, nnn=self.nnn)
        return [template.format(**fields) for template in MNEMONICS[self.kind][1]]

    def __str__(self) -> str:
        if self.operands:
            return f"{self.mnemonic} {', '.join(self.operands)}"
        return self.mnemonic

# @intent:responsibility 命令の実行関数に渡される、CPUが所有する周辺機器の束。
@dataclass
class Peripherals:
    memory: Memory
    display: DisplayBuffer
    keypad: Keypad
    timers: TimerSubsystem
    random_byte: Callable[[], int]
    sprite_wrap: bool = True
