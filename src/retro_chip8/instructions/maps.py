# retro_chip8/instructions/maps.py
"""
オペコードパターンと命令実装のマッピング定義。
"""
from typing import Callable, Dict, List, Optional, Tuple

from retro_chip8.core.state import Chip8State
from retro_chip8.instructions.base import InstructionKind, Operation, Peripherals
from . import alu
from . import control
from . import display
from . import load

Executor = Callable[[Chip8State, Peripherals, Operation], None]

# @intent:map (mask, pattern, kind) の表。opcode & mask == pattern となる最初の行が採用されます。
# @intent:rationale 上位ニブルだけで決まらない 0, 8, E, F 系は下位ニブル/下位バイトもマスクに含めます。
DECODE_TABLE: List[Tuple[int, int, InstructionKind]] = [
    (0xFFFF, 0x00E0, InstructionKind.CLS),
    (0xFFFF, 0x00EE, InstructionKind.RET),
    (0xF000, 0x1000, InstructionKind.JP),
    (0xF000, 0x2000, InstructionKind.CALL),
    (0xF000, 0x3000, InstructionKind.SE_BYTE),
    (0xF000, 0x4000, InstructionKind.SNE_BYTE),
    (0xF00F, 0x5000, InstructionKind.SE_REG),
    (0xF000, 0x6000, InstructionKind.LD_BYTE),
    (0xF000, 0x7000, InstructionKind.ADD_BYTE),
    (0xF00F, 0x8000, InstructionKind.LD_REG),
    (0xF00F, 0x8001, InstructionKind.OR),
    (0xF00F, 0x8002, InstructionKind.AND),
    (0xF00F, 0x8003, InstructionKind.XOR),
    (0xF00F, 0x8004, InstructionKind.ADD_REG),
    (0xF00F, 0x8005, InstructionKind.SUB),
    (0xF00F, 0x8006, InstructionKind.SHR),
    (0xF00F, 0x8007, InstructionKind.SUBN),
    (0xF00F, 0x800E, InstructionKind.SHL),
    (0xF00F, 0x9000, InstructionKind.SNE_REG),
    (0xF000, 0xA000, InstructionKind.LD_I),
    (0xF000, 0xB000, InstructionKind.JP_V0),
    (0xF000, 0xC000, InstructionKind.RND),
    (0xF000, 0xD000, InstructionKind.DRW),
    (0xF0FF, 0xE09E, InstructionKind.SKP),
    (0xF0FF, 0xE0A1, InstructionKind.SKNP),
    (0xF0FF, 0xF007, InstructionKind.LD_VX_DT),
    (0xF0FF, 0xF00A, InstructionKind.LD_VX_K),
    (0xF0FF, 0xF015, InstructionKind.LD_DT_VX),
    (0xF0FF, 0xF018, InstructionKind.LD_ST_VX),
    (0xF0FF, 0xF01E, InstructionKind.ADD_I),
    (0xF0FF, 0xF029, InstructionKind.LD_F),
    (0xF0FF, 0xF033, InstructionKind.LD_B),
    (0xF0FF, 0xF055, InstructionKind.STORE_REGS),
    (0xF0FF, 0xF065, InstructionKind.LOAD_REGS),
]

# @intent:map 命令バリアントから実行関数へのマッピングテーブル。
EXECUTE_MAP: Dict[InstructionKind, Executor] = {
    # Display
    InstructionKind.CLS: display.execute_cls,
    InstructionKind.DRW: display.execute_drw,

    # Control
    InstructionKind.RET: control.execute_ret,
    InstructionKind.JP: control.execute_jp,
    InstructionKind.CALL: control.execute_call,
    InstructionKind.SE_BYTE: control.execute_se_byte,
    InstructionKind.SNE_BYTE: control.execute_sne_byte,
    InstructionKind.SE_REG: control.execute_se_reg,
    InstructionKind.SNE_REG: control.execute_sne_reg,
    InstructionKind.JP_V0: control.execute_jp_v0,
    InstructionKind.SKP: control.execute_skp,
    InstructionKind.SKNP: control.execute_sknp,
    InstructionKind.LD_VX_K: control.execute_ld_vx_k,

    # ALU
    InstructionKind.LD_BYTE: alu.execute_ld_byte,
    InstructionKind.ADD_BYTE: alu.execute_add_byte,
    InstructionKind.LD_REG: alu.execute_ld_reg,
    InstructionKind.OR: alu.execute_or,
    InstructionKind.AND: alu.execute_and,
    InstructionKind.XOR: alu.execute_xor,
    InstructionKind.ADD_REG: alu.execute_add_reg,
    InstructionKind.SUB: alu.execute_sub,
    InstructionKind.SHR: alu.execute_shr,
    InstructionKind.SUBN: alu.execute_subn,
    InstructionKind.SHL: alu.execute_shl,
    InstructionKind.RND: alu.execute_rnd,

    # Index / Timer / Memory
    InstructionKind.LD_I: load.execute_ld_i,
    InstructionKind.ADD_I: load.execute_add_i,
    InstructionKind.LD_VX_DT: load.execute_ld_vx_dt,
    InstructionKind.LD_DT_VX: load.execute_ld_dt_vx,
    InstructionKind.LD_ST_VX: load.execute_ld_st_vx,
    InstructionKind.LD_F: load.execute_ld_f,
    InstructionKind.LD_B: load.execute_ld_b,
    InstructionKind.STORE_REGS: load.execute_store_regs,
    InstructionKind.LOAD_REGS: load.execute_load_regs,
}

_unmapped = set(InstructionKind) - set(EXECUTE_MAP)
if _unmapped:
    raise RuntimeError(f"Instruction kinds without executor: {sorted(k.name for k in _unmapped)}")

# @intent:responsibility オペコードに対応する命令バリアントを検索します。該当しなければNone。
def lookup_kind(opcode: int) -> Optional[InstructionKind]:
    for mask, pattern, kind in DECODE_TABLE:
        if opcode & mask == pattern:
            return kind
    return None
