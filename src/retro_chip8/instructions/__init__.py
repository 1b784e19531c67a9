"""
CHIP-8 命令セット実装パッケージ。
"""
from retro_chip8.common.errors import UnimplementedOpcode
from retro_chip8.core.state import Chip8State
from .base import InstructionKind, Operation, Peripherals
from .maps import EXECUTE_MAP, lookup_kind

# @intent:responsibility 16bitオペコードをデコードし、Operationオブジェクトを返します。
# @intent:post-condition 未知のパターンの場合は UnimplementedOpcode を送出します。
def decode_opcode(opcode: int, pc: int) -> Operation:
    kind = lookup_kind(opcode)
    if kind is None:
        raise UnimplementedOpcode(opcode, pc)
    return Operation(kind=kind, opcode=opcode, address=pc)

# @intent:responsibility デコードされた命令を実行し、CPUの状態を変更します。
def execute_instruction(operation: Operation, state: Chip8State, peripherals: Peripherals) -> None:
    EXECUTE_MAP[operation.kind](state, peripherals, operation)
