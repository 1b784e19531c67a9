# retro_chip8/core/state.py
"""
Core Layer (CPU状態)

このモジュールは、CHIP-8 CPUのレジスタ群、コールスタック、および
実行モード (通常実行 / キー入力待ち / 停止) を保持するデータ構造を定義します。
"""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from retro_chip8.common.constants import PROGRAM_START_ADDRESS, REGISTER_COUNT, STACK_DEPTH
from retro_chip8.common.errors import StackOverflow, StackUnderflow

# @intent:responsibility CPUの実行モードを定義します。
# @intent:rationale FX0A (キー入力待ち) をスレッドを使わずに表現するための明示的な状態機械です。
class ExecutionMode(Enum):
    RUNNING = "RUNNING"
    WAITING_FOR_KEY = "WAITING_FOR_KEY"
    HALTED = "HALTED"

# @intent:responsibility CHIP-8 CPUの全てのレジスタとスタックの状態を保持します。
@dataclass
class Chip8State:
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。
    V0-VE は汎用、VF は ALU/描画命令のフラグとして使われます。
    """
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0x000      # Index Register
    pc: int = PROGRAM_START_ADDRESS  # Program Counter
    sp: int = 0         # Stack Pointer (スタック内のエントリ数)
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)
    mode: ExecutionMode = ExecutionMode.RUNNING
    wait_register: Optional[int] = None  # WAITING_FOR_KEY の格納先レジスタ

    # @intent:responsibility 戻りアドレスをスタックにプッシュします。
    # @intent:pre-condition スタックの深さが STACK_DEPTH 未満である必要があります。
    def push(self, address: int, fault_pc: int) -> None:
        if self.sp >= STACK_DEPTH:
            raise StackOverflow(fault_pc, self.sp)
        self.stack[self.sp] = address
        self.sp += 1

    # @intent:responsibility スタックから戻りアドレスをポップします。
    def pop(self, fault_pc: int) -> int:
        if self.sp == 0:
            raise StackUnderflow(fault_pc)
        self.sp -= 1
        return self.stack[self.sp]

    @property
    def is_waiting_for_key(self) -> bool:
        return self.mode is ExecutionMode.WAITING_FOR_KEY

    # @intent:responsibility リストを含めた独立したコピーを返します (Snapshot用)。
    def copy(self) -> 'Chip8State':
        return replace(self, v=list(self.v), stack=list(self.stack))
