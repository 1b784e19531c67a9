# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令サイクル実行後のCPU状態とメモリアクセスを記録した
不変のデータ構造を定義します。トレースログとテストでの状態記録に用います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from retro_chip8.core.state import Chip8State
from retro_chip8.instructions.base import Operation
from retro_chip8.transport.memory import MemoryAccess

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    """
    実行に関するメタデータ（累計命令数、実行前PC、トレース文字列）を記録するデータクラス。
    """
    instruction_count: int
    pc: int  # 命令をフェッチしたアドレス
    trace: Optional[str] = None  # 例: "0x200: 00E0 CLS"

# @intent:responsibility ある一時点におけるCPUとメモリアクセスの状態を不変に記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    operation は、キー入力待ちでこのサイクルに命令を実行しなかった場合 None です。
    """
    state: Chip8State
    operation: Optional[Operation]
    metadata: Metadata
    memory_activity: List[MemoryAccess] = field(default_factory=list)

    # @intent:rationale state は Chip8State.copy() で複製されたものを受け取り、
    #                  以降のCPUの実行によって書き換わらないことを保証します。
