# retro_chip8/core/cpu.py
"""
Core Layer (インタプリタ)

このモジュールは、CHIP-8 CPUの状態管理と命令サイクル (フェッチ→デコード→実行) の駆動を提供します。
具体的な命令の振る舞いは instructions パッケージに移譲されます。
"""
import logging
from typing import Callable, Dict, List, Optional

from retro_chip8.common.constants import PROGRAM_START_ADDRESS
from retro_chip8.common.errors import Chip8Error, CpuFault
from retro_chip8.common.types import ListingRow
from retro_chip8.core.snapshot import Metadata, Snapshot
from retro_chip8.core.state import Chip8State, ExecutionMode
from retro_chip8.instructions import decode_opcode, execute_instruction
from retro_chip8.instructions import disassembler
from retro_chip8.instructions.base import Operation, Peripherals
from retro_chip8.peripherals.display import DisplayBuffer
from retro_chip8.peripherals.keypad import Keypad
from retro_chip8.peripherals.rng import Lfsr
from retro_chip8.peripherals.timers import TimerSubsystem
from retro_chip8.transport.memory import Memory

logger = logging.getLogger(__name__)

# @intent:responsibility CHIP-8 インタプリタ。メモリ、画面、キーパッド、タイマーを排他的に所有します。
class Chip8Cpu:
    """
    CHIP-8 CPUをエミュレートするクラス。
    グローバルな可変状態は持たず、全ての周辺機器をフィールドとして保持します。
    """
    # @intent:responsibility CPUと周辺機器を初期化し、フォントセットをメモリに書き込みます。
    # @intent:pre-condition random_byte を渡す場合、0-255 を返す引数なしの callable である必要があります。
    def __init__(self, memory: Optional[Memory] = None, display: Optional[DisplayBuffer] = None,
                 keypad: Optional[Keypad] = None, timers: Optional[TimerSubsystem] = None,
                 random_byte: Optional[Callable[[], int]] = None, sprite_wrap: bool = True):
        self._memory = memory if memory is not None else Memory()
        self._display = display if display is not None else DisplayBuffer()
        self._keypad = keypad if keypad is not None else Keypad()
        self._timers = timers if timers is not None else TimerSubsystem()
        self._peripherals = Peripherals(
            memory=self._memory,
            display=self._display,
            keypad=self._keypad,
            timers=self._timers,
            random_byte=random_byte if random_byte is not None else Lfsr(),
            sprite_wrap=sprite_wrap,
        )
        self._memory.load_font_set()
        self._state: Chip8State = self._create_initial_state()
        self._instruction_count: int = 0
        self._fault: Optional[Chip8Error] = None
        self._fault_pc: Optional[int] = None
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    @property
    def memory(self) -> Memory:
        return self._memory

    @property
    def display(self) -> DisplayBuffer:
        return self._display

    @property
    def keypad(self) -> Keypad:
        return self._keypad

    @property
    def timers(self) -> TimerSubsystem:
        return self._timers

    @property
    def instruction_count(self) -> int:
        return self._instruction_count

    @property
    def is_waiting_for_key(self) -> bool:
        return self._state.mode is ExecutionMode.WAITING_FOR_KEY

    @property
    def is_halted(self) -> bool:
        return self._state.mode is ExecutionMode.HALTED

    @property
    def fault(self) -> Optional[Chip8Error]:
        return self._fault

    @property
    def fault_pc(self) -> Optional[int]:
        return self._fault_pc

    def _create_initial_state(self) -> Chip8State:
        return Chip8State(pc=PROGRAM_START_ADDRESS)

    # @intent:responsibility レジスタ、スタック、タイマー、画面を初期状態に戻します。メモリ内容は保持します。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._instruction_count = 0
        self._fault = None
        self._fault_pc = None
        self._timers.reset()
        self._display.clear()
        self._keypad.clear_press_events()

    # @intent:responsibility ROMイメージを 0x200 に書き込み、CPUをリセットします。
    # @intent:pre-condition ROMが大きすぎる場合は RomTooLarge を送出し、状態は変更しません。
    def load_rom(self, data: bytes) -> None:
        self._memory.load_rom(data)
        self._memory.get_and_clear_activity_log()
        self.reset()
        logger.info("Loaded %d byte ROM at %#05x", len(data), PROGRAM_START_ADDRESS)

    # @intent:responsibility 現在のCPUの状態を返します。
    def get_state(self) -> Chip8State:
        return self._state

    # @intent:responsibility PCの指す16bitワードをビッグエンディアンでフェッチします。
    def _fetch(self) -> int:
        return self._memory.read_word(self._state.pc)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode, self._state.pc)

    # @intent:responsibility 命令実行前にPCを命令長分進めます。分岐命令は実行時にPCを上書きします。
    def _update_pc(self, operation: Operation) -> None:
        self._state.pc += operation.length

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._peripherals)

    # @intent:responsibility キー入力待ち中の場合、新しい押下があれば格納先レジスタに書き込んで実行を再開します。
    # @intent:return 待機中であればこのサイクルのSnapshot、そうでなければNone。
    def _handle_key_wait(self, current_pc: int) -> Optional[Snapshot]:
        if self._state.mode is not ExecutionMode.WAITING_FOR_KEY:
            return None

        key = self._keypad.pop_press_event()
        if key is not None:
            self._state.v[self._state.wait_register] = key
            self._state.mode = ExecutionMode.RUNNING
            self._state.wait_register = None
            logger.debug("Key %X pressed, resuming at %#05x", key, current_pc)
        return self._create_snapshot(current_pc, None)

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodの流れ（ログクリア→キー待ち判定→フェッチ→デコード→PC更新→実行→Snapshot生成）を定義します。
    #                  フォルトが発生した場合はHALTED状態に遷移し、例外をそのまま送出します。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点でのCPUとメモリアクセスを含むSnapshotオブジェクトを返します。
        HALTED状態で呼ばれた場合は、停止の原因となったフォルトを再送出します。
        """
        if self._fault is not None:
            raise self._fault

        # 1. 前処理: 前サイクルまでの残存ログを破棄
        self._memory.get_and_clear_activity_log()
        initial_pc = self._state.pc

        try:
            # 2. キー入力待ち判定 (Hook)
            wait_snapshot = self._handle_key_wait(initial_pc)
            if wait_snapshot is not None:
                return wait_snapshot

            # 3-6. フェッチ → デコード → PC更新 → 実行
            opcode = self._fetch()
            operation = self._decode(opcode)
            self._update_pc(operation)
            self._execute(operation)
        except Chip8Error as e:
            self._halt(e, initial_pc)
            raise

        self._instruction_count += 1
        # 7. 後処理 & Snapshot生成
        return self._create_snapshot(initial_pc, operation)

    def _halt(self, error: Chip8Error, pc: int) -> None:
        self._fault = error
        self._fault_pc = pc
        self._state.mode = ExecutionMode.HALTED
        if isinstance(error, CpuFault):
            logger.error("%s: %s", type(error).__name__, error)
        else:
            logger.error("%s while executing instruction at %#05x: %s", type(error).__name__, pc, error)

    # @intent:responsibility 実行結果からSnapshotオブジェクトを生成する共通ロジック。
    def _create_snapshot(self, initial_pc: int, operation: Optional[Operation]) -> Snapshot:
        memory_activity = self._memory.get_and_clear_activity_log()

        if operation is None:
            trace = f"{initial_pc:#05x}: WAIT KEY"
        else:
            trace = f"{initial_pc:#05x}: {operation.opcode_hex} {operation}"
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(trace)

        return Snapshot(
            state=self._state.copy(),
            operation=operation,
            metadata=Metadata(instruction_count=self._instruction_count, pc=initial_pc, trace=trace),
            memory_activity=memory_activity,
        )

    # @intent:responsibility 現在のレジスタ値を辞書形式で返します (トレース/診断表示用)。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{n:X}": value for n, value in enumerate(s.v)}
        registers.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": self._timers.delay, "ST": self._timers.sound})
        return registers

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, start_addr: int, length: int) -> List[ListingRow]:
        return disassembler.disassemble(self._memory, start_addr, length)
