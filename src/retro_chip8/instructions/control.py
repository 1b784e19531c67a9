# retro_chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ、キー入力待ち）の実装。

実行時点で state.pc は既に次の命令 (フェッチアドレス + 2) を指しています。
スキップ命令は条件成立時にさらに 2 を加えます。
"""
from retro_chip8.common.constants import INSTRUCTION_SIZE
from retro_chip8.core.state import Chip8State, ExecutionMode
from retro_chip8.instructions.base import Operation, Peripherals

# @intent:utility_function 次の命令を読み飛ばします。
def _skip(state: Chip8State) -> None:
    state.pc += INSTRUCTION_SIZE

# --- RET ---
# @intent:responsibility 00EE: スタックから戻りアドレスをポップしてPCに設定します。
def execute_ret(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    state.pc = state.pop(op.address)

# --- JP addr ---
def execute_jp(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    state.pc = op.nnn

# --- CALL addr ---
# @intent:responsibility 2NNN: 戻りアドレス (CALLの次の命令) をプッシュしてからジャンプします。
def execute_call(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    state.push(state.pc, op.address)
    state.pc = op.nnn

# --- JP V0, addr ---
# @intent:responsibility BNNN: NNN + V0 にジャンプします。0xFFFを超えた場合は次のフェッチでMemoryFaultになります。
def execute_jp_v0(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    state.pc = op.nnn + state.v[0]

# --- SE / SNE ---
def execute_se_byte(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    if state.v[op.x] == op.nn:
        _skip(state)

def execute_sne_byte(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    if state.v[op.x] != op.nn:
        _skip(state)

def execute_se_reg(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    if state.v[op.x] == state.v[op.y]:
        _skip(state)

def execute_sne_reg(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    if state.v[op.x] != state.v[op.y]:
        _skip(state)

# --- SKP / SKNP ---
# @intent:responsibility EX9E: Vx の下位4bitが示すキーが押されていればスキップします。
def execute_skp(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    if ctx.keypad.is_pressed(state.v[op.x] & 0xF):
        _skip(state)

def execute_sknp(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    if not ctx.keypad.is_pressed(state.v[op.x] & 0xF):
        _skip(state)

# --- LD Vx, K ---
# @intent:responsibility FX0A: キー入力待ち状態に入ります。
# @intent:rationale PCは既に次の命令を指しているため、キーが押された後はそのまま実行が再開されます。
#                  待機中に押されていたキーは無視し、この命令以降の新しい押下のみを受け付けます。
def execute_ld_vx_k(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    ctx.keypad.clear_press_events()
    state.mode = ExecutionMode.WAITING_FOR_KEY
    state.wait_register = op.x
