# retro_chip8/instructions/load.py
"""
インデックスレジスタ、タイマー、メモリ転送命令の実装。
"""
from retro_chip8.common.constants import FONT_GLYPH_SIZE, FONT_START_ADDRESS
from retro_chip8.core.state import Chip8State
from retro_chip8.instructions.base import Operation, Peripherals

# --- LD I, addr ---
def execute_ld_i(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    state.i = op.nnn

# --- ADD I, Vx ---
# @intent:responsibility FX1E: I に Vx を加算します (16bit, フラグ変化なし)。
def execute_add_i(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    state.i = (state.i + state.v[op.x]) & 0xFFFF

# --- Timers ---
def execute_ld_vx_dt(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    state.v[op.x] = ctx.timers.get_delay()

def execute_ld_dt_vx(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    ctx.timers.set_delay(state.v[op.x])

def execute_ld_st_vx(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    ctx.timers.set_sound(state.v[op.x])

# --- LD F, Vx ---
# @intent:responsibility FX29: Vx の下位4bitに対応するフォントグリフのアドレスを I に設定します。
def execute_ld_f(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    state.i = FONT_START_ADDRESS + FONT_GLYPH_SIZE * (state.v[op.x] & 0xF)

# --- LD B, Vx ---
# @intent:responsibility FX33: Vx を3桁の BCD (百の位, 十の位, 一の位) に分解し I, I+1, I+2 に書き込みます。
def execute_ld_b(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    vx = state.v[op.x]
    ctx.memory.write_byte(state.i, vx // 100)
    ctx.memory.write_byte(state.i + 1, (vx // 10) % 10)
    ctx.memory.write_byte(state.i + 2, vx % 10)

# --- LD [I], Vx ---
# @intent:responsibility FX55: V0..Vx を I から始まるメモリにコピーします。I は変更しません。
def execute_store_regs(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    for n in range(op.x + 1):
        ctx.memory.write_byte(state.i + n, state.v[n])

# --- LD Vx, [I] ---
# @intent:responsibility FX65: I から始まるメモリを V0..Vx に読み込みます。I は変更しません。
def execute_load_regs(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    for n in range(op.x + 1):
        state.v[n] = ctx.memory.read_byte(state.i + n)
