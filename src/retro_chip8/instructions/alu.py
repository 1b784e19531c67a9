# retro_chip8/instructions/alu.py
"""
算術論理演算命令 (6XNN, 7XNN, 8XYn, CXNN) の実装。

VF を変更する命令では、結果を書き込んだ後にフラグを書き込みます。
X=F の場合はフラグの値が残ります。
"""
from retro_chip8.common.constants import FLAG_REGISTER
from retro_chip8.core.state import Chip8State
from retro_chip8.instructions.base import Operation, Peripherals

# --- LD Vx, byte ---
# @intent:responsibility 6XNN: Vx に即値を格納します。
def execute_ld_byte(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    state.v[op.x] = op.nn

# --- ADD Vx, byte ---
# @intent:responsibility 7XNN: Vx に即値を加算します。桁あふれは切り捨て、VFは変更しません。
def execute_add_byte(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    state.v[op.x] = (state.v[op.x] + op.nn) & 0xFF

# --- LD Vx, Vy ---
def execute_ld_reg(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    state.v[op.x] = state.v[op.y]

# --- OR / AND / XOR ---
def execute_or(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    state.v[op.x] |= state.v[op.y]

def execute_and(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    state.v[op.x] &= state.v[op.y]

def execute_xor(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    state.v[op.x] ^= state.v[op.y]

# --- ADD Vx, Vy ---
# @intent:responsibility 8XY4: Vx = Vx + Vy。和が255を超えた場合 VF=1。
def execute_add_reg(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    res = state.v[op.x] + state.v[op.y]
    state.v[op.x] = res & 0xFF
    state.v[FLAG_REGISTER] = 1 if res > 0xFF else 0

# --- SUB Vx, Vy ---
# @intent:responsibility 8XY5: Vx = Vx - Vy。借りが発生しない (Vx >= Vy) 場合 VF=1。
def execute_sub(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    vx = state.v[op.x]
    vy = state.v[op.y]
    state.v[op.x] = (vx - vy) & 0xFF
    state.v[FLAG_REGISTER] = 1 if vx >= vy else 0

# --- SUBN Vx, Vy ---
# @intent:responsibility 8XY7: Vx = Vy - Vx。Vy >= Vx の場合 VF=1。
def execute_subn(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    vx = state.v[op.x]
    vy = state.v[op.y]
    state.v[op.x] = (vy - vx) & 0xFF
    state.v[FLAG_REGISTER] = 1 if vy >= vx else 0

# --- SHR Vx ---
# @intent:responsibility 8XY6: Vx を右に1ビットシフトし、シフト前のLSBを VF に格納します。Vy は使用しません。
def execute_shr(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    vx = state.v[op.x]
    state.v[op.x] = vx >> 1
    state.v[FLAG_REGISTER] = vx & 0x01

# --- SHL Vx ---
# @intent:responsibility 8XYE: Vx を左に1ビットシフトし、シフト前のMSBを VF に格納します。
def execute_shl(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    vx = state.v[op.x]
    state.v[op.x] = (vx << 1) & 0xFF
    state.v[FLAG_REGISTER] = (vx >> 7) & 0x01

# --- RND Vx, byte ---
# @intent:responsibility CXNN: 乱数バイトと即値の論理積を Vx に格納します。
def execute_rnd(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    state.v[op.x] = ctx.random_byte() & op.nn
