# retro_chip8/instructions/display.py
"""
画面命令 (00E0, DXYN) の実装。
"""
from retro_chip8.common.constants import FLAG_REGISTER
from retro_chip8.core.state import Chip8State
from retro_chip8.instructions.base import Operation, Peripherals

# --- CLS ---
def execute_cls(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    ctx.display.clear()

# --- DRW Vx, Vy, n ---
# @intent:responsibility DXYN: I から N バイトのスプライトを (Vx, Vy) に XOR 描画し、衝突を VF に格納します。
def execute_drw(state: Chip8State, ctx: Peripherals, op: Operation) -> None:
    sprite = [ctx.memory.read_byte(state.i + row) for row in range(op.n)]
    collision = ctx.display.draw_sprite(state.v[op.x], state.v[op.y], sprite, wrap=ctx.sprite_wrap)
    state.v[FLAG_REGISTER] = 1 if collision else 0
