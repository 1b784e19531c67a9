# retro_chip8/peripherals/display.py
"""
64x32 モノクロ画面バッファ。

スプライトは XOR 合成で描画され、点灯していたピクセルが消灯した場合に
衝突 (collision) として報告されます。
"""
from typing import List, Sequence

from retro_chip8.common.constants import DISPLAY_HEIGHT, DISPLAY_WIDTH
from retro_chip8.common.types import Frame

# @intent:responsibility 画面のピクセル状態を保持し、クリアとスプライト描画のみで変更されることを保証します。
class DisplayBuffer:
    """
    64x32 のブール値グリッド。
    """
    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT):
        self._width = width
        self._height = height
        self._pixels: List[List[bool]] = [[False] * width for _ in range(height)]
        # @intent:rationale ホスト側は変更があったフレームだけを再描画します。
        self._dirty = True

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def dirty(self) -> bool:
        return self._dirty

    def mark_clean(self) -> None:
        self._dirty = False

    # @intent:responsibility 全てのピクセルを消灯します。
    def clear(self) -> None:
        for row in self._pixels:
            for x in range(self._width):
                row[x] = False
        self._dirty = True

    # @intent:responsibility スプライトを (x, y) に XOR 合成し、衝突の有無を返します。
    # @intent:pre-condition sprite の各要素は 8bit 値 (1行 = 8ピクセル, MSBが左端)。
    def draw_sprite(self, x: int, y: int, sprite: Sequence[int], wrap: bool = True) -> bool:
        """
        wrap=True の場合、画面端を越えた部分は反対側に回り込みます。
        wrap=False の場合、開始座標のみ画面内に折り返し、はみ出した部分は描画しません。
        """
        collision = False
        origin_x = x % self._width
        origin_y = y % self._height
        for row, bits in enumerate(sprite):
            py = origin_y + row
            if py >= self._height:
                if not wrap:
                    break
                py %= self._height
            line = self._pixels[py]
            for col in range(8):
                if not bits & (0x80 >> col):
                    continue
                px = origin_x + col
                if px >= self._width:
                    if not wrap:
                        break
                    px %= self._width
                if line[px]:
                    collision = True
                line[px] = not line[px]
        self._dirty = True
        return collision

    def pixel(self, x: int, y: int) -> bool:
        return self._pixels[y][x]

    # @intent:responsibility レンダラー向けに画面全体の読み取り専用コピーを返します。
    def snapshot(self) -> Frame:
        return tuple(tuple(row) for row in self._pixels)

    def lit_pixel_count(self) -> int:
        return sum(sum(row) for row in self._pixels)
