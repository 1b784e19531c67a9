# retro_chip8/peripherals/rng.py
"""
CXNN 用の決定的な乱数源。
"""

# @intent:responsibility 16bit フィボナッチLFSR。同じROMを同じ入力で実行すれば同じ結果になります。
class Lfsr:
    """
    タップ位置 0, 2, 3, 5 の16bit LFSR。
    """
    DEFAULT_SEED = 0x1234

    def __init__(self, seed: int = DEFAULT_SEED):
        if not 0 < seed <= 0xFFFF:
            raise ValueError("LFSR seed must be a non-zero 16-bit value.")
        self._state = seed

    @property
    def state(self) -> int:
        return self._state

    def next_bit(self) -> int:
        s = self._state
        bit = (s ^ (s >> 2) ^ (s >> 3) ^ (s >> 5)) & 1
        self._state = (s >> 1) | (bit << 15)
        return bit

    # @intent:responsibility 連続する8ビットをLSBから順に詰めて1バイトを生成します。
    def next_byte(self) -> int:
        value = 0
        for i in range(8):
            value |= self.next_bit() << i
        return value

    def __call__(self) -> int:
        return self.next_byte()
