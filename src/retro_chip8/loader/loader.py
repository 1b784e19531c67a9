# retro_chip8/loader/loader.py
"""
ROMローダーモジュール。
ヘッダを持たない生のCHIP-8バイナリをファイルから読み込みます。
"""
import logging
import os

from retro_chip8.common.constants import MAX_ROM_SIZE
from retro_chip8.common.errors import RomLoadError, RomTooLarge

logger = logging.getLogger(__name__)

class RomLoader:
    """
    ROMファイルを読み込み、0x200-0xFFF に収まることを検証するローダー。
    メモリへの書き込みは Chip8Cpu.load_rom が行います。
    """
    def __init__(self, capacity: int = MAX_ROM_SIZE):
        self._capacity = capacity

    # @intent:responsibility ROMファイルを読み込み、バイト列として返します。
    # @intent:post-condition 読み込めない場合は RomLoadError、大きすぎる場合は RomTooLarge を送出します。
    def load_file(self, file_path: str) -> bytes:
        if not os.path.isfile(file_path):
            raise RomLoadError(f"ROM file not found: {file_path}")
        try:
            with open(file_path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise RomLoadError(f"Cannot read ROM file {file_path}: {e}") from e

        self.validate(data)
        logger.info("Read %d bytes from %s", len(data), file_path)
        return data

    def validate(self, data: bytes) -> None:
        if len(data) > self._capacity:
            raise RomTooLarge(len(data), self._capacity)
        if not data:
            logger.warning("ROM is empty; execution will start on zeroed memory.")
