# tests/loader/test_rom_loader.py
"""
retro_chip8.loader.loaderモジュールの単体テスト。
"""
import logging

import pytest

from retro_chip8.common.errors import RomLoadError, RomTooLarge
from retro_chip8.loader.loader import RomLoader


class TestRomLoader:
    def test_load_file(self, tmp_path):
        rom = tmp_path / "test.ch8"
        rom.write_bytes(b"\x00\xE0\x12\x00")
        assert RomLoader().load_file(str(rom)) == b"\x00\xE0\x12\x00"

    def test_missing_file(self, tmp_path):
        with pytest.raises(RomLoadError, match="not found"):
            RomLoader().load_file(str(tmp_path / "missing.ch8"))

    def test_directory_is_not_a_rom(self, tmp_path):
        with pytest.raises(RomLoadError):
            RomLoader().load_file(str(tmp_path))

    # @intent:test_case_size 3584バイトは許容され、3585バイトは拒否されることを検証します。
    def test_size_limit(self, tmp_path):
        ok = tmp_path / "max.ch8"
        ok.write_bytes(bytes(3584))
        assert len(RomLoader().load_file(str(ok))) == 3584

        too_big = tmp_path / "big.ch8"
        too_big.write_bytes(bytes(3585))
        with pytest.raises(RomTooLarge):
            RomLoader().load_file(str(too_big))

    def test_empty_rom_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="retro_chip8.loader.loader"):
            RomLoader().validate(b"")
        assert "empty" in caplog.text
