from typing import Optional, Tuple

from retro_chip8.common.errors import RomLoadError
from retro_chip8.core.cpu import Chip8Cpu
from retro_chip8.driver.scheduler import CycleScheduler
from retro_chip8.loader.loader import RomLoader
from .models import EmulatorConfig

# @intent:responsibility 設定（Config）に基づいて、CPUと周辺機器、スケジューラを生成し、ROMをロードします。
class SystemBuilder:
    def __init__(self, rom_loader: Optional[RomLoader] = None):
        self._rom_loader = rom_loader if rom_loader is not None else RomLoader()

    def build_system(self, config: EmulatorConfig, rom: Optional[bytes] = None) -> Tuple[Chip8Cpu, CycleScheduler]:
        """
        rom が与えられない場合は config.rom_path から読み込みます。
        ROMの読み込みに失敗した場合、命令は1つも実行されずに RomLoadError が送出されます。
        """
        if rom is None:
            if not config.rom_path:
                raise RomLoadError("No ROM path given.")
            rom = self._rom_loader.load_file(config.rom_path)
        else:
            self._rom_loader.validate(rom)

        cpu = Chip8Cpu(sprite_wrap=config.sprite_wrap)
        cpu.load_rom(rom)
        scheduler = CycleScheduler(cycle_delay_ms=config.cycle_delay_ms, timer_hz=config.timer_hz)
        return cpu, scheduler
