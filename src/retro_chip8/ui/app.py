# retro_chip8/ui/app.py
"""
アプリケーションのエントリポイント。
コマンドライン引数と設定ファイルから構成を決定し、インタプリタを組み立ててウィンドウを起動します。

終了コード:
    0  ウィンドウを閉じて正常終了 (--disassemble も含む)
    1  インタプリタのフォルト
    2  ROM/設定の読み込み失敗、または引数エラー
"""
import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from retro_chip8.common.constants import DEFAULT_CYCLE_DELAY_MS, PROGRAM_START_ADDRESS
from retro_chip8.common.errors import Chip8Error, ConfigError, CpuFault, RomLoadError
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.config.loader import LOG_LEVELS, ConfigLoader
from retro_chip8.config.models import EmulatorConfig
from retro_chip8.driver.interfaces import AudioSink, NullAudioSink
from retro_chip8.loader.loader import RomLoader
from .main_window import Chip8Window

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAULT = 1
EXIT_LOAD_ERROR = 2

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 interpreter")
    parser.add_argument("--rom-path", help="path to a raw CHIP-8 ROM image")
    parser.add_argument("--cycle-delay", type=float, default=None, metavar="MS",
                        help=f"delay between instructions in milliseconds (default {DEFAULT_CYCLE_DELAY_MS})")
    parser.add_argument("--config", metavar="FILE", help="YAML configuration file")
    parser.add_argument("--scale", type=int, default=None, help="window pixels per CHIP-8 pixel")
    parser.add_argument("--no-sound", action="store_true", help="disable the beeper")
    parser.add_argument("--clip-sprites", action="store_true",
                        help="clip sprites at the screen edge instead of wrapping")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None)
    parser.add_argument("--disassemble", action="store_true",
                        help="print a listing of the ROM and exit")
    return parser

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_arg_parser().parse_args(argv)

# @intent:responsibility 設定ファイル (任意) を読み込み、コマンドライン引数で上書きした構成を返します。
# @intent:post-condition 設定値が不正な場合は ConfigError を送出します。
def load_config(args: argparse.Namespace) -> EmulatorConfig:
    loader = ConfigLoader()
    config = loader.load_from_file(args.config) if args.config else EmulatorConfig()

    if args.rom_path:
        config.rom_path = args.rom_path
    if args.cycle_delay is not None:
        if args.cycle_delay < 0:
            raise ConfigError(f"--cycle-delay must not be negative: {args.cycle_delay}")
        config.cycle_delay_ms = args.cycle_delay
    if args.scale is not None:
        if args.scale <= 0:
            raise ConfigError(f"--scale must be positive: {args.scale}")
        config.display.scale = args.scale
    if args.no_sound:
        config.sound.enabled = False
    if args.clip_sprites:
        config.sprite_wrap = False
    if args.log_level:
        config.log_level = args.log_level
    return config

def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )

# @intent:utility_function フォルトの種類と、分かる場合は PC とオペコードを含む診断文字列を作ります。
def format_fault(error: Chip8Error, pc: Optional[int] = None) -> str:
    kind = type(error).__name__
    if isinstance(error, CpuFault):
        detail = f"PC={error.pc:#05x}"
        if error.opcode is not None:
            detail += f" opcode={error.opcode:04X}"
        return f"{kind} ({detail}): {error}"
    if pc is not None:
        return f"{kind} (PC={pc:#05x}): {error}"
    return f"{kind}: {error}"

def _print_listing(rows) -> None:
    for address, hex_bytes, text in rows:
        print(f"{address:03X}  {hex_bytes:<5}  {text}")

def _create_audio(config: EmulatorConfig) -> AudioSink:
    if not config.sound.enabled:
        return NullAudioSink()
    # QtMultimedia は音を出す場合だけ読み込む
    from .audio import QtToneSink
    sink = QtToneSink(config.sound)
    if not sink.available:
        return NullAudioSink()
    return sink

# @intent:responsibility アプリケーションを起動し、終了コードを返します。
def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
    except ConfigError as e:
        print(f"error: {format_fault(e)}", file=sys.stderr)
        return EXIT_LOAD_ERROR

    configure_logging(config.log_level)
    logger.debug("Configuration: %s", config)
    if not config.rom_path:
        # argparse のエラー表示を使い、終了コード 2 で終わる
        parser.error("a ROM is required: pass --rom-path or set rom_path in the config file")

    try:
        rom = RomLoader().load_file(config.rom_path)
        cpu, scheduler = SystemBuilder().build_system(config, rom)
    except RomLoadError as e:
        print(f"error: {format_fault(e)}", file=sys.stderr)
        return EXIT_LOAD_ERROR

    if args.disassemble:
        _print_listing(cpu.disassemble(PROGRAM_START_ADDRESS, len(rom)))
        return EXIT_OK

    app = QApplication.instance() or QApplication(sys.argv[:1])
    window = Chip8Window(cpu, scheduler, config, audio=_create_audio(config))
    window.show()
    window.start()
    app.exec()

    if window.fault is not None:
        print(f"error: {format_fault(window.fault, cpu.fault_pc)}", file=sys.stderr)
        return EXIT_FAULT
    return EXIT_OK

if __name__ == '__main__':
    sys.exit(main())
