"""
共通の型定義を提供するモジュール。
複数のレイヤー (peripherals, driver, ui) で共有される型エイリアスを定義します。
"""
from typing import Dict, Tuple

# @intent:data_structure 画面全体の読み取り専用コピー。frame[y][x] が点灯状態を表す。
Frame = Tuple[Tuple[bool, ...], ...]

# @intent:data_structure ホスト側のキー文字列から CHIP-8 キーコード (0x0-0xF) への対応表。
KeyMap = Dict[str, int]

# @intent:data_structure 逆アセンブル結果の1行 (address, hex_bytes, mnemonic)。
ListingRow = Tuple[int, str, str]
