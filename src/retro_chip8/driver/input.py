# retro_chip8/driver/input.py
"""
ホストのキー入力を CHIP-8 キーパッドへ橋渡しする入力コラボレータ。
"""
from typing import Optional

from retro_chip8.common.types import KeyMap
from retro_chip8.peripherals.keypad import Keypad

# @intent:responsibility ホストのキー文字列をキーコードに変換し、Keypad.set_key を呼び出します。
class KeyMapper:
    def __init__(self, keypad: Keypad, key_map: KeyMap):
        self._keypad = keypad
        self._key_map = {k.lower(): v for k, v in key_map.items()}

    def code_for(self, key_text: str) -> Optional[int]:
        if not key_text:
            return None
        return self._key_map.get(key_text.lower())

    # @intent:responsibility キーの押下/解放を反映します。
    # @intent:return マッピングされたキーであればTrue。
    def handle(self, key_text: str, pressed: bool) -> bool:
        code = self.code_for(key_text)
        if code is None:
            return False
        self._keypad.set_key(code, pressed)
        return True
