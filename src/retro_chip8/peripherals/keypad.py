# retro_chip8/peripherals/keypad.py
"""
16キーの入力状態。ホスト側の入力処理だけが書き込み、CPUは読み取りのみ行います。
"""
from collections import deque
from typing import Deque, List, Optional

from retro_chip8.common.constants import KEY_COUNT

# @intent:responsibility 各キーの押下状態と、押下遷移 (up -> down) の履歴を保持します。
class Keypad:
    def __init__(self):
        self._keys: List[bool] = [False] * KEY_COUNT
        # @intent:rationale FX0A は「新しく押されたキー」を待つため、押しっぱなしのキーとは区別します。
        #                  保持するのは最新の KEY_COUNT 件までで、古いイベントから破棄されます。
        self._press_events: Deque[int] = deque(maxlen=KEY_COUNT)

    def _check_code(self, code: int) -> None:
        if not 0 <= code < KEY_COUNT:
            raise ValueError(f"Key code {code} is outside 0x0-0xF.")

    # @intent:responsibility キーの状態を更新します。ホストの入力コラボレータ専用の変更操作です。
    def set_key(self, code: int, pressed: bool) -> None:
        self._check_code(code)
        if pressed and not self._keys[code]:
            self._press_events.append(code)
        self._keys[code] = pressed

    def is_pressed(self, code: int) -> bool:
        self._check_code(code)
        return self._keys[code]

    # @intent:responsibility 押されているキーのうち最も小さいコードを返します。無ければNone。
    def any_pressed(self) -> Optional[int]:
        for code, pressed in enumerate(self._keys):
            if pressed:
                return code
        return None

    def pop_press_event(self) -> Optional[int]:
        if self._press_events:
            return self._press_events.popleft()
        return None

    def clear_press_events(self) -> None:
        self._press_events.clear()

    def release_all(self) -> None:
        self._keys = [False] * KEY_COUNT
        self._press_events.clear()
