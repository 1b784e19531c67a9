# tests/peripherals/test_keypad.py
"""
retro_chip8.peripherals.keypadモジュールの単体テスト。
"""
import pytest

from retro_chip8.peripherals.keypad import Keypad


class TestKeypad:
    def test_initially_released(self):
        keypad = Keypad()
        assert all(not keypad.is_pressed(code) for code in range(16))
        assert keypad.any_pressed() is None
        assert keypad.pop_press_event() is None

    def test_set_key(self):
        keypad = Keypad()
        keypad.set_key(0xA, True)
        assert keypad.is_pressed(0xA)
        keypad.set_key(0xA, False)
        assert not keypad.is_pressed(0xA)

    def test_invalid_code_raises_value_error(self):
        keypad = Keypad()
        with pytest.raises(ValueError):
            keypad.set_key(16, True)
        with pytest.raises(ValueError):
            keypad.is_pressed(-1)

    def test_any_pressed_returns_lowest_code(self):
        keypad = Keypad()
        keypad.set_key(0xE, True)
        keypad.set_key(0x3, True)
        assert keypad.any_pressed() == 0x3

    # @intent:test_case_event 押下イベントは up -> down の遷移でのみ記録されることを検証します。
    def test_press_events_only_on_transition(self):
        keypad = Keypad()
        keypad.set_key(0x5, True)
        keypad.set_key(0x5, True)
        keypad.set_key(0x7, True)
        assert keypad.pop_press_event() == 0x5
        assert keypad.pop_press_event() == 0x7
        assert keypad.pop_press_event() is None

    def test_clear_press_events_keeps_key_state(self):
        keypad = Keypad()
        keypad.set_key(0x1, True)
        keypad.clear_press_events()
        assert keypad.pop_press_event() is None
        assert keypad.is_pressed(0x1)

    def test_release_all(self):
        keypad = Keypad()
        keypad.set_key(0x1, True)
        keypad.release_all()
        assert keypad.any_pressed() is None
        assert keypad.pop_press_event() is None

    # @intent:test_case_bound 押下イベントの履歴は最新16件までに制限されることを検証します。
    def test_press_event_queue_is_bounded(self):
        keypad = Keypad()
        for n in range(10000):
            keypad.set_key(n % 16, True)
            keypad.set_key(n % 16, False)
        events = []
        while True:
            code = keypad.pop_press_event()
            if code is None:
                break
            events.append(code)
        assert events == list(range(16))
