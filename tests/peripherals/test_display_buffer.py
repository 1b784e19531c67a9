# tests/peripherals/test_display_buffer.py
"""
retro_chip8.peripherals.displayモジュールの単体テスト。
"""
import pytest

from retro_chip8.peripherals.display import DisplayBuffer


class TestDisplayBuffer:
    def test_initial_state(self):
        display = DisplayBuffer()
        assert display.width == 64
        assert display.height == 32
        assert display.lit_pixel_count() == 0
        assert display.dirty

    # @intent:test_case_draw スプライトの各ビットがMSBを左端として描画されることを検証します。
    def test_draw_sprite_bit_order(self):
        display = DisplayBuffer()
        collision = display.draw_sprite(0, 0, [0b10000001])
        assert collision is False
        assert display.pixel(0, 0)
        assert not display.pixel(1, 0)
        assert display.pixel(7, 0)
        assert display.lit_pixel_count() == 2

    # @intent:test_case_xor 同じスプライトを2回描くと元に戻り、2回目は衝突を報告することを検証します。
    def test_draw_twice_restores_and_reports_collision(self):
        display = DisplayBuffer()
        glyph = [0xF0, 0x90, 0x90, 0x90, 0xF0]
        before = display.snapshot()
        assert display.draw_sprite(10, 5, glyph) is False
        assert display.draw_sprite(10, 5, glyph) is True
        assert display.snapshot() == before

    def test_partial_overlap_collision(self):
        display = DisplayBuffer()
        display.draw_sprite(0, 0, [0x80])
        assert display.draw_sprite(0, 0, [0x40]) is False
        assert display.draw_sprite(0, 0, [0xC0]) is True
        assert display.lit_pixel_count() == 0

    # @intent:test_case_wrap 画面端を越えた部分が反対側に回り込むことを検証します。
    def test_draw_wraps_around_edges(self):
        display = DisplayBuffer()
        display.draw_sprite(60, 31, [0xFF, 0xFF])
        assert display.pixel(63, 31)
        assert display.pixel(0, 31)
        assert display.pixel(3, 31)
        assert display.pixel(60, 0)
        assert display.pixel(3, 0)
        assert display.lit_pixel_count() == 16

    def test_origin_is_taken_modulo_screen_size(self):
        display = DisplayBuffer()
        display.draw_sprite(64 + 2, 32 + 1, [0x80])
        assert display.pixel(2, 1)

    def test_draw_clips_when_wrap_disabled(self):
        display = DisplayBuffer()
        display.draw_sprite(60, 31, [0xFF, 0xFF], wrap=False)
        assert display.lit_pixel_count() == 4
        assert display.pixel(63, 31)
        assert not display.pixel(0, 31)
        assert not display.pixel(60, 0)

    def test_clear_and_dirty_flag(self):
        display = DisplayBuffer()
        display.mark_clean()
        display.draw_sprite(0, 0, [0xFF])
        assert display.dirty
        display.mark_clean()
        display.clear()
        assert display.dirty
        assert display.lit_pixel_count() == 0

    def test_snapshot_is_immutable_copy(self):
        display = DisplayBuffer()
        frame = display.snapshot()
        display.draw_sprite(0, 0, [0x80])
        assert frame[0][0] is False
        assert display.snapshot()[0][0] is True
        assert len(frame) == 32 and len(frame[0]) == 64
        with pytest.raises(TypeError):
            frame[0][0] = True
