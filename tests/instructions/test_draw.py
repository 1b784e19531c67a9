import unittest

from retro_chip8.core.cpu import Chip8Cpu


class TestChip8DisplayInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu = Chip8Cpu()
        self.state = self.cpu.get_state()

    def _execute(self, opcode):
        pc = self.state.pc
        self.cpu.memory.write_byte(pc, opcode >> 8)
        self.cpu.memory.write_byte(pc + 1, opcode & 0xFF)
        return self.cpu.step()

    def test_draw_font_glyph(self):
        self.state.i = 0x050  # "0"
        self.state.v[0] = 2
        self.state.v[1] = 3
        self._execute(0xD015)
        display = self.cpu.display
        self.assertTrue(display.pixel(2, 3))
        self.assertTrue(display.pixel(5, 3))
        self.assertFalse(display.pixel(3, 4))
        self.assertEqual(display.lit_pixel_count(), 14)
        self.assertEqual(self.state.v[0xF], 0)

    def test_draw_twice_sets_collision_and_restores(self):
        self.state.i = 0x050
        self._execute(0xD005)
        self._execute(0xD005)
        self.assertEqual(self.state.v[0xF], 1)
        self.assertEqual(self.cpu.display.lit_pixel_count(), 0)

    def test_cls(self):
        self.state.i = 0x050
        self._execute(0xD005)
        self._execute(0x00E0)
        self.assertEqual(self.cpu.display.lit_pixel_count(), 0)
        self.assertEqual(self.state.pc, 0x204)

    def test_draw_zero_rows(self):
        self.state.v[0xF] = 1
        self._execute(0xD000)
        self.assertEqual(self.cpu.display.lit_pixel_count(), 0)
        self.assertEqual(self.state.v[0xF], 0)

    def test_clip_mode(self):
        cpu = Chip8Cpu(sprite_wrap=False)
        state = cpu.get_state()
        state.i = 0x300
        cpu.memory.write_byte(0x300, 0xFF)
        state.v[0] = 60
        cpu.memory.write_byte(0x200, 0xD0)
        cpu.memory.write_byte(0x201, 0x11)
        cpu.step()
        self.assertEqual(cpu.display.lit_pixel_count(), 4)
