import unittest

from retro_chip8.core.cpu import Chip8Cpu
from retro_chip8.instructions import decode_opcode, execute_instruction
from retro_chip8.instructions.base import Peripherals


class TestChip8AluInstructions(unittest.TestCase):
    def setUp(self):
        self.cpu = Chip8Cpu(random_byte=lambda: 0xA5)
        self.state = self.cpu.get_state()

    def _execute(self, opcode):
        pc = self.state.pc
        self.cpu.memory.write_byte(pc, opcode >> 8)
        self.cpu.memory.write_byte(pc + 1, opcode & 0xFF)
        return self.cpu.step()

    def test_ld_byte(self):
        # LD V3, 0x42
        self._execute(0x6342)
        self.assertEqual(self.state.v[3], 0x42)
        self.assertEqual(self.state.pc, 0x202)

    def test_add_byte_wraps_without_flag(self):
        self.state.v[1] = 0xFF
        self.state.v[0xF] = 0x07
        # ADD V1, 0x02
        self._execute(0x7102)
        self.assertEqual(self.state.v[1], 0x01)
        self.assertEqual(self.state.v[0xF], 0x07)

    def test_ld_reg(self):
        self.state.v[2] = 0x99
        self._execute(0x8120)
        self.assertEqual(self.state.v[1], 0x99)

    def test_logic_ops_leave_vf(self):
        self.state.v[0xF] = 0x01
        self.state.v[1] = 0b1100
        self.state.v[2] = 0b1010
        self._execute(0x8121)  # OR
        self.assertEqual(self.state.v[1], 0b1110)
        self._execute(0x8122)  # AND
        self.assertEqual(self.state.v[1], 0b1010)
        self._execute(0x8123)  # XOR
        self.assertEqual(self.state.v[1], 0b0000)
        self.assertEqual(self.state.v[0xF], 0x01)

    def test_add_reg_carry(self):
        for a, b in [(0x00, 0x00), (0x7F, 0x80), (0x80, 0x80), (0xFF, 0xFF), (0xC8, 0x64)]:
            self.state.v[1] = a
            self.state.v[2] = b
            self._execute(0x8124)
            self.assertEqual(self.state.v[1], (a + b) % 256)
            self.assertEqual(self.state.v[0xF], 1 if a + b > 255 else 0)

    def test_sub_borrow(self):
        for a, b in [(0x10, 0x05), (0x05, 0x10), (0x20, 0x20), (0x00, 0xFF)]:
            self.state.v[1] = a
            self.state.v[2] = b
            self._execute(0x8125)
            self.assertEqual(self.state.v[1], (a - b) % 256)
            self.assertEqual(self.state.v[0xF], 1 if a >= b else 0)

    def _run_all_pairs(self, opcode, check):
        op = decode_opcode(opcode, 0x200)
        ctx = Peripherals(memory=self.cpu.memory, display=self.cpu.display, keypad=self.cpu.keypad,
                          timers=self.cpu.timers, random_byte=lambda: 0)
        v = self.state.v
        for a in range(256):
            for b in range(256):
                v[1] = a
                v[2] = b
                execute_instruction(op, self.state, ctx)
                if not check(a, b, v[1], v[0xF]):
                    self.fail(f"{op} failed for a={a:#04x} b={b:#04x}: result={v[1]:#04x} VF={v[0xF]}")

    def test_add_reg_all_pairs(self):
        self._run_all_pairs(0x8124, lambda a, b, res, vf: res == (a + b) % 256 and vf == (1 if a + b > 255 else 0))

    def test_sub_all_pairs(self):
        self._run_all_pairs(0x8125, lambda a, b, res, vf: res == (a - b) % 256 and vf == (1 if a >= b else 0))

    def test_subn_all_pairs(self):
        self._run_all_pairs(0x8127, lambda a, b, res, vf: res == (b - a) % 256 and vf == (1 if b >= a else 0))

    def test_subn(self):
        self.state.v[1] = 0x05
        self.state.v[2] = 0x10
        self._execute(0x8127)
        self.assertEqual(self.state.v[1], 0x0B)
        self.assertEqual(self.state.v[0xF], 1)

        self.state.v[1] = 0x10
        self.state.v[2] = 0x05
        self._execute(0x8127)
        self.assertEqual(self.state.v[1], 0xF5)
        self.assertEqual(self.state.v[0xF], 0)

    def test_shr_uses_vx_only(self):
        self.state.v[1] = 0b0000_0101
        self.state.v[2] = 0xFF
        self._execute(0x8126)
        self.assertEqual(self.state.v[1], 0b0000_0010)
        self.assertEqual(self.state.v[0xF], 1)
        self.assertEqual(self.state.v[2], 0xFF)

    def test_shl(self):
        self.state.v[1] = 0b1000_0001
        self._execute(0x812E)
        self.assertEqual(self.state.v[1], 0b0000_0010)
        self.assertEqual(self.state.v[0xF], 1)

        self.state.v[1] = 0b0100_0000
        self._execute(0x812E)
        self.assertEqual(self.state.v[1], 0b1000_0000)
        self.assertEqual(self.state.v[0xF], 0)

    def test_flag_wins_when_destination_is_vf(self):
        self.state.v[0xF] = 0xFF
        self.state.v[1] = 0x01
        # ADD VF, V1 -> 0x00 で桁あふれ。フラグ 1 が結果を上書きする
        self._execute(0x8F14)
        self.assertEqual(self.state.v[0xF], 1)

    def test_rnd_masks_random_byte(self):
        self._execute(0xC30F)
        self.assertEqual(self.state.v[3], 0xA5 & 0x0F)

    def test_rnd_default_source_is_deterministic(self):
        a = Chip8Cpu()
        b = Chip8Cpu()
        for cpu in (a, b):
            cpu.load_rom(bytes([0xC0, 0xFF, 0xC1, 0xFF]))
            cpu.step()
            cpu.step()
        self.assertEqual(a.get_state().v[:2], b.get_state().v[:2])
        self.assertEqual(a.get_state().v[0], 110)
