# tests/arch/chip8/test_instructions_alu.py
"""
CHIP-8の算術・論理命令(7XKK, 8XYn, FX1E, CXKK)の実行を検証します。
"""
import unittest

from chip8_tracer.transport.memory import Memory
from chip8_tracer.arch.chip8.cpu import Chip8Cpu

class FixedRandom:
    def __init__(self, value):
        self.value = value

    def randrange(self, stop):
        return self.value

class TestChip8AluInstructions(unittest.TestCase):
    def setUp(self):
        self.memory = Memory()
        self.cpu = Chip8Cpu(self.memory, rng=FixedRandom(0xB7))
        self.regs = self.cpu.registers

    def _execute(self, *instructions):
        pc = self.regs.pc
        for n, instruction in enumerate(instructions):
            self.memory.load(pc + 2 * n, bytes([instruction >> 8, instruction & 0xFF]))
        for _ in instructions:
            self.cpu.step()

    def test_add_byte_wraps_without_flag(self):
        self.regs.write_reg(0xF, 0x07)
        # LD V0, #FF ; ADD V0, #02
        self._execute(0x60FF, 0x7002)
        self.assertEqual(self.regs.read_reg(0), 0x01)
        self.assertEqual(self.regs.read_reg(0xF), 0x07) # VF unchanged

    def test_or_and_xor(self):
        self.regs.write_reg(1, 0b1100)
        self.regs.write_reg(2, 0b1010)
        self._execute(0x8121)
        self.assertEqual(self.regs.read_reg(1), 0b1110)

        self.regs.write_reg(1, 0b1100)
        self._execute(0x8122)
        self.assertEqual(self.regs.read_reg(1), 0b1000)

        self.regs.write_reg(1, 0b1100)
        self._execute(0x8123)
        self.assertEqual(self.regs.read_reg(1), 0b0110) # XOR, not subtraction

    def test_add_reg_carry(self):
        self.regs.write_reg(0, 0xFF)
        self.regs.write_reg(1, 0x02)
        self._execute(0x8014)
        self.assertEqual(self.regs.read_reg(0), 0x01)
        self.assertEqual(self.regs.read_reg(0xF), 1)

    def test_add_reg_no_carry(self):
        self.regs.write_reg(0, 0x01)
        self.regs.write_reg(1, 0x01)
        self.regs.write_reg(0xF, 1)
        self._execute(0x8014)
        self.assertEqual(self.regs.read_reg(0), 0x02)
        self.assertEqual(self.regs.read_reg(0xF), 0)

    def test_sub_borrow(self):
        self.regs.write_reg(0, 0x05)
        self.regs.write_reg(1, 0x0A)
        self._execute(0x8015)
        self.assertEqual(self.regs.read_reg(0), 0xFB)
        self.assertEqual(self.regs.read_reg(0xF), 0)

    def test_sub_no_borrow(self):
        self.regs.write_reg(0, 0x0A)
        self.regs.write_reg(1, 0x05)
        self._execute(0x8015)
        self.assertEqual(self.regs.read_reg(0), 0x05)
        self.assertEqual(self.regs.read_reg(0xF), 1)

    def test_subn(self):
        self.regs.write_reg(0, 0x05)
        self.regs.write_reg(1, 0x0A)
        self._execute(0x8017)
        self.assertEqual(self.regs.read_reg(0), 0x05)
        self.assertEqual(self.regs.read_reg(0xF), 1)

        self.regs.write_reg(0, 0x0A)
        self.regs.write_reg(1, 0x05)
        self._execute(0x8017)
        self.assertEqual(self.regs.read_reg(0), 0xFB)
        self.assertEqual(self.regs.read_reg(0xF), 0)

    def test_shr(self):
        self.regs.write_reg(3, 0b00000101)
        self._execute(0x8306)
        self.assertEqual(self.regs.read_reg(3), 0b00000010)
        self.assertEqual(self.regs.read_reg(0xF), 1)

    def test_shl(self):
        self.regs.write_reg(3, 0b10000001)
        self._execute(0x830E)
        self.assertEqual(self.regs.read_reg(3), 0b00000010)
        self.assertEqual(self.regs.read_reg(0xF), 1)

        self._execute(0x830E)
        self.assertEqual(self.regs.read_reg(3), 0b00000100)
        self.assertEqual(self.regs.read_reg(0xF), 0)

    def test_flag_wins_when_destination_is_vf(self):
        self.regs.write_reg(0xF, 0xFF)
        self.regs.write_reg(1, 0x02)
        # ADD VF, V1 -> 0x101: 結果0x01の後にフラグ1が書かれる
        self._execute(0x8F14)
        self.assertEqual(self.regs.read_reg(0xF), 1)

    def test_add_i(self):
        self.regs.i = 0x300
        self.regs.write_reg(4, 0x20)
        self.regs.write_reg(0xF, 0x09)
        self._execute(0xF41E)
        self.assertEqual(self.regs.i, 0x320)
        self.assertEqual(self.regs.read_reg(0xF), 0x09)

    def test_rnd_masks_random_byte(self):
        # RND V2, #0F with random 0xB7
        self._execute(0xC20F)
        self.assertEqual(self.regs.read_reg(2), 0x07)

if __name__ == '__main__':
    unittest.main()
