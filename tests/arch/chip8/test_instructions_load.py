# tests/arch/chip8/test_instructions_load.py
"""
ロード/ストア命令の単体テスト。
"""
import pytest

from chip8_tracer.common.errors import AddressOutOfRange
from chip8_tracer.transport.memory import Memory
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.loader.loader import FontLoader

# @intent:test_suite レジスタ転送・タイマー・BCD・ブロック転送の振る舞いを検証します。

@pytest.fixture
def cpu():
    memory = Memory()
    FontLoader().load_font(None, memory)
    return Chip8Cpu(memory)

def run(cpu, *instructions):
    pc = cpu.registers.pc
    for n, instruction in enumerate(instructions):
        cpu.memory.load(pc + 2 * n, bytes([instruction >> 8, instruction & 0xFF]))
    for _ in instructions:
        cpu.step()

def test_ld_byte(cpu):
    run(cpu, 0x6A42)
    assert cpu.registers.read_reg(0xA) == 0x42
    assert cpu.registers.pc == 0x202

def test_ld_reg(cpu):
    cpu.registers.write_reg(2, 0x99)
    run(cpu, 0x8120)
    assert cpu.registers.read_reg(1) == 0x99

def test_ld_i(cpu):
    run(cpu, 0xA123)
    assert cpu.registers.i == 0x123

def test_timers_round_trip(cpu):
    cpu.registers.write_reg(3, 0x30)
    # LD DT, V3 ; LD ST, V3 ; LD V4, DT
    run(cpu, 0xF315, 0xF318, 0xF407)
    assert cpu.registers.delay_timer == 0x30
    assert cpu.registers.sound_timer == 0x30
    assert cpu.registers.read_reg(4) == 0x30

# @intent:test_case_wait_key キーが押されるまでFX0Aが同じ命令に留まることを検証します。
def test_ld_key_waits_for_key(cpu):
    run(cpu, 0xF20A)
    assert cpu.registers.pc == 0x200
    cpu.step()
    assert cpu.registers.pc == 0x200

    cpu.keypad.set(0x7, True)
    cpu.step()
    assert cpu.registers.read_reg(2) == 0x7
    assert cpu.registers.pc == 0x202

@pytest.mark.parametrize("digit, address", [(0x0, 0x00), (0xA, 0x32), (0xF, 0x4B), (0x1A, 0x32)])
def test_ld_font(cpu, digit, address):
    cpu.registers.write_reg(5, digit)
    run(cpu, 0xF529)
    assert cpu.registers.i == address

def test_ld_bcd(cpu):
    cpu.registers.write_reg(1, 157)
    cpu.registers.i = 0x300
    run(cpu, 0xF133)
    assert [cpu.memory.peek(0x300 + n) for n in range(3)] == [1, 5, 7]

def test_ld_bcd_zero_padded(cpu):
    cpu.registers.write_reg(1, 7)
    cpu.registers.i = 0x300
    run(cpu, 0xF133)
    assert [cpu.memory.peek(0x300 + n) for n in range(3)] == [0, 0, 7]

# @intent:test_case_store_inclusive V0からVxまで両端を含めて格納されることを検証します。
def test_store_regs_inclusive(cpu):
    for n in range(16):
        cpu.registers.write_reg(n, 0x10 + n)
    cpu.registers.i = 0x400
    run(cpu, 0xF355)
    assert [cpu.memory.peek(0x400 + n) for n in range(5)] == [0x10, 0x11, 0x12, 0x13, 0x00]
    assert cpu.registers.i == 0x400

def test_load_regs_inclusive(cpu):
    cpu.memory.load(0x400, bytes([1, 2, 3, 4, 5]))
    cpu.registers.i = 0x400
    run(cpu, 0xF365)
    assert [cpu.registers.read_reg(n) for n in range(5)] == [1, 2, 3, 4, 0]
    assert cpu.registers.i == 0x400

def test_store_regs_out_of_range(cpu):
    cpu.registers.i = 0xFFE
    with pytest.raises(AddressOutOfRange):
        run(cpu, 0xF355)
