# tests/core/test_registers.py
"""
chip8_tracer.core.registersモジュールの単体テスト。
"""
import pytest

from chip8_tracer.common.errors import StackOverflow, StackUnderflow
from chip8_tracer.core.registers import Registers, JumpMode
from chip8_tracer.core.state import Chip8State

# @intent:test_suite レジスタファイルの操作とスタックの境界条件を検証します。

class TestChip8State:
    def test_initial_state(self):
        state = Chip8State()
        assert state.pc == 0x200
        assert state.sp == 0
        assert state.i == 0
        assert state.v == [0] * 16
        assert state.stack == [0] * 16

    # @intent:test_case_copy コピーがリストを共有しないことを検証します。
    def test_copy_is_independent(self):
        state = Chip8State()
        clone = state.copy()
        state.v[3] = 0x42
        state.stack[0] = 0x300
        assert clone.v[3] == 0
        assert clone.stack[0] == 0

class TestRegisters:
    @pytest.fixture
    def regs(self):
        return Registers(Chip8State())

    @pytest.mark.parametrize("index", range(16))
    def test_write_read_reg(self, regs, index):
        regs.write_reg(index, 0xA5)
        assert regs.read_reg(index) == 0xA5

    def test_reg_bounds(self, regs):
        with pytest.raises(IndexError):
            regs.read_reg(16)
        with pytest.raises(ValueError):
            regs.write_reg(0, 0x100)

    def test_vf_helpers(self, regs):
        regs.set_vf()
        assert regs.read_reg(0xF) == 1
        regs.clear_vf()
        assert regs.read_reg(0xF) == 0
        regs.write_flag(True)
        assert regs.read_reg(0xF) == 1

    def test_increment_pc(self, regs):
        regs.increment_pc()
        assert regs.pc == 0x202

    def test_normal_jump_does_not_push(self, regs):
        regs.jump(0x345, JumpMode.NORMAL)
        assert regs.pc == 0x345
        assert regs.sp == 0

    # @intent:test_case_call_ret サブルーチン呼び出しと復帰の往復を検証します。
    def test_subroutine_round_trip(self, regs):
        regs.increment_pc()  # フェッチ後のPC=0x202
        regs.jump(0x300, JumpMode.SUBROUTINE)
        assert regs.pc == 0x300
        assert regs.sp == 1
        assert regs.state.stack[0] == 0x202
        regs.return_from_subroutine()
        assert regs.pc == 0x202
        assert regs.sp == 0

    # @intent:test_case_underflow 空スタックでの復帰はStackUnderflowとなりSPが折り返さないことを検証します。
    def test_return_with_empty_stack(self, regs):
        with pytest.raises(StackUnderflow):
            regs.return_from_subroutine()
        assert regs.sp == 0

    # @intent:test_case_overflow 17段目の呼び出しはStackOverflowとなり状態が変化しないことを検証します。
    def test_call_depth_overflow(self, regs):
        for n in range(16):
            regs.jump(0x300 + 2 * n, JumpMode.SUBROUTINE)
        assert regs.sp == 16
        with pytest.raises(StackOverflow):
            regs.jump(0x400, JumpMode.SUBROUTINE)
        assert regs.sp == 16
        assert regs.pc == 0x31E

    def test_timers_and_index_wrap(self, regs):
        regs.i = 0x1FFFF
        assert regs.i == 0xFFFF
        regs.delay_timer = 0x3C
        regs.sound_timer = 0x05
        assert regs.state.dt == 0x3C
        assert regs.state.st == 0x05

class TestRegistersDefaultState:
    # @intent:test_case_default_state 状態を渡さない場合は初期状態のChip8Stateを所有することを検証します。
    def test_state_is_optional(self):
        regs = Registers()
        assert regs.state == Chip8State()
        assert regs.pc == 0x200
