# chip8_tracer/core/registers.py
"""
Core Layer (レジスタファイル)

Chip8Stateに対する検証付きの操作（レジスタ読み書き、VFフラグ、ジャンプ、
サブルーチン復帰、PC更新）を提供します。
"""
from enum import Enum
from typing import Optional

from chip8_tracer.common.errors import StackOverflow, StackUnderflow
from chip8_tracer.core.state import Chip8State, STACK_DEPTH, NUM_REGISTERS

VF = 0xF

# @intent:responsibility ジャンプの種類を定義します。
class JumpMode(Enum):
    NORMAL = "NORMAL"
    SUBROUTINE = "SUBROUTINE"

# @intent:responsibility CPU状態への全ての変更を仲介し、レジスタ幅とスタック範囲の不変条件を守ります。
class Registers:
    """
    CHIP-8のレジスタファイル。
    VF(レジスタ15)はフラグレジスタを兼ねます。
    """
    def __init__(self, state: Optional[Chip8State] = None):
        self._state = state if state is not None else Chip8State()

    @property
    def state(self) -> Chip8State:
        return self._state

    def _check_index(self, index: int) -> None:
        if not 0 <= index < NUM_REGISTERS:
            raise IndexError(f"Register index {index} out of range.")

    def read_reg(self, index: int) -> int:
        self._check_index(index)
        return self._state.v[index]

    # @intent:pre-condition valueは呼び出し側で8bitに丸める。範囲外はValueError。
    def write_reg(self, index: int, value: int) -> None:
        self._check_index(index)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Value {value} is not an 8-bit value.")
        self._state.v[index] = value

    def set_vf(self) -> None:
        self._state.v[VF] = 1

    def clear_vf(self) -> None:
        self._state.v[VF] = 0

    # @intent:utility_function 条件に応じてVFを1/0に設定します。
    def write_flag(self, condition: bool) -> None:
        if condition:
            self.set_vf()
        else:
            self.clear_vf()

    @property
    def i(self) -> int:
        return self._state.i

    @i.setter
    def i(self, value: int) -> None:
        self._state.i = value & 0xFFFF

    @property
    def delay_timer(self) -> int:
        return self._state.dt

    @delay_timer.setter
    def delay_timer(self, value: int) -> None:
        self._state.dt = value & 0xFF

    @property
    def sound_timer(self) -> int:
        return self._state.st

    @sound_timer.setter
    def sound_timer(self, value: int) -> None:
        self._state.st = value & 0xFF

    @property
    def pc(self) -> int:
        return self._state.pc

    @property
    def sp(self) -> int:
        return self._state.sp

    # @intent:responsibility 命令長(2バイト)分PCを進めます。スキップ命令もこれを用います。
    def increment_pc(self) -> None:
        self._state.pc = (self._state.pc + 2) & 0xFFFF

    # @intent:responsibility PCを1命令分戻します。キー入力待ち(Fx0A)の再実行に使用します。
    def rewind_pc(self) -> None:
        self._state.pc = (self._state.pc - 2) & 0xFFFF

    # @intent:responsibility PCを指定アドレスへ移動します。SUBROUTINEの場合は現在のPCをスタックへ積みます。
    # @intent:post-condition スタックが満杯の場合は状態を変更せずStackOverflowを送出します。
    def jump(self, address: int, mode: JumpMode) -> None:
        if mode is JumpMode.SUBROUTINE:
            if self._state.sp >= STACK_DEPTH:
                raise StackOverflow(STACK_DEPTH)
            self._state.stack[self._state.sp] = self._state.pc
            self._state.sp += 1
        elif mode is not JumpMode.NORMAL:
            raise ValueError(f"Unknown jump mode: {mode}")
        self._state.pc = address & 0xFFFF

    # @intent:responsibility スタックから復帰アドレスを取り出しPCへ設定します。
    def return_from_subroutine(self) -> None:
        if self._state.sp == 0:
            raise StackUnderflow()
        self._state.sp -= 1
        self._state.pc = self._state.stack[self._state.sp]
