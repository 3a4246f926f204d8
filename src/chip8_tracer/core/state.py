# chip8_tracer/core/state.py
"""
Core Layer (CPU状態)

このモジュールは、CHIP-8のレジスタファイルを保持するデータ構造を定義します。
"""
from dataclasses import dataclass, field
from typing import List

STACK_DEPTH = 16
NUM_REGISTERS = 16

# @intent:responsibility CHIP-8 CPUのレジスタ状態を保持します。
@dataclass
class Chip8State:
    """
    CHIP-8のレジスタ状態を保持するデータクラス。
    V0-VFの汎用レジスタ、インデックスI、2つのタイマー、PC/SP、16段のリターンスタック。
    """
    pc: int = 0x200  # Program Counter
    sp: int = 0x00   # Stack Pointer (次に積むスロット)
    i: int = 0x0000  # Index Register
    dt: int = 0x00   # Delay Timer
    st: int = 0x00   # Sound Timer
    v: List[int] = field(default_factory=lambda: [0] * NUM_REGISTERS)
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)

    # @intent:responsibility リストを含めた完全なコピーを返します。
    # @intent:rationale Snapshotへ渡す状態が後続サイクルで変化しないようにするため、リストも複製します。
    def copy(self) -> 'Chip8State':
        return Chip8State(
            pc=self.pc, sp=self.sp, i=self.i, dt=self.dt, st=self.st,
            v=list(self.v), stack=list(self.stack)
        )
