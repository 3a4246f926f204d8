# chip8_tracer/debugger/debugger.py
"""
実行制御とブレークポイント。

ブレークポイントやステップ要求に従ってインタプリタを止め、
直近の実行履歴と、デバッグ表示・致命的エラー時に出力するVM状態レポートを提供します。
"""
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.core.snapshot import Snapshot
from chip8_tracer.core.state import Chip8State
from chip8_tracer.transport.memory import MemoryAccessType

# @intent:responsibility 停止条件の種類。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # 次に実行する命令のアドレス
    MEMORY_READ = "MEMORY_READ"         # 直前の命令がaddressを読んだ
    MEMORY_WRITE = "MEMORY_WRITE"       # 直前の命令がaddressへ書いた
    REGISTER_VALUE = "REGISTER_VALUE"   # register_nameの値がvalueと等しい
    REGISTER_CHANGE = "REGISTER_CHANGE" # register_nameの値が直前の命令で変わった

# @intent:utility_function レジスタ名から状態の値を取り出します。
def register_value(state: Chip8State, name: str) -> Optional[int]:
    if len(name) == 2 and name[0] == "V":
        try:
            return state.v[int(name[1], 16)]
        except ValueError:
            return None
    return getattr(state, name.lower(), None)

# @intent:responsibility 1つの停止条件。
@dataclass(frozen=True)
class BreakpointCondition:
    """
    register_nameは "V0"-"VF", "I", "PC", "SP", "DT", "ST" のいずれか。
    PC_MATCHは実行前に、それ以外は1命令の実行結果に対して評価されます。
    """
    condition_type: BreakpointConditionType
    value: Optional[int] = None
    address: Optional[int] = None
    register_name: Optional[str] = None
    enabled: bool = True

    # @intent:responsibility 実行結果(Snapshot)と実行前の状態からこの条件の成否を判定します。
    def matches(self, snapshot: Snapshot, before: Chip8State) -> bool:
        kind = self.condition_type
        if kind == BreakpointConditionType.MEMORY_READ:
            wanted = MemoryAccessType.READ
        elif kind == BreakpointConditionType.MEMORY_WRITE:
            wanted = MemoryAccessType.WRITE
        elif kind == BreakpointConditionType.REGISTER_VALUE and self.register_name:
            return register_value(snapshot.state, self.register_name) == self.value
        elif kind == BreakpointConditionType.REGISTER_CHANGE and self.register_name:
            return register_value(before, self.register_name) != register_value(snapshot.state, self.register_name)
        else:
            return False
        return any(a.access_type == wanted and a.address == self.address for a in snapshot.memory_activity)

# @intent:responsibility インタプリタの実行を1命令単位で制御し、停止条件を管理します。
class Debugger:
    def __init__(self, cpu: Chip8Cpu, history_size: int = 64):
        self._cpu = cpu
        self._conditions: List[BreakpointCondition] = []
        self._before: Chip8State = cpu.get_state().copy()
        self._latest: Optional[Snapshot] = None
        # 致命的エラー時のトレース用
        self._history: Deque[Snapshot] = deque(maxlen=history_size)
        self._step_requested = False

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    # 同じ条件の重複登録は無視し、未登録の条件の削除はエラーにしません。
    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._conditions:
            self._conditions.append(condition)

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        self._conditions = [c for c in self._conditions if c != condition]

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return self._conditions[:]

    def get_history(self) -> List[Snapshot]:
        return [*self._history]

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._latest

    # @intent:responsibility シングルステップモードで次の1命令の実行を許可します。
    def request_step(self) -> None:
        self._step_requested = True

    # @intent:responsibility ステップ要求があれば消費してTrueを返します。
    def consume_step(self) -> bool:
        requested, self._step_requested = self._step_requested, False
        return requested

    # @intent:responsibility pcが有効なPC_MATCH条件に一致するか判定します。
    def is_pc_breakpoint(self, pc: int) -> bool:
        return any(
            c.enabled and c.condition_type == BreakpointConditionType.PC_MATCH and c.value == pc
            for c in self._conditions
        )

    def _hit_by(self, snapshot: Snapshot) -> bool:
        return any(c.enabled and c.matches(snapshot, self._before) for c in self._conditions)

    # @intent:responsibility CPUを1命令分実行し、履歴へ記録します。
    def step_instruction(self) -> Snapshot:
        self._before = self._cpu.get_state().copy()
        self._latest = self._cpu.step()
        self._history.append(self._latest)
        return self._latest

    # @intent:responsibility 1命令実行し、その結果またはその次のPCがブレークポイントに該当するかを返します。
    def step_and_check(self) -> bool:
        snapshot = self.step_instruction()
        return self._hit_by(snapshot) or self.is_pc_breakpoint(snapshot.state.pc)

    # @intent:responsibility ブレークポイントにヒットするかmax_steps命令を実行するまで連続実行します。
    def run(self, max_steps: Optional[int] = None) -> int:
        """
        実行した命令数を返します。
        ゲストコードの無限ループは正当な動作のため、max_stepsを省略すると停止条件はブレークポイントのみです。
        """
        steps = 0
        while max_steps is None or steps < max_steps:
            steps += 1
            if self.step_and_check():
                print(f"Breakpoint hit at PC: {self._cpu.get_state().pc:#06x}")
                break
        return steps

    # @intent:responsibility レジスタ、スタック、キーパッド、PC周辺のメモリを含む完全なVM状態レポートを生成します。
    def format_state(self, context: int = 8) -> str:
        cpu = self._cpu
        state = cpu.get_state()
        values = cpu.get_register_map()
        lines = [f"--- CHIP-8 state (cycle {cpu.cycle_count}) ---"]

        for group in cpu.get_register_layout():
            cells = []
            for reg in group.registers:
                hex_width = (reg.width + 3) // 4
                cells.append(f"{reg.name}={values[reg.name]:0{hex_width}X}")
            lines.append(f"{group.group_name:<15}" + " ".join(cells))

        stack = " ".join(f"{addr:03X}" for addr in state.stack[:state.sp]) or "(empty)"
        lines.append(f"{'Stack':<15}{stack}")

        keys = " ".join(f"{n:X}" for n, down in enumerate(cpu.keypad.states()) if down) or "(none)"
        lines.append(f"{'Keys down':<15}{keys}")

        start = max(0, (state.pc - context) & ~1)
        for addr, hex_bytes, mnemonic in cpu.disassemble(start, context * 2):
            marker = "->" if addr == state.pc else "  "
            lines.append(f"{marker} {addr:03X}: {hex_bytes}  {mnemonic}")

        if self._history:
            lines.append("Recent:")
            for snapshot in list(self._history)[-context:]:
                lines.append(f"   {snapshot.metadata.symbol_info}")
        return "\n".join(lines)
