# chip8_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令実行後のCPUとメモリアクセスの状態を記録した不変のデータ構造を定義します。
デバッガへの情報提供と、致命的エラー時の状態記録に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from chip8_tracer.core.state import Chip8State
from chip8_tracer.transport.memory import MemoryAccess


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令の詳細（HEX、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str # 例: "8014"
    mnemonic: str # 例: "ADD"
    operands: List[str] = field(default_factory=list) # 例: ["V0", "V1"]
    pattern: str = "" # 実行関数の選択キー。例: "8XY4"
    cycle_count: int = 1
    length: int = 2 # CHIP-8の命令は常に2バイト

    # @intent:responsibility 命令語を整数として返します。
    @property
    def instruction(self) -> int:
        return int(self.opcode_hex, 16)

    # @intent:responsibility "ADD V0, V1" 形式の表記を返します。
    def text(self) -> str:
        if self.operands:
            return f"{self.mnemonic} " + ", ".join(self.operands)
        return self.mnemonic

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計サイクル数、命令の実行アドレス）を記録するデータクラス。
    """
    cycle_count: int
    address: int = 0
    symbol_info: Optional[str] = None # 例: "0x0200: LD V0, #05"

# @intent:responsibility ある一時点におけるCPUとメモリアクセスの完全な状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    1命令実行直後の、CPU状態とメモリアクセスを記録した不変のデータ構造。
    """
    state: Chip8State
    operation: Operation
    metadata: Metadata
    memory_activity: List[MemoryAccess] = field(default_factory=list)
