# chip8_tracer/core/cpu.py
"""
Core Layer (命令サイクル)

フェッチ→デコード→実行の1サイクルを駆動し、結果をSnapshotとして返す抽象基底クラスです。
命令ごとの振る舞いはarch層の命令表が受け持ちます。
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Tuple

from chip8_tracer.transport.memory import Memory
from chip8_tracer.core.snapshot import Snapshot, Operation, Metadata
from chip8_tracer.core.state import Chip8State
from chip8_tracer.common.types import RegisterLayoutInfo

logger = logging.getLogger(__name__)

# @intent:responsibility 命令サイクルの共通フローとCPU実装が満たすべきインターフェースを定義します。
class AbstractCpu(ABC):
    """
    メモリを参照し、レジスタ状態を排他的に所有します。
    状態は`get_state()`経由で公開し、変更はサブクラスの命令実装だけが行います。
    """
    def __init__(self, memory: Memory):
        self._memory = memory
        self._state: Chip8State = self._create_initial_state()
        self._cycle_count: int = 0

    @abstractmethod
    def _create_initial_state(self) -> Chip8State:
        pass

    # @intent:responsibility レジスタと累計サイクル数を初期化します。メモリの内容は保持されます。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._cycle_count = 0

    def get_state(self) -> Chip8State:
        return self._state

    @property
    def memory(self) -> Memory:
        return self._memory

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    # @intent:post-condition 戻った時点でPCは次の命令を指している。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility 1命令を実行し、実行後の状態とその命令のメモリアクセスをSnapshotで返します。
    def step(self) -> Snapshot:
        """
        VmFatalErrorは捕捉せずに呼び出し元へ伝播します。
        その場合もPCはフェッチ済みの位置を指しています。
        """
        self._memory.get_and_clear_activity_log()
        pc = self._state.pc

        operation = self._decode(self._fetch())
        logger.debug("PC: %#05x | Opcode: %s | %s", pc, operation.opcode_hex, operation.text())
        self._execute(operation)

        self._cycle_count += operation.cycle_count
        return Snapshot(
            state=self._state.copy(),
            operation=operation,
            metadata=Metadata(
                cycle_count=self._cycle_count,
                address=pc,
                symbol_info=f"{pc:#06x}: {operation.text()}"
            ),
            memory_activity=self._memory.get_and_clear_activity_log()
        )

    # @intent:responsibility 状態レポート用に、レジスタ名から値への辞書を返します。
    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        pass

    # @intent:responsibility 状態レポートでのレジスタのグループ分けを返します。
    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        pass

    # @intent:responsibility (address, hex_bytes, mnemonic) のリストを返します。
    @abstractmethod
    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        pass
