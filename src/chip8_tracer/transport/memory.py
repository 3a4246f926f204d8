# chip8_tracer/transport/memory.py
"""
Transport Layer (メモリ空間)

このモジュールは、CHIP-8の4096バイトのアドレス空間を管理し、
フォント/ROMのロードとバイト単位の読み書きを提供する責務を負います。
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List

from chip8_tracer.common.errors import AddressOutOfRange, LoadOutOfBounds

logger = logging.getLogger(__name__)

MEMORY_SIZE = 4096
FONT_ADDR = 0x000
ROM_ADDR = 0x200

# @intent:responsibility メモリアクセスを記録するためのタイプを定義します。
class MemoryAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 個々のメモリアクセス操作を記録します。
@dataclass(frozen=True) # 不変データ構造
class MemoryAccess:
    """
    メモリ上で行われた単一のアクセス（読み込みまたは書き込み）を記録するデータクラス。
    """
    address: int
    data: int # 8bit value
    access_type: MemoryAccessType
    previous_data: int = 0 # WRITE時の書き込み前の値

# @intent:responsibility CHIP-8の4KBアドレス空間を保持し、全アクセスを記録します。
# @intent:rationale アクセスを記録し、Snapshotに含めることでシステムの観測可能性を高めます。
class Memory:
    """
    4096バイトのメモリ空間。
    範囲外アクセスは折り返さず、AddressOutOfRangeを送出します。
    """
    # @intent:responsibility ゼロ初期化されたメモリと空のアクセスログを用意します。
    def __init__(self, size: int = MEMORY_SIZE):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("Memory size must be a positive integer.")
        self._memory = bytearray(size)
        self._size = size
        self._activity_log: List[MemoryAccess] = []

    def get_size(self) -> int:
        return self._size

    def _check(self, address: int) -> None:
        if not 0 <= address < self._size:
            raise AddressOutOfRange(address, self._size)

    # @intent:responsibility 指定オフセットへバイト列をそのまま書き込みます。
    # @intent:pre-condition offset + len(data) <= size。超える場合は何も書き込まずにLoadOutOfBoundsを送出します。
    def load(self, offset: int, data: bytes) -> None:
        """
        フォントやROMのイメージをメモリへ配置します。
        ロードはアクセスログに記録されません。
        """
        if offset < 0 or offset + len(data) > self._size:
            raise LoadOutOfBounds(offset, len(data), self._size)
        self._memory[offset:offset + len(data)] = data
        logger.debug("Loaded %d bytes at %#05x", len(data), offset)

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出します。
    def read_byte(self, address: int) -> int:
        self._check(address)
        data = self._memory[address]
        self._activity_log.append(MemoryAccess(address, data, MemoryAccessType.READ))
        return data

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    def write_byte(self, address: int, data: int) -> None:
        self._check(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        previous = self._memory[address]
        self._memory[address] = data
        self._activity_log.append(MemoryAccess(address, data, MemoryAccessType.WRITE, previous))

    # @intent:responsibility ログを記録せずに指定されたアドレスからデータを読み出します。
    def peek(self, address: int) -> int:
        """
        指定されたアドレスから8bitのデータを読み出します（ログ記録なし）。
        逆アセンブラや状態レポートなどのインスペクタ用。
        """
        self._check(address)
        return self._memory[address]

    # @intent:responsibility 記録されたアクセスログを取得し、クリアします。
    def get_and_clear_activity_log(self) -> List[MemoryAccess]:
        log = self._activity_log
        self._activity_log = []
        return log

    # @intent:responsibility メモリイメージ全体のコピーを返します。
    def image(self) -> bytes:
        return bytes(self._memory)

    # @intent:responsibility メモリイメージ全体をファイルへ書き出します（デバッグ用途のみ）。
    def dump(self, path: str) -> None:
        """
        メモリの内容をそのままバイナリで書き出します。
        セーブステート形式ではありません。
        """
        with open(path, 'wb') as f:
            f.write(self._memory)
        logger.info("Dumped memory to %s", path)
