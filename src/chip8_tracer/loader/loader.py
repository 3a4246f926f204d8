# chip8_tracer/loader/loader.py
"""
イメージローダーモジュール。
生バイナリのROMとフォントをファイルから読み込み、メモリへ配置します。
"""
import logging
from typing import Optional

from chip8_tracer.arch.chip8.font import FONTSET, FONT_SIZE
from chip8_tracer.common.errors import FontSizeError
from chip8_tracer.transport.memory import Memory, FONT_ADDR, ROM_ADDR

logger = logging.getLogger(__name__)

class RomLoader:
    """
    CHIP-8プログラムを0x200番地から無加工で配置するローダー。
    """
    # @intent:responsibility ファイルを読み込みメモリへ配置します。
    # @intent:post-condition ファイルを開けない場合はOSErrorがそのまま伝播し、大きすぎる場合はLoadOutOfBoundsを送出します。
    def load_rom(self, file_path: str, memory: Memory) -> int:
        with open(file_path, 'rb') as f:
            data = f.read()
        self.load_bytes(data, memory)
        logger.info("ROM %s loaded (%d bytes)", file_path, len(data))
        return len(data)

    def load_bytes(self, data: bytes, memory: Memory) -> None:
        memory.load(ROM_ADDR, data)

class FontLoader:
    """
    16進フォント(80バイト)を0x000番地に配置するローダー。
    """
    # @intent:responsibility 指定されたフォントファイル、または組み込みフォントをロードします。
    def load_font(self, file_path: Optional[str], memory: Memory) -> None:
        if file_path is None:
            data = FONTSET
        else:
            with open(file_path, 'rb') as f:
                data = f.read()
        if len(data) != FONT_SIZE:
            raise FontSizeError(
                f"Font image must be exactly {FONT_SIZE} bytes, got {len(data)} bytes."
            )
        memory.load(FONT_ADDR, data)
        logger.debug("Font loaded from %s", file_path or "built-in fontset")
