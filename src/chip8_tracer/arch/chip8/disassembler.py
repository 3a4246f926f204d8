# chip8_tracer/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のニーモニックに変換します。
Instruction Layerのデコードロジックを再利用しますが、アクセスログを汚さないように
peekで読み出します。
"""
from typing import List, Tuple

from chip8_tracer.common.errors import IllegalOpcode
from chip8_tracer.transport.memory import Memory
from chip8_tracer.arch.chip8.instructions import decode_opcode

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(memory: Memory, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。
    デコードできない語はデータ語(DW)として表示します。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    current_addr = start_addr
    end_addr = min(start_addr + length, memory.get_size() - 1)

    while current_addr < end_addr:
        high = memory.peek(current_addr)
        low = memory.peek(current_addr + 1)
        instruction = (high << 8) | low
        hex_bytes = f"{high:02X} {low:02X}"

        try:
            mnemonic_str = decode_opcode(instruction).text()
        except IllegalOpcode:
            mnemonic_str = f"DW #{instruction:04X}"

        result.append((current_addr, hex_bytes, mnemonic_str))
        current_addr += 2

    return result
