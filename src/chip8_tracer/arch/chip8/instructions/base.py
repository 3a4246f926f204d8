# chip8_tracer/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
from typing import List

from chip8_tracer.core.snapshot import Operation

# @intent:utility_function 命令語の各フィールドを取り出します。
def field_x(instruction: int) -> int:
    return (instruction >> 8) & 0xF

def field_y(instruction: int) -> int:
    return (instruction >> 4) & 0xF

def field_n(instruction: int) -> int:
    return instruction & 0xF

def field_kk(instruction: int) -> int:
    return instruction & 0xFF

def field_nnn(instruction: int) -> int:
    return instruction & 0x0FFF

# @intent:utility_function オペランド表記用のレジスタ名を返します。
def reg_name(index: int) -> str:
    return f"V{index:X}"

def byte_literal(value: int) -> str:
    return f"#{value:02X}"

def addr_literal(value: int) -> str:
    return f"#{value:03X}"

# @intent:utility_function 命令語からOperationを組み立てます。
def make_operation(instruction: int, mnemonic: str, operands: List[str], pattern: str) -> Operation:
    return Operation(
        opcode_hex=f"{instruction:04X}",
        mnemonic=mnemonic,
        operands=operands,
        pattern=pattern,
    )
