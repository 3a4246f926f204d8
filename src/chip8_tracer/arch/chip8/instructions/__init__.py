# chip8_tracer/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from chip8_tracer.common.errors import IllegalOpcode
from chip8_tracer.core.snapshot import Operation
from .maps import DECODE_MAP, SUB_DECODE_MAP, SUB_CODE_FIELD, EXECUTE_MAP

# @intent:responsibility CHIP-8の命令語をデコードします。
def decode_opcode(instruction: int) -> Operation:
    """
    16bitの命令語をデコードし、Operationオブジェクトを返します。
    未定義の命令・二次コードはIllegalOpcodeとして扱います。
    """
    family = (instruction >> 12) & 0xF
    sub_table = SUB_DECODE_MAP.get(family)
    if sub_table is not None:
        decoder = sub_table.get(SUB_CODE_FIELD[family](instruction))
    else:
        decoder = DECODE_MAP.get(family)
    if decoder is None:
        raise IllegalOpcode(instruction)
    return decoder(instruction)

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(operation: Operation, cpu) -> None:
    """
    デコードされた命令を実行し、CPUの状態・メモリ・画面を変更します。
    """
    executor = EXECUTE_MAP.get(operation.pattern)
    if executor is None:
        raise IllegalOpcode(operation.instruction)
    executor(cpu, operation)
