# chip8_tracer/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

VFにフラグを定義する命令では、結果をVxへ書き込んだ後にフラグを書き込みます。
そのため Vx が VF の場合、最終的にVFにはフラグが残ります。
"""
from chip8_tracer.core.snapshot import Operation
from .base import (
    field_x, field_y, field_kk,
    reg_name, byte_literal, make_operation
)

# @intent:utility_function 8xyN 形式の命令をデコードします。
def _decode_xy(instruction: int, mnemonic: str, pattern: str) -> Operation:
    return make_operation(
        instruction, mnemonic, [reg_name(field_x(instruction)), reg_name(field_y(instruction))], pattern
    )

# @intent:utility_function VxとVyの値を読み出します。
def _operands(cpu, op: Operation):
    instr = op.instruction
    x = field_x(instr)
    return x, cpu.registers.read_reg(x), cpu.registers.read_reg(field_y(instr))

# --- ADD Vx, byte ---
def decode_add_byte(instruction: int) -> Operation:
    x = field_x(instruction)
    return make_operation(instruction, "ADD", [reg_name(x), byte_literal(field_kk(instruction))], "7XKK")

# @intent:responsibility ADD Vx, byte を実行します。8bitで折り返し、VFは変更しません。
def execute_add_byte(cpu, op: Operation) -> None:
    instr = op.instruction
    x = field_x(instr)
    regs = cpu.registers
    regs.write_reg(x, (regs.read_reg(x) + field_kk(instr)) & 0xFF)

# --- OR / AND / XOR ---
def decode_or(instruction: int) -> Operation:
    return _decode_xy(instruction, "OR", "8XY1")

def execute_or(cpu, op: Operation) -> None:
    x, vx, vy = _operands(cpu, op)
    cpu.registers.write_reg(x, vx | vy)

def decode_and(instruction: int) -> Operation:
    return _decode_xy(instruction, "AND", "8XY2")

def execute_and(cpu, op: Operation) -> None:
    x, vx, vy = _operands(cpu, op)
    cpu.registers.write_reg(x, vx & vy)

def decode_xor(instruction: int) -> Operation:
    return _decode_xy(instruction, "XOR", "8XY3")

def execute_xor(cpu, op: Operation) -> None:
    x, vx, vy = _operands(cpu, op)
    cpu.registers.write_reg(x, vx ^ vy)

# --- ADD Vx, Vy ---
def decode_add_reg(instruction: int) -> Operation:
    return _decode_xy(instruction, "ADD", "8XY4")

# @intent:responsibility ADD Vx, Vy を実行します。和が255を超えた場合VF=1。
def execute_add_reg(cpu, op: Operation) -> None:
    x, vx, vy = _operands(cpu, op)
    res = vx + vy
    cpu.registers.write_reg(x, res & 0xFF)
    cpu.registers.write_flag(res > 0xFF)

# --- SUB Vx, Vy ---
def decode_sub(instruction: int) -> Operation:
    return _decode_xy(instruction, "SUB", "8XY5")

# @intent:responsibility SUB Vx, Vy を実行します。Vx > Vy の場合VF=1（借りなし）。
def execute_sub(cpu, op: Operation) -> None:
    x, vx, vy = _operands(cpu, op)
    cpu.registers.write_reg(x, (vx - vy) & 0xFF)
    cpu.registers.write_flag(vx > vy)

# --- SHR Vx ---
def decode_shr(instruction: int) -> Operation:
    return _decode_xy(instruction, "SHR", "8XY6")

def execute_shr(cpu, op: Operation) -> None:
    x, vx, _ = _operands(cpu, op)
    cpu.registers.write_reg(x, vx >> 1)
    cpu.registers.write_flag(vx & 0x01)

# --- SUBN Vx, Vy ---
def decode_subn(instruction: int) -> Operation:
    return _decode_xy(instruction, "SUBN", "8XY7")

def execute_subn(cpu, op: Operation) -> None:
    x, vx, vy = _operands(cpu, op)
    cpu.registers.write_reg(x, (vy - vx) & 0xFF)
    cpu.registers.write_flag(vy > vx)

# --- SHL Vx ---
def decode_shl(instruction: int) -> Operation:
    return _decode_xy(instruction, "SHL", "8XYE")

def execute_shl(cpu, op: Operation) -> None:
    x, vx, _ = _operands(cpu, op)
    cpu.registers.write_reg(x, (vx << 1) & 0xFF)
    cpu.registers.write_flag(vx & 0x80)

# --- ADD I, Vx ---
def decode_add_i(instruction: int) -> Operation:
    return make_operation(instruction, "ADD", ["I", reg_name(field_x(instruction))], "FX1E")

# @intent:responsibility ADD I, Vx を実行します。Iは16bitで折り返し、VFは変更しません。
def execute_add_i(cpu, op: Operation) -> None:
    regs = cpu.registers
    regs.i = regs.i + regs.read_reg(field_x(op.instruction))

# --- RND Vx, byte ---
def decode_rnd(instruction: int) -> Operation:
    x = field_x(instruction)
    return make_operation(instruction, "RND", [reg_name(x), byte_literal(field_kk(instruction))], "CXKK")

def execute_rnd(cpu, op: Operation) -> None:
    instr = op.instruction
    cpu.registers.write_reg(field_x(instr), cpu.rng.randrange(256) & field_kk(instr))
