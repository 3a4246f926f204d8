# chip8_tracer/arch/chip8/instructions/control.py
"""
制御転送・条件スキップ命令の実装。
"""
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.core.registers import JumpMode
from .base import (
    field_x, field_y, field_kk, field_nnn,
    reg_name, byte_literal, addr_literal, make_operation
)

# --- RET ---
def decode_ret(instruction: int) -> Operation:
    return make_operation(instruction, "RET", [], "00EE")

# @intent:responsibility RET 命令を実行し、スタックから復帰アドレスを取り出します。
def execute_ret(cpu, op: Operation) -> None:
    cpu.registers.return_from_subroutine()

# --- JP addr ---
def decode_jp(instruction: int) -> Operation:
    return make_operation(instruction, "JP", [addr_literal(field_nnn(instruction))], "1NNN")

def execute_jp(cpu, op: Operation) -> None:
    cpu.registers.jump(field_nnn(op.instruction), JumpMode.NORMAL)

# --- CALL addr ---
def decode_call(instruction: int) -> Operation:
    return make_operation(instruction, "CALL", [addr_literal(field_nnn(instruction))], "2NNN")

# @intent:responsibility CALL 命令を実行します。フェッチ後のPC(次の命令)が復帰アドレスとして積まれます。
def execute_call(cpu, op: Operation) -> None:
    cpu.registers.jump(field_nnn(op.instruction), JumpMode.SUBROUTINE)

# --- JP V0, addr ---
def decode_jp_v0(instruction: int) -> Operation:
    return make_operation(instruction, "JP", ["V0", addr_literal(field_nnn(instruction))], "BNNN")

def execute_jp_v0(cpu, op: Operation) -> None:
    regs = cpu.registers
    regs.jump(field_nnn(op.instruction) + regs.read_reg(0), JumpMode.NORMAL)

# --- SE Vx, byte ---
def decode_se_byte(instruction: int) -> Operation:
    x = field_x(instruction)
    return make_operation(instruction, "SE", [reg_name(x), byte_literal(field_kk(instruction))], "3XKK")

def execute_se_byte(cpu, op: Operation) -> None:
    instr = op.instruction
    if cpu.registers.read_reg(field_x(instr)) == field_kk(instr):
        cpu.registers.increment_pc()

# --- SNE Vx, byte ---
def decode_sne_byte(instruction: int) -> Operation:
    x = field_x(instruction)
    return make_operation(instruction, "SNE", [reg_name(x), byte_literal(field_kk(instruction))], "4XKK")

def execute_sne_byte(cpu, op: Operation) -> None:
    instr = op.instruction
    if cpu.registers.read_reg(field_x(instr)) != field_kk(instr):
        cpu.registers.increment_pc()

# --- SE Vx, Vy ---
def decode_se_reg(instruction: int) -> Operation:
    return make_operation(
        instruction, "SE", [reg_name(field_x(instruction)), reg_name(field_y(instruction))], "5XY0"
    )

def execute_se_reg(cpu, op: Operation) -> None:
    regs = cpu.registers
    instr = op.instruction
    if regs.read_reg(field_x(instr)) == regs.read_reg(field_y(instr)):
        regs.increment_pc()

# --- SNE Vx, Vy ---
def decode_sne_reg(instruction: int) -> Operation:
    return make_operation(
        instruction, "SNE", [reg_name(field_x(instruction)), reg_name(field_y(instruction))], "9XY0"
    )

def execute_sne_reg(cpu, op: Operation) -> None:
    regs = cpu.registers
    instr = op.instruction
    if regs.read_reg(field_x(instr)) != regs.read_reg(field_y(instr)):
        regs.increment_pc()

# --- SKP Vx ---
def decode_skp(instruction: int) -> Operation:
    return make_operation(instruction, "SKP", [reg_name(field_x(instruction))], "EX9E")

# @intent:responsibility Vxが示すキーが押されていれば次の命令をスキップします。
def execute_skp(cpu, op: Operation) -> None:
    key = cpu.registers.read_reg(field_x(op.instruction))
    if cpu.keypad.is_down(key):
        cpu.registers.increment_pc()

# --- SKNP Vx ---
def decode_sknp(instruction: int) -> Operation:
    return make_operation(instruction, "SKNP", [reg_name(field_x(instruction))], "EXA1")

def execute_sknp(cpu, op: Operation) -> None:
    key = cpu.registers.read_reg(field_x(op.instruction))
    if not cpu.keypad.is_down(key):
        cpu.registers.increment_pc()
