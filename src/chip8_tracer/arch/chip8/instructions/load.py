# chip8_tracer/arch/chip8/instructions/load.py
"""
ロード/ストア命令の実装。
レジスタ間転送、タイマー、インデックスレジスタ、メモリブロック転送を扱います。
"""
from chip8_tracer.core.snapshot import Operation
from .base import (
    field_x, field_y, field_kk, field_nnn,
    reg_name, byte_literal, addr_literal, make_operation
)

FONT_GLYPH_SIZE = 5

# --- LD Vx, byte ---
def decode_ld_byte(instruction: int) -> Operation:
    x = field_x(instruction)
    return make_operation(instruction, "LD", [reg_name(x), byte_literal(field_kk(instruction))], "6XKK")

def execute_ld_byte(cpu, op: Operation) -> None:
    instr = op.instruction
    cpu.registers.write_reg(field_x(instr), field_kk(instr))

# --- LD Vx, Vy ---
def decode_ld_reg(instruction: int) -> Operation:
    return make_operation(
        instruction, "LD", [reg_name(field_x(instruction)), reg_name(field_y(instruction))], "8XY0"
    )

def execute_ld_reg(cpu, op: Operation) -> None:
    instr = op.instruction
    cpu.registers.write_reg(field_x(instr), cpu.registers.read_reg(field_y(instr)))

# --- LD I, addr ---
def decode_ld_i(instruction: int) -> Operation:
    return make_operation(instruction, "LD", ["I", addr_literal(field_nnn(instruction))], "ANNN")

def execute_ld_i(cpu, op: Operation) -> None:
    cpu.registers.i = field_nnn(op.instruction)

# --- LD Vx, DT ---
def decode_ld_vx_dt(instruction: int) -> Operation:
    return make_operation(instruction, "LD", [reg_name(field_x(instruction)), "DT"], "FX07")

def execute_ld_vx_dt(cpu, op: Operation) -> None:
    cpu.registers.write_reg(field_x(op.instruction), cpu.registers.delay_timer)

# --- LD Vx, K ---
def decode_ld_key(instruction: int) -> Operation:
    return make_operation(instruction, "LD", [reg_name(field_x(instruction)), "K"], "FX0A")

# @intent:responsibility キー入力を待ちます。
# @intent:rationale ループを止めないため、キーが押されていなければPCを戻して次サイクルで再実行します。
def execute_ld_key(cpu, op: Operation) -> None:
    key = cpu.keypad.first_pressed()
    if key is None:
        cpu.registers.rewind_pc()
    else:
        cpu.registers.write_reg(field_x(op.instruction), key)

# --- LD DT, Vx ---
def decode_ld_dt_vx(instruction: int) -> Operation:
    return make_operation(instruction, "LD", ["DT", reg_name(field_x(instruction))], "FX15")

def execute_ld_dt_vx(cpu, op: Operation) -> None:
    cpu.registers.delay_timer = cpu.registers.read_reg(field_x(op.instruction))

# --- LD ST, Vx ---
def decode_ld_st_vx(instruction: int) -> Operation:
    return make_operation(instruction, "LD", ["ST", reg_name(field_x(instruction))], "FX18")

def execute_ld_st_vx(cpu, op: Operation) -> None:
    cpu.registers.sound_timer = cpu.registers.read_reg(field_x(op.instruction))

# --- LD F, Vx ---
def decode_ld_font(instruction: int) -> Operation:
    return make_operation(instruction, "LD", ["F", reg_name(field_x(instruction))], "FX29")

# @intent:responsibility Vxの下位ニブルが示す16進数字のフォントアドレスをIへ設定します。
def execute_ld_font(cpu, op: Operation) -> None:
    digit = cpu.registers.read_reg(field_x(op.instruction)) & 0xF
    cpu.registers.i = FONT_GLYPH_SIZE * digit

# --- LD B, Vx ---
def decode_ld_bcd(instruction: int) -> Operation:
    return make_operation(instruction, "LD", ["B", reg_name(field_x(instruction))], "FX33")

# @intent:responsibility Vxの10進表現(百の位、十の位、一の位)を[I], [I+1], [I+2]へ格納します。
def execute_ld_bcd(cpu, op: Operation) -> None:
    value = cpu.registers.read_reg(field_x(op.instruction))
    addr = cpu.registers.i
    cpu.memory.write_byte(addr, value // 100)
    cpu.memory.write_byte(addr + 1, (value // 10) % 10)
    cpu.memory.write_byte(addr + 2, value % 10)

# --- LD [I], Vx ---
def decode_store_regs(instruction: int) -> Operation:
    return make_operation(instruction, "LD", ["[I]", reg_name(field_x(instruction))], "FX55")

# @intent:responsibility V0からVxまで(両端を含む)をIから始まるメモリへ格納します。Iは変化しません。
def execute_store_regs(cpu, op: Operation) -> None:
    base_addr = cpu.registers.i
    for n in range(field_x(op.instruction) + 1):
        cpu.memory.write_byte(base_addr + n, cpu.registers.read_reg(n))

# --- LD Vx, [I] ---
def decode_load_regs(instruction: int) -> Operation:
    return make_operation(instruction, "LD", [reg_name(field_x(instruction)), "[I]"], "FX65")

def execute_load_regs(cpu, op: Operation) -> None:
    base_addr = cpu.registers.i
    for n in range(field_x(op.instruction) + 1):
        cpu.registers.write_reg(n, cpu.memory.read_byte(base_addr + n))
