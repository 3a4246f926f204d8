# chip8_tracer/arch/chip8/instructions/graphics.py
"""
画面描画命令(CLS, DRW)の実装。
"""
from chip8_tracer.core.snapshot import Operation
from .base import field_x, field_y, field_n, reg_name, make_operation

# --- CLS ---
def decode_cls(instruction: int) -> Operation:
    return make_operation(instruction, "CLS", [], "00E0")

def execute_cls(cpu, op: Operation) -> None:
    cpu.display.clear()

# --- DRW Vx, Vy, nibble ---
def decode_drw(instruction: int) -> Operation:
    return make_operation(
        instruction, "DRW",
        [reg_name(field_x(instruction)), reg_name(field_y(instruction)), str(field_n(instruction))],
        "DXYN"
    )

# @intent:responsibility [I]から始まるnバイトのスプライトを(Vx, Vy)へXOR描画し、衝突をVFへ記録します。
def execute_drw(cpu, op: Operation) -> None:
    instr = op.instruction
    regs = cpu.registers
    x0 = regs.read_reg(field_x(instr))
    y0 = regs.read_reg(field_y(instr))
    sprite = [cpu.memory.read_byte(regs.i + row) for row in range(field_n(instr))]
    regs.write_flag(cpu.display.draw_sprite(x0, y0, sprite))
