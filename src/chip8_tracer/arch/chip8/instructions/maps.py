# chip8_tracer/arch/chip8/instructions/maps.py
"""
命令語と命令実装のマッピング定義。
CHIP-8の全命令はこのファイルの表だけで解決されます。
"""
from . import load
from . import alu
from . import control
from . import graphics
from .base import field_n, field_kk, field_nnn

# @intent:map 上位ニブル(ファミリ)がそのまま命令を決定するファミリのデコード関数。
DECODE_MAP = {
    0x1: control.decode_jp,
    0x2: control.decode_call,
    0x3: control.decode_se_byte,
    0x4: control.decode_sne_byte,
    0x5: control.decode_se_reg,
    0x6: load.decode_ld_byte,
    0x7: alu.decode_add_byte,
    0x9: control.decode_sne_reg,
    0xA: load.decode_ld_i,
    0xB: control.decode_jp_v0,
    0xC: alu.decode_rnd,
    0xD: graphics.decode_drw,
}

# @intent:map 二次コードで命令を選ぶファミリ (0x0, 0x8, 0xE, 0xF) のデコード表。
SUB_DECODE_MAP = {
    0x0: {
        0x0E0: graphics.decode_cls,
        0x0EE: control.decode_ret,
    },
    0x8: {
        0x0: load.decode_ld_reg,
        0x1: alu.decode_or,
        0x2: alu.decode_and,
        0x3: alu.decode_xor,
        0x4: alu.decode_add_reg,
        0x5: alu.decode_sub,
        0x6: alu.decode_shr,
        0x7: alu.decode_subn,
        0xE: alu.decode_shl,
    },
    0xE: {
        0x9E: control.decode_skp,
        0xA1: control.decode_sknp,
    },
    0xF: {
        0x07: load.decode_ld_vx_dt,
        0x0A: load.decode_ld_key,
        0x15: load.decode_ld_dt_vx,
        0x18: load.decode_ld_st_vx,
        0x1E: alu.decode_add_i,
        0x29: load.decode_ld_font,
        0x33: load.decode_ld_bcd,
        0x55: load.decode_store_regs,
        0x65: load.decode_load_regs,
    },
}

# @intent:map 二次コードの取り出し方。ファミリ0は下位12bit全体で照合し、0nnn(SYS)を受け付けない。
SUB_CODE_FIELD = {
    0x0: field_nnn,
    0x8: field_n,
    0xE: field_kk,
    0xF: field_kk,
}

# @intent:map パターン文字列から実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    "00EE": control.execute_ret,
    "1NNN": control.execute_jp,
    "2NNN": control.execute_call,
    "3XKK": control.execute_se_byte,
    "4XKK": control.execute_sne_byte,
    "5XY0": control.execute_se_reg,
    "9XY0": control.execute_sne_reg,
    "BNNN": control.execute_jp_v0,
    "EX9E": control.execute_skp,
    "EXA1": control.execute_sknp,

    # Load/Store
    "6XKK": load.execute_ld_byte,
    "8XY0": load.execute_ld_reg,
    "ANNN": load.execute_ld_i,
    "FX07": load.execute_ld_vx_dt,
    "FX0A": load.execute_ld_key,
    "FX15": load.execute_ld_dt_vx,
    "FX18": load.execute_ld_st_vx,
    "FX29": load.execute_ld_font,
    "FX33": load.execute_ld_bcd,
    "FX55": load.execute_store_regs,
    "FX65": load.execute_load_regs,

    # ALU
    "7XKK": alu.execute_add_byte,
    "8XY1": alu.execute_or,
    "8XY2": alu.execute_and,
    "8XY3": alu.execute_xor,
    "8XY4": alu.execute_add_reg,
    "8XY5": alu.execute_sub,
    "8XY6": alu.execute_shr,
    "8XY7": alu.execute_subn,
    "8XYE": alu.execute_shl,
    "FX1E": alu.execute_add_i,
    "CXKK": alu.execute_rnd,

    # Graphics
    "00E0": graphics.execute_cls,
    "DXYN": graphics.execute_drw,
}
