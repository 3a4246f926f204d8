# chip8_tracer/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。
"""
import logging
import random
from typing import Dict, List, Optional, Tuple

from chip8_tracer.common.types import RegisterLayoutInfo, RegisterInfo
from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.registers import Registers
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.core.state import Chip8State
from chip8_tracer.peripherals.display import Display
from chip8_tracer.peripherals.keypad import Keypad
from chip8_tracer.transport.memory import Memory, ROM_ADDR
from chip8_tracer.arch.chip8.instructions import decode_opcode, execute_instruction
from chip8_tracer.arch.chip8 import disassembler

logger = logging.getLogger(__name__)

# @intent:responsibility CHIP-8の具体的なエミュレーションロジック（フェッチ、デコード、実行、タイマー）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8インタプリタ。
    レジスタ、メモリ、キーパッド、ディスプレイを排他的に所有します。
    """
    # @intent:responsibility Chip8Cpuを初期化します。
    # @intent:pre-condition memoryにはフォントとROMがロード済みであること。
    def __init__(self, memory: Memory, keypad: Optional[Keypad] = None,
                 display: Optional[Display] = None, rng: Optional[random.Random] = None):
        super().__init__(memory)
        self._registers = Registers(self._state)
        self._keypad = keypad if keypad is not None else Keypad()
        self._display = display if display is not None else Display()
        self._rng = rng if rng is not None else random.Random()

    # @intent:responsibility CHIP-8の初期状態(PC=0x200、その他ゼロ)を生成します。
    def _create_initial_state(self) -> Chip8State:
        return Chip8State(pc=ROM_ADDR)

    # @intent:responsibility レジスタに加えて画面とキー状態も初期化します。
    def reset(self) -> None:
        super().reset()
        self._registers = Registers(self._state)
        self._display.clear()
        self._keypad.release_all()

    @property
    def registers(self) -> Registers:
        return self._registers

    @property
    def keypad(self) -> Keypad:
        return self._keypad

    @property
    def display(self) -> Display:
        return self._display

    @property
    def rng(self) -> random.Random:
        return self._rng

    # @intent:responsibility PCから2バイトをビッグエンディアンで読み出し、直ちにPCを2進めます。
    def _fetch(self) -> int:
        pc = self._registers.pc
        instruction = (self._memory.read_byte(pc) << 8) | self._memory.read_byte(pc + 1)
        self._registers.increment_pc()
        return instruction

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self)

    # @intent:responsibility 60Hz周期で呼ばれ、DT/STを1ずつ減らします。
    def tick_timers(self) -> None:
        """
        0でないタイマーを1減らします。
        STが0になった時点を観測可能にするためログを出します（音は鳴らしません）。
        """
        regs = self._registers
        if regs.delay_timer > 0:
            regs.delay_timer = regs.delay_timer - 1
        if regs.sound_timer > 0:
            regs.sound_timer = regs.sound_timer - 1
            if regs.sound_timer == 0:
                logger.info("BEEP! (sound timer expired)")

    @property
    def sound_active(self) -> bool:
        return self._registers.sound_timer > 0

    # @intent:responsibility 状態レポート用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        regs = {f"V{n:X}": value for n, value in enumerate(s.v)}
        regs.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.dt, "ST": s.st})
        return regs

    # @intent:responsibility 状態レポートのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{n:X}", 8) for n in range(16)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        return disassembler.disassemble(self._memory, start_addr, length)
