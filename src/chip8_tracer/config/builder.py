import random
from typing import Optional

from chip8_tracer.transport.memory import Memory
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.debugger.debugger import Debugger, BreakpointCondition, BreakpointConditionType
from chip8_tracer.loader.loader import RomLoader, FontLoader
from .models import EmulatorConfig

# @intent:responsibility 設定（Config）に基づいて、メモリ、CPU、デバッガを生成・接続し、フォントとROMをロードします。
class SystemBuilder:
    def build_system(self, config: EmulatorConfig, rom_path: Optional[str] = None,
                     rom_data: Optional[bytes] = None, rng: Optional[random.Random] = None) -> Debugger:
        """
        フォント → ROM の順にロードした状態のCPUを持つDebuggerを返します。
        ROMはファイルパスかバイト列のどちらかで指定します。
        """
        memory = Memory()

        FontLoader().load_font(config.font_path, memory)
        rom_loader = RomLoader()
        if rom_path is not None:
            rom_loader.load_rom(rom_path, memory)
        elif rom_data is not None:
            rom_loader.load_bytes(rom_data, memory)
        else:
            raise ValueError("Either rom_path or rom_data must be given.")

        cpu = Chip8Cpu(memory, rng=rng)
        debugger = Debugger(cpu, history_size=config.history_size)
        for address in config.breakpoints:
            debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=address))
        return debugger
