# chip8_tracer/machine.py
"""
制御ループモジュール。

入力ポーリング → 1命令サイクル → 60Hzのタイマー減算 → 変更時のみ画面提示、
という1反復を協調的に繰り返します。状態は全てこのループが排他的に所有します。
"""
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.common.types import Framebuffer
from chip8_tracer.debugger.debugger import Debugger

logger = logging.getLogger(__name__)

# @intent:responsibility InputSourceが通知するイベントの種類を定義します。
class InputEventKind(Enum):
    KEY = "KEY"       # キーパッドの押下/解放
    QUIT = "QUIT"     # 終了要求
    STEP = "STEP"     # シングルステップ要求
    DUMP = "DUMP"     # メモリダンプ要求

@dataclass(frozen=True)
class InputEvent:
    kind: InputEventKind
    key: int = 0
    pressed: bool = False

# @intent:responsibility フレームバッファを画面へ提示する外部コラボレータのインターフェースです。
class Presenter(ABC):
    @abstractmethod
    def present(self, framebuffer: Framebuffer) -> None:
        pass

# @intent:responsibility ホストのイベントキューをポーリングする外部コラボレータのインターフェースです。
class InputSource(ABC):
    # @intent:post-condition ブロックしてはならない。イベントがなければ空リストを返す。
    @abstractmethod
    def poll(self) -> List[InputEvent]:
        pass

# @intent:responsibility CPUと周辺の入出力を結び、1反復ずつエミュレーションを進めます。
class Chip8Machine:
    """
    単一スレッドの協調ループ。
    debug=Trueの場合、STEPイベントを受け取るまで命令を実行せず、実行ごとにVM状態を表示します。
    """
    def __init__(self, cpu: Chip8Cpu, presenter: Presenter, input_source: InputSource,
                 debugger: Optional[Debugger] = None, debug: bool = False,
                 timer_hz: int = 60, dump_path: str = "memdump.dmp",
                 clock: Callable[[], float] = time.monotonic):
        self._cpu = cpu
        self._presenter = presenter
        self._input = input_source
        self._debugger = debugger if debugger is not None else Debugger(cpu)
        self._debug = debug
        self._timer_interval = 1.0 / timer_hz
        self._dump_path = dump_path
        self._clock = clock
        self._last_tick = clock()
        self._running = True

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    @property
    def debugger(self) -> Debugger:
        return self._debugger

    @property
    def debug(self) -> bool:
        return self._debug

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        self._running = False

    # @intent:responsibility InputSourceからのイベントをキーパッドと制御要求へ反映します。
    def _handle_input(self) -> None:
        for event in self._input.poll():
            if event.kind == InputEventKind.QUIT:
                self._running = False
            elif event.kind == InputEventKind.KEY:
                self._cpu.keypad.set(event.key, event.pressed)
            elif event.kind == InputEventKind.STEP:
                self._debugger.request_step()
            elif event.kind == InputEventKind.DUMP:
                self._dump_memory()

    # @intent:responsibility メモリイメージを書き出します。書き出せなくてもループは継続します。
    def _dump_memory(self) -> None:
        try:
            self._cpu.memory.dump(self._dump_path)
        except OSError as e:
            logger.error("Memory dump to %s failed: %s", self._dump_path, e)

    # @intent:responsibility 前回の減算から1/60秒以上経過していればタイマーを1回減算します。
    def _tick_timers(self) -> None:
        now = self._clock()
        if now - self._last_tick >= self._timer_interval:
            self._last_tick = now
            self._cpu.tick_timers()

    # @intent:responsibility ダーティな場合のみ画面を提示し、フラグを落とします。
    def _present(self) -> None:
        display = self._cpu.display
        if display.is_dirty():
            self._presenter.present(display.snapshot())
            display.mark_clean()

    # @intent:responsibility ループを1反復進めます。
    # @intent:return 終了要求を受け取った後はFalse。
    def iterate(self) -> bool:
        """
        命令実行中の致命的エラー(VmFatalError)は捕捉せず呼び出し元へ伝播します。
        """
        self._handle_input()
        if not self._running:
            return False

        if self._debug:
            if self._debugger.consume_step():
                self._debugger.step_instruction()
                print(self._debugger.format_state())
        elif self._debugger.step_and_check():
            logger.info("Breakpoint hit at PC: %#06x, entering single-step mode", self._cpu.get_state().pc)
            self._debug = True
            print(self._debugger.format_state())

        self._tick_timers()
        self._present()
        return self._running

    # @intent:responsibility 終了要求まで反復を続けます（ヘッドレス実行用）。
    def run(self) -> None:
        while self.iterate():
            pass
