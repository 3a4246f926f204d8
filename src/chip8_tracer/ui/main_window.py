# src/chip8_tracer/ui/main_window.py
"""
メインウィンドウの実装。
フレームバッファ表示を保持し、QTimerから制御ループを駆動します。
"""
import logging
from typing import Optional

from PySide6.QtWidgets import QMainWindow
from PySide6.QtGui import QCloseEvent
from PySide6.QtCore import QTimer

from chip8_tracer.common.errors import VmFatalError
from chip8_tracer.config.models import EmulatorConfig
from chip8_tracer.debugger.debugger import Debugger
from chip8_tracer.machine import Chip8Machine
from .screen import FramebufferView, QtInputSource, QtPresenter

logger = logging.getLogger(__name__)

# @intent:responsibility アプリケーションのメインウィンドウを定義し、エミュレーションループをイベントループへ組み込みます。
class MainWindow(QMainWindow):
    """
    アプリケーションのメインウィンドウクラス。
    """
    def __init__(self, debugger: Debugger, config: EmulatorConfig, debug: bool = False, parent=None):
        super(MainWindow, self).__init__(parent)
        self.setWindowTitle("CHIP-8 Tracer" + (" [debug]" if debug else ""))

        self._input = QtInputSource()
        self.view = FramebufferView(
            self._input, config.key_map,
            quit_key=config.quit_key, step_key=config.step_key, dump_key=config.dump_key,
            scale=config.scale, foreground=config.foreground, background=config.background
        )
        self.setCentralWidget(self.view)

        self.machine = Chip8Machine(
            debugger.cpu, QtPresenter(self.view), self._input,
            debugger=debugger, debug=debug,
            timer_hz=config.timer_hz, dump_path=config.dump_path
        )
        self.exit_code = 0
        self.fatal_error: Optional[VmFatalError] = None

        # @intent:rationale 1回のタイムアウトで timer_hz あたりの命令数をまとめて実行し、指定の命令レートに近づけます。
        self._batch = max(1, config.cycles_per_second // config.timer_hz)
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._run_batch)
        self._timer.start(max(1, 1000 // config.timer_hz))

    # @intent:responsibility 1バッチ分ループを反復します。終了要求・致命的エラーでウィンドウを閉じます。
    def _run_batch(self):
        try:
            for _ in range(self._batch):
                if not self.machine.iterate():
                    self.close()
                    return
        except VmFatalError as e:
            self.fatal_error = e
            self.exit_code = 1
            logger.error("Fatal VM error: %s\n%s", e, self.machine.debugger.format_state())
            self.close()

    def closeEvent(self, event: QCloseEvent):
        self._timer.stop()
        self.machine.stop()
        super().closeEvent(event)
