# src/chip8_tracer/ui/screen.py
"""
フレームバッファ表示ウィジェットと、Qtのイベントを制御ループへ橋渡しするアダプタ。
"""
from typing import Dict, List, Optional

from PySide6.QtWidgets import QWidget
from PySide6.QtCore import Qt, QSize
from PySide6.QtGui import QPainter, QColor, QKeyEvent, QPaintEvent

from chip8_tracer.common.errors import ConfigError
from chip8_tracer.common.types import Framebuffer, KeyMap
from chip8_tracer.config.models import EmulatorConfig
from chip8_tracer.machine import InputEvent, InputEventKind, InputSource, Presenter
from chip8_tracer.peripherals.display import WIDTH, HEIGHT

# @intent:utility_function Qtのキー定数/整数を比較可能な整数へ正規化します。
def _key_code(key) -> int:
    return key.value if hasattr(key, "value") else int(key)

# @intent:utility_function "Q", "1", "Escape" などのキー名をQtのキーコードへ変換します。
def resolve_key(name: str) -> int:
    key = getattr(Qt.Key, f"Key_{name}", None)
    if key is None:
        key = getattr(Qt.Key, f"Key_{name.upper()}", None)
    if key is None:
        raise ConfigError(f"Unknown host key name: {name!r}")
    return _key_code(key)

# @intent:responsibility 設定中の全てのホストキー名がQtのキーとして解決できることを確認します。
# @intent:post-condition 解決できない名前があればConfigErrorを送出します。
def check_host_keys(config: EmulatorConfig) -> None:
    for name in [*config.key_map, config.quit_key, config.step_key, config.dump_key]:
        resolve_key(name)

# @intent:responsibility ウィジェットが受け取ったキー操作を溜め、ポーリング時にまとめて返します。
class QtInputSource(InputSource):
    def __init__(self):
        self._queue: List[InputEvent] = []

    def push(self, event: InputEvent) -> None:
        self._queue.append(event)

    def poll(self) -> List[InputEvent]:
        events = self._queue
        self._queue = []
        return events

# @intent:responsibility 64x32のフレームバッファを拡大表示し、キー操作をInputSourceへ渡します。
class FramebufferView(QWidget):
    """
    CHIP-8の画面を表示するウィジェット。
    """
    def __init__(self, input_source: QtInputSource, key_map: KeyMap,
                 quit_key: str = "Escape", step_key: str = "K", dump_key: str = "M",
                 scale: int = 10, foreground: str = "#FFFFFF", background: str = "#000000",
                 parent=None):
        super().__init__(parent)
        self._input = input_source
        self._scale = scale
        self._fg = QColor(foreground)
        self._bg = QColor(background)
        self._framebuffer: Optional[Framebuffer] = None
        self._keypad_codes: Dict[int, int] = {resolve_key(name): index for name, index in key_map.items()}
        self._control_codes: Dict[int, InputEventKind] = {
            resolve_key(quit_key): InputEventKind.QUIT,
            resolve_key(step_key): InputEventKind.STEP,
            resolve_key(dump_key): InputEventKind.DUMP,
        }
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setFixedSize(self.sizeHint())

    def sizeHint(self) -> QSize:
        return QSize(WIDTH * self._scale, HEIGHT * self._scale)

    def framebuffer(self) -> Optional[Framebuffer]:
        return self._framebuffer

    # @intent:responsibility 新しいフレームバッファを保持し、再描画を要求します。
    def set_framebuffer(self, framebuffer: Framebuffer) -> None:
        self._framebuffer = framebuffer
        self.update()

    def paintEvent(self, event: QPaintEvent):
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._bg)
        if self._framebuffer is not None:
            s = self._scale
            for y, line in enumerate(self._framebuffer):
                for x, lit in enumerate(line):
                    if lit:
                        painter.fillRect(x * s, y * s, s, s, self._fg)
        painter.end()

    # @intent:responsibility キー押下をキーパッド遷移または制御要求へ変換します。
    def keyPressEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            return
        code = _key_code(event.key())
        if code in self._keypad_codes:
            self._input.push(InputEvent(InputEventKind.KEY, self._keypad_codes[code], True))
        elif code in self._control_codes:
            self._input.push(InputEvent(self._control_codes[code]))
        else:
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent):
        if event.isAutoRepeat():
            return
        code = _key_code(event.key())
        if code in self._keypad_codes:
            self._input.push(InputEvent(InputEventKind.KEY, self._keypad_codes[code], False))
        else:
            super().keyReleaseEvent(event)

# @intent:responsibility 制御ループからの提示要求をウィジェットへ転送します。
class QtPresenter(Presenter):
    def __init__(self, view: FramebufferView):
        self._view = view

    def present(self, framebuffer: Framebuffer) -> None:
        self._view.set_framebuffer(framebuffer)
