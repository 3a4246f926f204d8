# chip8_tracer/peripherals/keypad.py
"""
16キーの入力ラッチ。
InputSourceから届いたキー遷移を保持し、インタプリタへ押下状態を提供します。
"""
from typing import List, Optional

from chip8_tracer.common.errors import InvalidKey

NUM_KEYS = 16

# @intent:responsibility 16個のキーの押下状態を保持するラッチです。振る舞いは持ちません。
class Keypad:
    def __init__(self):
        self._keys: List[bool] = [False] * NUM_KEYS

    def _check(self, index: int) -> None:
        if not 0 <= index < NUM_KEYS:
            raise InvalidKey(index)

    def set(self, index: int, pressed: bool) -> None:
        self._check(index)
        self._keys[index] = bool(pressed)

    def is_down(self, index: int) -> bool:
        self._check(index)
        return self._keys[index]

    # @intent:responsibility 押下中の最小のキー番号を返します。押されていなければNone。
    def first_pressed(self) -> Optional[int]:
        for index, down in enumerate(self._keys):
            if down:
                return index
        return None

    def release_all(self) -> None:
        self._keys = [False] * NUM_KEYS

    def states(self) -> List[bool]:
        return list(self._keys)
