# chip8_tracer/peripherals/display.py
"""
64x32のモノクロフレームバッファ。

スプライトのXOR合成と衝突検出、およびPresenterへ渡すためのダーティフラグを管理します。
"""
from typing import List, Sequence

from chip8_tracer.common.types import Framebuffer

WIDTH = 64
HEIGHT = 32

# @intent:responsibility フレームバッファの内容と変更有無(ダーティフラグ)を保持します。
class Display:
    """
    座標は常にx mod 64, y mod 32で折り返されます。
    """
    def __init__(self, width: int = WIDTH, height: int = HEIGHT):
        self.width = width
        self.height = height
        self._pixels: List[List[bool]] = [[False] * width for _ in range(height)]
        self._dirty = False

    # @intent:responsibility 全ピクセルを消去し、ダーティにします。
    def clear(self) -> None:
        self._pixels = [[False] * self.width for _ in range(self.height)]
        self._dirty = True

    # @intent:responsibility スプライトを(x0, y0)へXOR合成します。
    # @intent:post-condition 1→0へ遷移したピクセルが1つでもあればTrueを返します（衝突）。
    def draw_sprite(self, x0: int, y0: int, sprite: Sequence[int]) -> bool:
        """
        各バイトが1行、最上位ビットが左端のピクセルに対応します。
        はみ出した部分は反対側へ折り返して描画されます。
        """
        collision = False
        changed = False
        for row, byte in enumerate(sprite):
            y = (y0 + row) % self.height
            line = self._pixels[y]
            for bit in range(8):
                if not (byte >> (7 - bit)) & 1:
                    continue
                x = (x0 + bit) % self.width
                if line[x]:
                    collision = True
                line[x] = not line[x]
                changed = True
        if changed:
            self._dirty = True
        return collision

    def pixel(self, x: int, y: int) -> bool:
        return self._pixels[y % self.height][x % self.width]

    def is_dirty(self) -> bool:
        return self._dirty

    def mark_clean(self) -> None:
        self._dirty = False

    # @intent:responsibility Presenterへ渡すための読み取り専用コピーを返します。
    def snapshot(self) -> Framebuffer:
        return tuple(tuple(line) for line in self._pixels)
