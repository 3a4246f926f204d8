"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスなどを定義します。
"""
from typing import Dict, List, NamedTuple, Tuple

# @intent:data_structure フレームバッファの読み取り専用表現。行(y)ごとのタプルで、各要素が1ピクセル(x)。
# Display, Machine, UIなど複数のレイヤーで共通して使用されます。
Framebuffer = Tuple[Tuple[bool, ...], ...]

# @intent:data_structure ホスト側キー名からCHIP-8キー番号(0x0-0xF)へのマッピング。
KeyMap = Dict[str, int]

# @intent:data_structure 単一のレジスタの表示定義。状態レポートが動的に行を生成するために使用される。
class RegisterInfo(NamedTuple):
    name: str
    width: int  # ビット幅 (8 or 16)

# @intent:data_structure レジスタグループの表示定義。関連するレジスタ（例: "General", "Control"）をまとめる。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
