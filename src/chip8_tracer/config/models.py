from dataclasses import dataclass, field
from typing import Dict, List, Optional

# @intent:constant ホスト側キー配置(1234/QWER/ASDF/ZXCV)からCHIP-8キーパッドへの既定マッピング。
DEFAULT_KEY_MAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class EmulatorConfig:
    scale: int = 10
    cycles_per_second: int = 700
    timer_hz: int = 60
    font_path: Optional[str] = None  # Noneなら組み込みフォント
    dump_path: str = "memdump.dmp"
    history_size: int = 64
    breakpoints: List[int] = field(default_factory=list)
    key_map: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEY_MAP))
    quit_key: str = "Escape"
    step_key: str = "K"
    dump_key: str = "M"
    foreground: str = "#FFFFFF"
    background: str = "#000000"
