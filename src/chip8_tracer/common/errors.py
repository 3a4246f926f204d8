"""
エラー分類を定義するモジュール。

VMの整合性が失われる致命的エラー（VmFatalError）と、
起動時の設定・ファイル不備を表すエラーを区別できるようにします。
"""


class Chip8Error(Exception):
    """
    本パッケージが送出する全ての例外の基底クラス。
    """


# @intent:responsibility 実行を継続できないVM整合性エラーの基底クラスです。
# @intent:rationale 呼び出し元（テスト、デバッガ、UI）が通常の制御フローと致命的エラーを区別できるようにします。
class VmFatalError(Chip8Error):
    """
    発生した時点でエミュレーションを中断し、VM状態をダンプすべきエラー。
    """


class AddressOutOfRange(VmFatalError, IndexError):
    """
    4096バイトのアドレス空間外へのアクセス。
    """
    def __init__(self, address: int, size: int = 4096):
        super().__init__(f"Address {address:#06x} out of range for memory of size {size}.")
        self.address = address


class StackOverflow(VmFatalError):
    """
    スタック深さ16を超えるサブルーチン呼び出し。
    """
    def __init__(self, depth: int):
        super().__init__(f"Stack overflow: call depth exceeds {depth} entries.")
        self.depth = depth


class StackUnderflow(VmFatalError):
    """
    空のスタックからのリターン。
    """
    def __init__(self):
        super().__init__("Stack underflow: RET executed with an empty call stack.")


class IllegalOpcode(VmFatalError):
    """
    デコードできない命令（未定義のサブオペコードを含む）。
    """
    def __init__(self, instruction: int):
        super().__init__(f"Illegal opcode: {instruction:#06x}")
        self.instruction = instruction


class InvalidKey(VmFatalError, IndexError):
    """
    0x0-0xFの範囲外のキー番号。
    """
    def __init__(self, key: int):
        super().__init__(f"Key index {key:#04x} is outside the 16-key pad.")
        self.key = key


class LoadOutOfBounds(VmFatalError):
    """
    ROM/フォントイメージがアドレス空間に収まらない。
    """
    def __init__(self, offset: int, length: int, size: int = 4096):
        super().__init__(
            f"Image of {length} bytes at {offset:#05x} exceeds memory of size {size} "
            f"(max {size - offset} bytes at this offset)."
        )
        self.offset = offset
        self.length = length


class FontSizeError(Chip8Error, ValueError):
    """
    フォントイメージが80バイトではない。
    """


class ConfigError(Chip8Error, ValueError):
    """
    設定ファイルの内容が不正。
    """
