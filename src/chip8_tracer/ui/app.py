# src/chip8_tracer/ui/app.py
"""
アプリケーションのエントリポイント。
コマンドライン引数を解釈し、システムを構築してメインウィンドウを起動します。
"""
import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from chip8_tracer.common.errors import Chip8Error
from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.builder import SystemBuilder
from chip8_tracer.config.models import EmulatorConfig
from .main_window import MainWindow
from .screen import check_host_keys

logger = logging.getLogger("chip8_tracer")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chip8-tracer", description="CHIP-8 interpreter and tracer")
    parser.add_argument('rom_path', help='Path to the CHIP-8 program (raw binary)')
    parser.add_argument('-d', '--debug', action='store_true',
                        help='Single-step mode: press the step key to run one instruction')
    parser.add_argument('--config', type=str, help='Path to a YAML configuration file')
    parser.add_argument('--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default='INFO', help='Logging level (DEBUG traces every instruction)')
    return parser

# @intent:responsibility アプリケーションを起動し、終了コードを返します。
def main(argv: Optional[List[str]] = None) -> int:
    """
    アプリケーションのメイン関数。
    起動時のファイル・設定エラーは説明付きで即座に終了コード1を返します。
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    try:
        config = ConfigLoader().load_from_file(args.config) if args.config else EmulatorConfig()
        check_host_keys(config)
        debugger = SystemBuilder().build_system(config, rom_path=args.rom_path)
    except (OSError, Chip8Error) as e:
        print(f"chip8-tracer: {e}", file=sys.stderr)
        return 1

    app = QApplication.instance() or QApplication(sys.argv[:1])
    main_win = MainWindow(debugger, config, debug=args.debug)
    main_win.show()
    app.exec()
    return main_win.exit_code

if __name__ == '__main__':
    sys.exit(main())
