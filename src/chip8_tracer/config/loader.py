import yaml
from typing import Dict, Any, Optional

from chip8_tracer.common.errors import ConfigError
from .models import EmulatorConfig, DEFAULT_KEY_MAP

class ConfigLoader:
    def load_from_file(self, path: str) -> EmulatorConfig:
        with open(path, 'r') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Malformed YAML in {path}: {e}") from e
        return self._parse_config({} if data is None else data)

    def _parse_config(self, data: Dict[str, Any]) -> EmulatorConfig:
        if not isinstance(data, dict):
            raise ConfigError("Configuration root must be a mapping.")
        defaults = EmulatorConfig()

        # Parse Key Map (未指定のキーは既定値のまま)
        raw_key_map = data.get("key_map") or {}
        if not isinstance(raw_key_map, dict):
            raise ConfigError("key_map must be a mapping of host key names to CHIP-8 keys.")
        key_map = dict(DEFAULT_KEY_MAP)
        for host_key, chip8_key in raw_key_map.items():
            index = self._parse_int(chip8_key)
            if not 0 <= index <= 0xF:
                raise ConfigError(f"Key map entry {host_key!r} -> {chip8_key!r} is not a CHIP-8 key (0x0-0xF).")
            key_map[str(host_key).upper()] = index

        raw_breakpoints = data.get("breakpoints") or []
        if not isinstance(raw_breakpoints, list):
            raise ConfigError("breakpoints must be a list of addresses.")
        breakpoints = [self._parse_int(addr) for addr in raw_breakpoints]

        config = EmulatorConfig(
            scale=self._parse_int(data.get("scale", defaults.scale)),
            cycles_per_second=self._parse_int(data.get("cycles_per_second", defaults.cycles_per_second)),
            timer_hz=self._parse_int(data.get("timer_hz", defaults.timer_hz)),
            font_path=self._parse_path(data.get("font_path", defaults.font_path), "font_path", optional=True),
            dump_path=self._parse_path(data.get("dump_path", defaults.dump_path), "dump_path"),
            history_size=self._parse_int(data.get("history_size", defaults.history_size)),
            breakpoints=breakpoints,
            key_map=key_map,
            quit_key=str(data.get("quit_key", defaults.quit_key)),
            step_key=str(data.get("step_key", defaults.step_key)),
            dump_key=str(data.get("dump_key", defaults.dump_key)),
            foreground=data.get("foreground", defaults.foreground),
            background=data.get("background", defaults.background),
        )
        for name in ("scale", "cycles_per_second", "timer_hz", "history_size"):
            if getattr(config, name) <= 0:
                raise ConfigError(f"{name} must be a positive integer.")
        return config

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ConfigError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                if value.lower().startswith("0x"):
                    return int(value, 16)
                return int(value)
            except ValueError:
                pass
        raise ConfigError(f"Invalid integer format: {value}")

    # @intent:utility_function ファイルパスの値を検証します。整数はファイル記述子として扱われるため拒否します。
    def _parse_path(self, value: Any, name: str, optional: bool = False) -> Optional[str]:
        if value is None and optional:
            return None
        if not isinstance(value, str) or not value:
            raise ConfigError(f"{name} must be a non-empty string path.")
        return value
