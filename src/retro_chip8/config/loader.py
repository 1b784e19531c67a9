import yaml
from typing import Any, Dict

from retro_chip8.common.constants import KEY_COUNT
from retro_chip8.common.errors import ConfigError
from .models import DEFAULT_KEY_MAP, DisplayConfig, EmulatorConfig, SoundConfig

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

class ConfigLoader:
    def load_from_file(self, path: str) -> EmulatorConfig:
        try:
            with open(path, 'r', encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        return self.parse(data or {})

    def parse(self, data: Dict[str, Any]) -> EmulatorConfig:
        if not isinstance(data, dict):
            raise ConfigError("Config root must be a mapping.")

        display_data = self._section(data, "display")
        display = DisplayConfig(
            scale=self._parse_int(display_data.get("scale", 10)),
            foreground=str(display_data.get("foreground", "#FFFFFF")),
            background=str(display_data.get("background", "#000000")),
        )
        if display.scale <= 0:
            raise ConfigError(f"display.scale must be positive: {display.scale}")

        sound_data = self._section(data, "sound")
        sound = SoundConfig(
            enabled=self._parse_bool(sound_data.get("enabled", True), "sound.enabled"),
            tone_hz=self._parse_int(sound_data.get("tone_hz", 440)),
            volume=self._parse_float(sound_data.get("volume", 0.25), "sound.volume"),
        )

        cycle_delay = self._parse_float(data.get("cycle_delay_ms", 10), "cycle_delay_ms")
        if cycle_delay < 0:
            raise ConfigError(f"cycle_delay_ms must not be negative: {cycle_delay}")

        timer_hz = self._parse_int(data.get("timer_hz", 60))
        if timer_hz <= 0:
            raise ConfigError(f"timer_hz must be positive: {timer_hz}")

        log_level = str(data.get("log_level", "WARNING")).upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(f"Unknown log_level: {log_level}")

        # key_map は既定の配列に対する差分として扱う
        key_map = dict(DEFAULT_KEY_MAP)
        for key, code in self._section(data, "key_map").items():
            value = self._parse_int(code)
            if not 0 <= value < KEY_COUNT:
                raise ConfigError(f"Key code for '{key}' is outside 0x0-0xF: {code}")
            key_map[str(key).lower()] = value

        rom_path = data.get("rom_path")
        return EmulatorConfig(
            rom_path=str(rom_path) if rom_path is not None else None,
            cycle_delay_ms=cycle_delay,
            timer_hz=timer_hz,
            sprite_wrap=self._parse_bool(data.get("sprite_wrap", True), "sprite_wrap"),
            display=display,
            sound=sound,
            key_map=key_map,
            log_level=log_level,
        )

    # @intent:utility_function 省略またはnullのセクションは空のマッピングとして扱います。
    def _section(self, data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name)
        if section is None:
            return {}
        if not isinstance(section, dict):
            raise ConfigError(f"{name} must be a mapping: {section!r}")
        return section

    def _parse_bool(self, value: Any, name: str) -> bool:
        if not isinstance(value, bool):
            raise ConfigError(f"{name} must be true or false: {value!r}")
        return value

    def _parse_float(self, value: Any, name: str) -> float:
        if isinstance(value, bool):
            raise ConfigError(f"{name} must be a number: {value!r}")
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{name} must be a number: {value!r}") from e

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
