import os
import tomllib
from functools import cached_property, lru_cache
from pathlib import Path
from typing import Self

from pydantic import BaseModel, Field, computed_field, model_validator

VERSION = "0.0.1"
DEFAULT_BANNER = f"Kilo editor -- version {VERSION}"


class TerminalConfig(BaseModel):
    # seconds a read waits for input, VTIME has a resolution of 0.1s
    read_timeout: float = Field(default=0.1, ge=0.1, le=25.5)

    @property
    def vtime(self) -> int:
        return round(self.read_timeout * 10)


class ScreenConfig(BaseModel):
    filler: str = Field(default="~", min_length=1)
    banner: str = DEFAULT_BANNER
    buffer_capacity: int = Field(default=512, gt=0)


class LoggingConfig(BaseModel):
    file: Path | None = None
    level: str = "WARNING"


class KeybindingsConfig(BaseModel):
    quit: list[str] = ["ctrl+q"]
    cursor_up: list[str] = ["up"]
    cursor_down: list[str] = ["down"]
    cursor_left: list[str] = ["left"]
    cursor_right: list[str] = ["right"]

    @model_validator(mode="after")
    def check_conflicts(self) -> Self:
        build_keymap(self)
        return self


def build_keymap(keybindings: KeybindingsConfig) -> dict[str, str]:
    keymap: dict[str, str] = {}

    for command in KeybindingsConfig.model_fields:
        for key in getattr(keybindings, command):
            try:
                prev_command = keymap[key]
            except KeyError:
                pass
            else:
                raise ValueError(
                    f"conflicting commands for key {key!r}: {prev_command} and {command}"
                )
            keymap[key] = command

    return keymap


class Config(BaseModel):
    terminal: TerminalConfig = TerminalConfig()
    screen: ScreenConfig = ScreenConfig()
    logging: LoggingConfig = LoggingConfig()
    keybindings: KeybindingsConfig = KeybindingsConfig()

    @computed_field
    @cached_property
    def keymap(self) -> dict[str, str]:
        return build_keymap(self.keybindings)


def get_config_path() -> Path:
    try:
        xdg_config_home = Path(os.environ["XDG_CONFIG_HOME"])
    except KeyError:
        xdg_config_home = Path.home() / ".config"
    return xdg_config_home / "kilo" / "config.toml"


def load_config(config_path: Path) -> Config:
    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return Config()
    else:
        return Config.model_validate(data)


@lru_cache(1)
def get_config() -> Config:
    return load_config(get_config_path())
