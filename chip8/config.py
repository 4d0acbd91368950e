"""Interpreter configuration: cadences and behavioural quirks."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
import json
import os
from pathlib import Path
from typing import Optional

from .constants import DEFAULT_CPU_HZ, RENDER_HZ, TIMER_HZ


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    normalized = raw.strip().casefold()
    return normalized not in {"0", "false", "off", ""}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw, 0)


@dataclass(frozen=True)
class Quirks:
    """Behaviours that differ between historical interpreters.

    ``shift_uses_vy``: 8xy6/8xyE shift Vy into Vx (legacy) instead of
    shifting Vx in place.
    ``memory_increments_index``: Fx55/Fx65 leave I pointing past the copied
    range.
    ``wrap_sprites``: sprite columns past the right edge wrap to column 0
    instead of being clipped.
    ``logic_resets_flag``: 8xy1/8xy2/8xy3 clear VF.
    """

    shift_uses_vy: bool = True
    memory_increments_index: bool = True
    wrap_sprites: bool = True
    logic_resets_flag: bool = True

    @classmethod
    def from_env(cls, base: Optional["Quirks"] = None) -> "Quirks":
        base = base or cls()
        return cls(
            shift_uses_vy=_env_flag("CHIP8_SHIFT_USES_VY", base.shift_uses_vy),
            memory_increments_index=_env_flag(
                "CHIP8_MEMORY_INCREMENTS_INDEX", base.memory_increments_index
            ),
            wrap_sprites=_env_flag("CHIP8_WRAP_SPRITES", base.wrap_sprites),
            logic_resets_flag=_env_flag(
                "CHIP8_LOGIC_RESETS_FLAG", base.logic_resets_flag
            ),
        )


@dataclass
class MachineConfig:
    """Interpreter configuration."""

    cpu_hz: int = DEFAULT_CPU_HZ
    timer_hz: int = TIMER_HZ
    render_hz: int = RENDER_HZ
    scale: int = 10
    seed: Optional[int] = None
    trace: bool = False
    quirks: Quirks = field(default_factory=Quirks)

    def __post_init__(self):
        for name in ("cpu_hz", "timer_hz", "render_hz", "scale"):
            if int(getattr(self, name)) <= 0:
                raise ValueError(f"{name} must be positive")

    def to_dict(self) -> dict:
        data = asdict(self)
        data["quirks"] = asdict(self.quirks)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "MachineConfig":
        quirks = Quirks(**data.get("quirks", {}))
        return cls(
            cpu_hz=int(data.get("cpu_hz", DEFAULT_CPU_HZ)),
            timer_hz=int(data.get("timer_hz", TIMER_HZ)),
            render_hz=int(data.get("render_hz", RENDER_HZ)),
            scale=int(data.get("scale", 10)),
            seed=data.get("seed"),
            trace=bool(data.get("trace", False)),
            quirks=quirks,
        )

    def save(self, path: str | Path) -> None:
        """Save configuration to JSON file."""
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str | Path) -> "MachineConfig":
        """Load configuration from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, base: Optional["MachineConfig"] = None) -> "MachineConfig":
        """Apply ``CHIP8_*`` environment overrides on top of ``base``."""
        base = base or cls()
        return replace(
            base,
            cpu_hz=_env_int("CHIP8_CPU_HZ", base.cpu_hz),
            trace=_env_flag("CHIP8_TRACE", base.trace),
            quirks=Quirks.from_env(base.quirks),
        )


__all__ = ["MachineConfig", "Quirks"]
