from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Any

from score_synth.envelope import EnvelopeSettings

DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
    "envelope": {
        "attack_s": 0.02,
        "decay_s": 0.05,
        "sustain_level": 0.7,
        "release_s": 0.05,
    },
    "render": {
        "waveform": "sine",
    },
    "play": {
        "waveform": "sine",
        "tail_seconds": 0.0,
        "no_playback": False,
    },
}


def get_default_config() -> dict[str, dict[str, Any]]:
    return deepcopy(DEFAULT_CONFIG)


def _deep_merge_dict(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    out = deepcopy(base)
    for key, value in overlay.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _deep_merge_dict(out[key], value)
        else:
            out[key] = value
    return out


def load_config_file(path: str | Path) -> dict[str, dict[str, Any]]:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("Config root must be a JSON object.")
    return _deep_merge_dict(get_default_config(), payload)


def save_config_file(path: str | Path, config: dict[str, Any]) -> Path:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(config, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return output


def envelope_settings_from_config(config: dict[str, Any]) -> EnvelopeSettings:
    section = config.get("envelope", {})
    defaults = DEFAULT_CONFIG["envelope"]
    return EnvelopeSettings(
        attack_s=float(section.get("attack_s", defaults["attack_s"])),
        decay_s=float(section.get("decay_s", defaults["decay_s"])),
        sustain_level=float(section.get("sustain_level", defaults["sustain_level"])),
        release_s=float(section.get("release_s", defaults["release_s"])),
    )
