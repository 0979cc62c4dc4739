import json
import tempfile
import unittest
from pathlib import Path

from score_synth.configuration import (
    envelope_settings_from_config,
    get_default_config,
    load_config_file,
    save_config_file,
)
from score_synth.envelope import DEFAULT_ENVELOPE, EnvelopeSettings


class TestConfiguration(unittest.TestCase):
    def test_defaults_are_copies(self) -> None:
        cfg = get_default_config()
        cfg["render"]["waveform"] = "square"
        self.assertEqual(get_default_config()["render"]["waveform"], "sine")

    def test_default_envelope_matches_settings(self) -> None:
        self.assertEqual(envelope_settings_from_config(get_default_config()), DEFAULT_ENVELOPE)

    def test_load_merges_over_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "cfg.json"
            p.write_text(json.dumps({"envelope": {"sustain_level": 0.5}, "play": {"waveform": "triangle"}}), encoding="utf-8")
            cfg = load_config_file(p)
        self.assertEqual(cfg["envelope"]["sustain_level"], 0.5)
        self.assertEqual(cfg["envelope"]["attack_s"], 0.02)
        self.assertEqual(cfg["play"]["waveform"], "triangle")
        self.assertEqual(cfg["play"]["tail_seconds"], 0.0)
        self.assertEqual(envelope_settings_from_config(cfg), EnvelopeSettings(sustain_level=0.5))

    def test_load_rejects_non_object_root(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "cfg.json"
            p.write_text("[1, 2]", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_config_file(p)

    def test_save_roundtrip(self) -> None:
        cfg = get_default_config()
        cfg["render"]["waveform"] = "sawtooth"
        with tempfile.TemporaryDirectory() as td:
            out = save_config_file(Path(td) / "sub" / "cfg.json", cfg)
            self.assertEqual(load_config_file(out), cfg)


if __name__ == "__main__":
    unittest.main()
