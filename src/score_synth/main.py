import argparse
import logging
from typing import Any

from score_synth.configuration import (
    envelope_settings_from_config,
    get_default_config,
    load_config_file,
    save_config_file,
)
from score_synth.envelope import DEFAULT_ENVELOPE, EnvelopeSettings
from score_synth.errors import InvalidChordError, InvalidNoteError, ScoreError
from score_synth.mixing import SAMPLE_RATE
from score_synth.waveforms import WAVEFORM_KINDS

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _init_logging(verbose: bool) -> None:
    if logging.getLogger().handlers:
        return
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


def _load_song(score_path: str | None, demo: str | None):
    from score_synth.demo_songs import DEMO_SONGS
    from score_synth.score_io import load_song_json

    if bool(score_path) == bool(demo):
        raise ValueError("Provide exactly one of score_path or demo.")
    if score_path:
        return load_song_json(score_path)
    try:
        return DEMO_SONGS[demo]()
    except KeyError:
        raise ValueError(f"Unknown demo song: {demo!r}") from None


def render_score_to_wav(
    score_path: str | None,
    demo: str | None,
    output_wav: str,
    waveform: str,
    envelope: EnvelopeSettings = DEFAULT_ENVELOPE,
) -> int:
    from score_synth.audio_output import write_wav
    from score_synth.structure import render

    try:
        song = _load_song(score_path=score_path, demo=demo)
        samples = render(song, waveform_kind=waveform, envelope=envelope)
    except (ScoreError, ValueError, OSError) as exc:
        print(f"Invalid score: {exc}")
        return 3
    try:
        out = write_wav(output_wav, samples)
    except OSError as exc:
        print(f"Could not write {output_wav}: {exc}")
        return 5
    print(f"Rendered {len(samples)} samples ({len(samples) / SAMPLE_RATE:.2f}s) with {waveform} waveform")
    print(f"Wrote audio to {out}")
    return 0


def play_score_audio(
    score_path: str | None,
    demo: str | None,
    waveform: str,
    tail_seconds: float,
    output_wav: str | None,
    no_playback: bool,
    envelope: EnvelopeSettings = DEFAULT_ENVELOPE,
) -> int:
    from score_synth.audio_output import play_samples, write_wav
    from score_synth.structure import render

    try:
        song = _load_song(score_path=score_path, demo=demo)
        samples = render(song, waveform_kind=waveform, envelope=envelope)
    except (ScoreError, ValueError, OSError) as exc:
        print(f"Invalid score: {exc}")
        return 3

    if output_wav:
        try:
            out = write_wav(output_wav, samples)
        except OSError as exc:
            print(f"Could not write {output_wav}: {exc}")
            return 5
        print(f"Wrote audio to {out}")
    if no_playback:
        return 0

    print(f"Playing {len(samples) / SAMPLE_RATE:.2f}s of audio...")
    try:
        play_samples(samples, tail_seconds=tail_seconds)
    except ImportError:
        print("sounddevice is not installed. Install it to enable playback.")
        return 4
    except Exception as exc:  # PortAudioError does not share a narrower base.
        print(f"Audio playback failed: {exc}")
        return 4
    return 0


def probe_notes(notes: list[str]) -> int:
    from score_synth.pitch_table import split_note_name, resolve_frequency

    print("note,octave,frequency_hz,status")
    code = 0
    for token in notes:
        try:
            name, octave = split_note_name(token)
            freq = resolve_frequency(name, octave)
        except InvalidNoteError:
            code = 2
            print(f"{token},,,invalid")
            continue
        print(f"{name},{octave},{freq:.2f},ok")
    return code


def probe_chord(root: str, quality: str, octave: int) -> int:
    from score_synth.chord_table import chord_frequencies

    try:
        freqs = chord_frequencies(root, quality, octave)
    except InvalidChordError as exc:
        print(str(exc))
        return 2
    print("tone,frequency_hz")
    for i, freq in enumerate(freqs):
        print(f"{i},{freq:.2f}")
    return 0


def _add_source_args(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--score", type=str, help="Input JSON score path.")
    source.add_argument("--demo", type=str, help="Name of a built-in demo song (e.g. 'mary').")
    parser.add_argument(
        "--waveform",
        type=str,
        choices=WAVEFORM_KINDS,
        default=None,
        help="Oscillator shape (default from config: sine).",
    )
    parser.add_argument("--config", type=str, default=None, help="JSON config file to load defaults from.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Symbolic score synthesizer")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command")

    render = subparsers.add_parser("render", help="Render a score to a WAV file")
    _add_source_args(render)
    render.add_argument("--output", type=str, required=True, help="Output WAV path.")
    render.add_argument(
        "--save-config",
        type=str,
        default=None,
        help="Write the effective config to this path before rendering.",
    )

    play = subparsers.add_parser("play", help="Render a score and play it on the default output device")
    _add_source_args(play)
    play.add_argument(
        "--tail-seconds",
        type=float,
        default=None,
        help="Silence appended after the song during playback (default: 0.0).",
    )
    play.add_argument("--output-wav", type=str, default=None, help="Also write the rendered audio to this WAV path.")
    play.add_argument(
        "--no-playback",
        action="store_true",
        default=None,
        help="Render (and optionally write) without opening an audio device.",
    )

    probe = subparsers.add_parser("probe", help="Print table frequencies for notes")
    probe.add_argument(
        "--note",
        dest="notes",
        type=str,
        action="append",
        required=True,
        help="Note name with octave, e.g. A4 or C#3. Pass multiple --note values to probe several.",
    )

    chord = subparsers.add_parser("chord", help="Print the frequencies of a chord")
    chord.add_argument("--root", type=str, required=True, help="Root pitch name, e.g. C or F#.")
    chord.add_argument("--quality", type=str, required=True, help="Chord quality, e.g. Major, m7, 13sus4.")
    chord.add_argument("--octave", type=int, default=4, help="Root octave in [0,8] (default: 4).")
    return parser


def _resolve_config(parser: argparse.ArgumentParser, args: argparse.Namespace) -> dict[str, Any]:
    if args.config is None:
        return get_default_config()
    try:
        return load_config_file(args.config)
    except (OSError, ValueError) as exc:
        parser.error(f"Could not load config {args.config}: {exc}")


def _envelope_or_error(parser: argparse.ArgumentParser, config: dict[str, Any]) -> EnvelopeSettings:
    try:
        return envelope_settings_from_config(config)
    except (TypeError, ValueError) as exc:
        parser.error(f"Invalid envelope config: {exc}")


def _validate_waveform(parser: argparse.ArgumentParser, waveform: str) -> None:
    if waveform not in WAVEFORM_KINDS:
        parser.error(f"waveform must be one of {', '.join(WAVEFORM_KINDS)}.")


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _init_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        raise SystemExit(2)

    if args.command == "probe":
        raise SystemExit(probe_notes(notes=args.notes))

    if args.command == "chord":
        if not (0 <= args.octave <= 8):
            parser.error("--octave must be in [0,8].")
        raise SystemExit(probe_chord(root=args.root, quality=args.quality, octave=args.octave))

    config = _resolve_config(parser, args)
    envelope = _envelope_or_error(parser, config)

    if args.command == "render":
        section = config["render"]
        waveform = args.waveform if args.waveform is not None else section["waveform"]
        _validate_waveform(parser, waveform)
        if args.save_config:
            config["render"]["waveform"] = waveform
            print(f"Saved config to {save_config_file(args.save_config, config)}")
        raise SystemExit(
            render_score_to_wav(
                score_path=args.score,
                demo=args.demo,
                output_wav=args.output,
                waveform=waveform,
                envelope=envelope,
            )
        )

    if args.command == "play":
        section = config["play"]
        waveform = args.waveform if args.waveform is not None else section["waveform"]
        tail_seconds = args.tail_seconds if args.tail_seconds is not None else float(section["tail_seconds"])
        no_playback = args.no_playback if args.no_playback is not None else bool(section["no_playback"])
        _validate_waveform(parser, waveform)
        if tail_seconds < 0:
            parser.error("--tail-seconds must be >= 0.")
        raise SystemExit(
            play_score_audio(
                score_path=args.score,
                demo=args.demo,
                waveform=waveform,
                tail_seconds=tail_seconds,
                output_wav=args.output_wav,
                no_playback=no_playback,
                envelope=envelope,
            )
        )

    parser.error(f"Unsupported command: {args.command}")


if __name__ == "__main__":
    main()
