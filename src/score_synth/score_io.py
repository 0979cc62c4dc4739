from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from score_synth.errors import InvalidEventTypeError
from score_synth.events import Chord, Note, PlayableEvent
from score_synth.structure import Bar, Song, Track

logger = logging.getLogger(__name__)


def _as_int(value: Any, name: str, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{where} {name} must be an integer.")
    return value


def _int_field(item: dict, key: str, default: int, where: str) -> int:
    return _as_int(item.get(key, default), key, where)


def _time_signature(raw: Any, where: str) -> tuple[int, int]:
    if raw is None:
        return (4, 4)
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ValueError(f"{where} time_signature must be a [beats, unit] pair.")
    return (_as_int(raw[0], "time_signature beats", where), _as_int(raw[1], "time_signature unit", where))


def event_from_dict(item: Any, where: str = "event") -> PlayableEvent:
    if not isinstance(item, dict):
        raise ValueError(f"{where} must be an object.")
    duration = str(item.get("duration", "quarter"))
    if item.get("rest"):
        return Note.rest(duration)
    if "chord" in item:
        if "root" not in item:
            raise ValueError(f"{where} chord requires a root.")
        return Chord(
            root=str(item["root"]),
            quality=str(item["chord"]),
            note_type=duration,
            octave=_int_field(item, "octave", 4, where),
        )
    if "note" in item:
        return Note(pitch=str(item["note"]), octave=_int_field(item, "octave", 4, where), note_type=duration)
    raise InvalidEventTypeError(f"{where} must be a note, rest or chord.")


def song_from_dict(payload: Any) -> Song:
    if not isinstance(payload, dict):
        raise ValueError("Score root must be a JSON object.")
    raw_tracks = payload.get("tracks", [])
    if not isinstance(raw_tracks, list):
        raise ValueError("Score tracks must be a list.")

    song_key = str(payload.get("key", "C"))
    song = Song(key=song_key, time_signature=_time_signature(payload.get("time_signature"), "Score"))
    for t_idx, raw_track in enumerate(raw_tracks):
        if not isinstance(raw_track, dict):
            raise ValueError(f"Track {t_idx} must be an object.")
        raw_bars = raw_track.get("bars", [])
        if not isinstance(raw_bars, list):
            raise ValueError(f"Track {t_idx} bars must be a list.")
        track = Track(key=str(raw_track.get("key", song_key)))
        for b_idx, raw_bar in enumerate(raw_bars):
            where = f"Track {t_idx} bar {b_idx}"
            if not isinstance(raw_bar, dict):
                raise ValueError(f"{where} must be an object.")
            raw_events = raw_bar.get("events", [])
            if not isinstance(raw_events, list):
                raise ValueError(f"{where} events must be a list.")
            bar = Bar(
                key=str(raw_bar.get("key", track.key)),
                time_signature=_time_signature(raw_bar.get("time_signature", list(song.time_signature)), where),
            )
            for e_idx, raw_event in enumerate(raw_events):
                bar.add_note_or_chord(event_from_dict(raw_event, where=f"{where} event {e_idx}"))
            track.add_bar(bar)
        song.add_track(track)
    return song


def load_song_json(path: str | Path) -> Song:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    song = song_from_dict(payload)
    logger.debug("Loaded score %s with %d tracks", path, len(song.tracks))
    return song
