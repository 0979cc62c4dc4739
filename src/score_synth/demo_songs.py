from __future__ import annotations

from typing import Callable

from score_synth.events import Chord, Note
from score_synth.structure import Bar, Song, Track


def _melody_bar(*notes: tuple[str, str]) -> Bar:
    bar = Bar(key="C", time_signature=(4, 4))
    for pitch, note_type in notes:
        bar.add_note_or_chord(Note(pitch, 4, note_type))
    return bar


def _chord_bar(*chords: tuple[str, str, str]) -> Bar:
    bar = Bar(key="C", time_signature=(4, 4))
    for root, quality, note_type in chords:
        bar.add_note_or_chord(Chord(root, quality, note_type, 3))
    return bar


def mary_had_a_little_lamb() -> Song:
    """First phrase of the nursery tune in C major with a I-V7 accompaniment."""
    melody = Track(key="C")
    melody.add_bar(_melody_bar(("E", "qtr"), ("D", "qtr"), ("C", "qtr"), ("D", "qtr")))
    melody.add_bar(_melody_bar(("E", "qtr"), ("E", "qtr"), ("E", "h")))
    melody.add_bar(_melody_bar(("D", "qtr"), ("D", "qtr"), ("D", "h")))
    melody.add_bar(_melody_bar(("E", "qtr"), ("G", "qtr"), ("G", "h")))

    chords = Track(key="C")
    chords.add_bar(_chord_bar(("C", "Major", "h"), ("G", "7", "h")))
    chords.add_bar(_chord_bar(("C", "Major", "w")))
    chords.add_bar(_chord_bar(("G", "7", "w")))
    chords.add_bar(_chord_bar(("C", "Major", "w")))

    song = Song(key="C", time_signature=(4, 4))
    song.add_track(melody)
    song.add_track(chords)
    return song


DEMO_SONGS: dict[str, Callable[[], Song]] = {
    "mary": mary_had_a_little_lamb,
}
