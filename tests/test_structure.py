import unittest

import numpy as np

from score_synth.demo_songs import DEMO_SONGS, mary_had_a_little_lamb
from score_synth.envelope import EnvelopeSettings
from score_synth.errors import InvalidEventTypeError
from score_synth.events import Chord, Note
from score_synth.structure import Bar, Song, Track, render
from score_synth.waveforms import make_generator


def _single_note_song(pitch: str = "A", octave: int = 4, note_type: str = "qtr") -> Song:
    bar = Bar(key="C", time_signature=(4, 4))
    bar.add_note_or_chord(Note(pitch, octave, note_type))
    track = Track(key="C")
    track.add_bar(bar)
    song = Song(key="C", time_signature=(4, 4))
    song.add_track(track)
    return song


class TestBar(unittest.TestCase):
    def test_bar_rejects_non_events(self) -> None:
        bar = Bar()
        with self.assertRaises(InvalidEventTypeError):
            bar.add_note_or_chord("C4")  # type: ignore[arg-type]
        with self.assertRaises(InvalidEventTypeError):
            Bar(events=[Note("C", 4, "qtr"), 42])  # type: ignore[list-item]

    def test_bar_rejects_bad_time_signature(self) -> None:
        with self.assertRaises(ValueError):
            Bar(time_signature=(4, 0))
        with self.assertRaises(ValueError):
            Bar(time_signature=(None, 4))  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            Song(time_signature=(4.0, 4))  # type: ignore[arg-type]

    def test_render_rechecks_events_added_directly(self) -> None:
        bar = Bar(events=[Note("C", 4, "qtr")])
        bar.events.append("x")  # type: ignore[arg-type]
        with self.assertRaises(InvalidEventTypeError):
            bar.render(make_generator("sine"))

    def test_render_rechecks_bars_and_tracks_added_directly(self) -> None:
        track = Track(bars=[Bar(events=[Note("C", 4, "qtr")])])
        track.bars.append(Note("D", 4, "qtr"))  # type: ignore[arg-type]
        with self.assertRaises(InvalidEventTypeError):
            track.render(make_generator("sine"))
        song = Song()
        song.tracks.append(Bar())  # type: ignore[arg-type]
        with self.assertRaises(InvalidEventTypeError):
            render(song)

    def test_bar_concatenates_events(self) -> None:
        generator = make_generator("sine")
        events = [Note("C", 4, "qtr"), Chord("G", "7", "h", 3), Note.rest("eighth"), Note("E", 5, "sixteenth")]
        bar = Bar(events=events)
        wave = bar.render(generator)
        lengths = [len(e.render(generator)) for e in events]
        self.assertEqual(len(wave), sum(lengths))
        self.assertEqual(bar.num_samples, sum(lengths))
        rest_start = lengths[0] + lengths[1]
        self.assertTrue(np.all(wave[rest_start : rest_start + lengths[2]] == 0.0))

    def test_empty_bar_renders_empty(self) -> None:
        self.assertEqual(len(Bar().render(make_generator("sine"))), 0)


class TestTrack(unittest.TestCase):
    def test_track_rejects_non_bars(self) -> None:
        with self.assertRaises(InvalidEventTypeError):
            Track().add_bar(Note("C", 4, "qtr"))  # type: ignore[arg-type]

    def test_track_concatenates_bars(self) -> None:
        generator = make_generator("square")
        b1 = Bar(events=[Note("C", 4, "qtr")])
        b2 = Bar(events=[Note("D", 4, "h"), Note.rest("qtr")])
        track = Track(bars=[b1, b2])
        wave = track.render(generator)
        self.assertEqual(len(wave), 11025 + 22050 + 11025)
        np.testing.assert_array_equal(wave[:11025], b1.render(generator))
        self.assertAlmostEqual(track.duration_s, 1.0, places=12)


class TestSong(unittest.TestCase):
    def test_song_rejects_non_tracks(self) -> None:
        with self.assertRaises(InvalidEventTypeError):
            Song().add_track(Bar())  # type: ignore[arg-type]

    def test_song_length_is_longest_track(self) -> None:
        short = Track(bars=[Bar(events=[Note("C", 4, "qtr"), Note("D", 4, "qtr")])])
        long = Track(bars=[Bar(events=[Chord("C", "Major", "w", 3)])])
        song = Song(tracks=[short, long])
        wave = song.render(make_generator("sine"))
        self.assertEqual(len(wave), 44100)
        self.assertEqual(song.num_samples, 44100)

    def test_song_mixes_tracks_in_parallel(self) -> None:
        generator = make_generator("triangle")
        a = Track(bars=[Bar(events=[Note("C", 4, "qtr")])])
        b = Track(bars=[Bar(events=[Note("G", 4, "h")])])
        song_wave = Song(tracks=[a, b]).render(generator)
        expected = np.zeros(22050)
        expected[:11025] += a.render(generator)
        expected += b.render(generator)
        expected /= np.max(np.abs(expected))
        np.testing.assert_array_equal(song_wave, expected)

    def test_empty_song(self) -> None:
        self.assertEqual(len(render(Song())), 0)

    def test_single_quarter_a4_end_to_end(self) -> None:
        wave = render(_single_note_song(), "sine")
        self.assertEqual(len(wave), 11025)
        self.assertAlmostEqual(float(np.max(np.abs(wave))), 1.0, places=12)
        self.assertEqual(wave[0], 0.0)

    def test_render_is_bounded_for_every_waveform(self) -> None:
        song = mary_had_a_little_lamb()
        for kind in ("sine", "square", "sawtooth", "triangle"):
            wave = render(song, kind)
            self.assertLessEqual(float(np.max(np.abs(wave))), 1.0)
            self.assertFalse(np.any(np.isnan(wave)))

    def test_render_is_deterministic(self) -> None:
        song = mary_had_a_little_lamb()
        np.testing.assert_array_equal(render(song, "sawtooth"), render(song, "sawtooth"))

    def test_render_accepts_custom_envelope(self) -> None:
        wave = render(_single_note_song(), "sine", envelope=EnvelopeSettings(attack_s=0.0))
        self.assertEqual(len(wave), 11025)
        self.assertEqual(wave[0], 0.0)

    def test_render_rejects_unknown_waveform(self) -> None:
        with self.assertRaises(ValueError):
            render(_single_note_song(), "noise")


class TestDemoSongs(unittest.TestCase):
    def test_mary_layout(self) -> None:
        song = mary_had_a_little_lamb()
        self.assertEqual(len(song.tracks), 2)
        self.assertEqual([len(t.bars) for t in song.tracks], [4, 4])
        self.assertEqual(song.num_samples, 4 * 44100)
        self.assertIn("mary", DEMO_SONGS)


if __name__ == "__main__":
    unittest.main()
