"""
Beat Clock - decides when a beat boundary has been crossed

Two timing sources are reconciled here. When a track is playing at
normal speed the beat follows the audio position; otherwise beats are
counted from the wall clock since the level started. Both modes share
a minimum spacing between beats so seeks and frame jitter cannot fire
two beats back to back.
"""

from dataclasses import dataclass

from utils.constants import (
    INITIAL_BPM, BEAT_TIMING_TOLERANCE, BEAT_SAFETY_MULTIPLIER,
    AUDIO_BEAT_PHASE_THRESHOLD
)


@dataclass(frozen=True)
class TimingConfig:
    """Tunable beat timing factors, as fractions of one beat"""
    tolerance: float = BEAT_TIMING_TOLERANCE
    safety_multiplier: float = BEAT_SAFETY_MULTIPLIER
    audio_phase_threshold: float = AUDIO_BEAT_PHASE_THRESHOLD

    @classmethod
    def from_dict(cls, raw):
        """Build from a settings dict, ignoring unknown keys"""
        if not isinstance(raw, dict):
            raw = {}
        defaults = cls()
        return cls(
            tolerance=float(raw.get("tolerance", defaults.tolerance)),
            safety_multiplier=float(raw.get("safety_multiplier", defaults.safety_multiplier)),
            audio_phase_threshold=float(raw.get("audio_phase_threshold", defaults.audio_phase_threshold)),
        )


@dataclass(frozen=True)
class AudioSignal:
    """Playback state of the current track, read once per frame"""
    current_song_bpm: float
    position_seconds: float
    is_playing: bool
    is_buffered: bool
    playback_rate: float = 1.0

    @property
    def in_normal_playback(self):
        return self.is_playing and self.is_buffered and self.playback_rate == 1.0


class BeatClock:
    """
    Beat detector for one level

    All timestamps are milliseconds from the same monotonic source.
    """
    def __init__(self, timing=None):
        self.timing = timing or TimingConfig()
        self.beat_length_ms = 60000 / INITIAL_BPM
        self.last_beat_ts = 0.0
        self.level_start_ts = 0.0
        self.expected_beat_index = 0

    def reset(self, now, bpm):
        """Restart beat counting at now with a new tempo"""
        self.beat_length_ms = 60000 / bpm
        self.last_beat_ts = now
        self.level_start_ts = now
        self.expected_beat_index = 0

    def shift(self, delta_ms):
        """Move both timing anchors forward (used after a pause)"""
        self.last_beat_ts += delta_ms
        self.level_start_ts += delta_ms

    @property
    def min_spacing_ms(self):
        return self.beat_length_ms * self.timing.tolerance

    def since_last_beat(self, now):
        return now - self.last_beat_ts

    def poll(self, now, audio=None):
        """
        Check whether a beat fires at now

        Args:
            now: Current time in ms
            audio: Optional AudioSignal for the loaded track

        Returns:
            bool: True if a beat fired (last_beat_ts is updated)
        """
        spaced = self.since_last_beat(now) >= self.min_spacing_ms

        if audio is not None and audio.in_normal_playback:
            song_ms = audio.position_seconds * 1000
            beat_index = int(song_ms // self.beat_length_ms)
            phase = song_ms - beat_index * self.beat_length_ms
            fired = phase >= self.beat_length_ms * self.timing.audio_phase_threshold and spaced
        else:
            beat_index = int((now - self.level_start_ts) // self.beat_length_ms)
            fired = beat_index > self.expected_beat_index and spaced
            if fired:
                self.expected_beat_index = beat_index

        if fired:
            self.last_beat_ts = now
        return fired

    def is_stalled(self, now):
        """True once the last beat is older than the safety threshold"""
        return self.since_last_beat(now) >= self.beat_length_ms * self.timing.safety_multiplier

    def __repr__(self):
        return f"BeatClock(beat={self.beat_length_ms:.1f}ms, index={self.expected_beat_index})"
