"""
Music Player - plays a track with pygame.mixer and reports its position
"""

import logging
from pathlib import Path

import numpy as np
import pygame

from game.audio_link import AudioLink
from game.beat_clock import AudioSignal
from utils.constants import (
    BEAT_SOUND_DURATION, BEAT_SOUND_FREQUENCY, AUDIO_VOLUME, AUDIO_SAMPLE_RATE,
    BPM_MIN, BPM_MAX
)
from utils.helpers import clamp

logger = logging.getLogger(__name__)


class MusicPlayer(AudioLink):
    """
    Track playback through pygame.mixer.music

    pygame.mixer cannot resample a playing track, so a playback rate
    other than 1.0 is only recorded; the reported signal carries that
    rate and the beat clock then falls back to the wall clock.
    """
    def __init__(self, path=None, bpm=None):
        """
        Args:
            path: Track file, or None for beat sounds only
            bpm: Tempo of the track (clamped to the supported range)
        """
        super().__init__()
        self.path = Path(path) if path else None
        self._bpm = clamp(int(bpm), BPM_MIN, BPM_MAX) if bpm else None
        self.loaded = False
        self.paused = False
        self.beat_sound = None
        self.enabled = self._init_mixer()
        if self.enabled:
            self.beat_sound = self._make_beat_sound()
            self._load_track()

    def _init_mixer(self):
        """Initialize pygame mixer; return False if unavailable"""
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=AUDIO_SAMPLE_RATE, size=-16, channels=1)
            return True
        except pygame.error as e:
            logger.warning("pygame mixer disabled: %s", e)
            return False

    def _load_track(self):
        if self.path is None:
            return
        if not self.path.is_file():
            logger.warning("Music file not found: %s", self.path)
            return
        try:
            pygame.mixer.music.load(str(self.path))
            pygame.mixer.music.set_volume(AUDIO_VOLUME)
            self.loaded = True
            logger.info("Loaded track %s at %s BPM", self.path.name, self.base_bpm)
        except pygame.error as e:
            logger.warning("Could not load %s: %s", self.path, e)

    def _make_beat_sound(self):
        """Short low sine beep with a linear fade-out"""
        rate, _, channels = pygame.mixer.get_init()
        t = np.linspace(0, BEAT_SOUND_DURATION, int(rate * BEAT_SOUND_DURATION), False)
        wave = np.sin(2 * np.pi * BEAT_SOUND_FREQUENCY * t) * np.linspace(1, 0, len(t))
        samples = (wave * 32767 * AUDIO_VOLUME).astype(np.int16)
        if channels > 1:
            samples = np.column_stack([samples] * channels)
        return pygame.sndarray.make_sound(np.ascontiguousarray(samples))

    @property
    def has_track(self):
        return self.loaded

    @property
    def base_bpm(self):
        return self._bpm or super().base_bpm

    def start(self):
        """Start the track from the beginning (looping)"""
        if not self.loaded:
            return
        pygame.mixer.music.play(loops=-1)
        self.paused = False

    def signal(self):
        if not self.loaded:
            return None
        pos_ms = pygame.mixer.music.get_pos()
        return AudioSignal(
            current_song_bpm=self.base_bpm,
            position_seconds=max(0, pos_ms) / 1000,
            is_playing=pygame.mixer.music.get_busy() and not self.paused,
            is_buffered=self.loaded,
            playback_rate=self.playback_rate,
        )

    def pause(self):
        if self.loaded and not self.paused:
            pygame.mixer.music.pause()
            self.paused = True

    def resume(self):
        if self.loaded and self.paused:
            pygame.mixer.music.unpause()
            self.paused = False

    def play_beat_sound(self):
        super().play_beat_sound()
        if self.beat_sound is not None:
            self.beat_sound.play()

    def stop(self):
        if self.loaded:
            pygame.mixer.music.stop()
