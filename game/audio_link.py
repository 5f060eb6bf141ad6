"""
Audio link - the game's view of the music collaborator
"""

from utils.constants import INITIAL_BPM


class AudioLink:
    """
    Silent audio link with no track loaded

    The game state only talks to audio through these methods, so the
    beat clock falls back to wall-clock timing whenever has_track is
    False or signal() returns None.
    """
    def __init__(self):
        self.playback_rate = 1.0
        self.beat_sounds = 0

    @property
    def has_track(self):
        return False

    @property
    def base_bpm(self):
        return INITIAL_BPM

    def signal(self):
        """Current AudioSignal, or None without a track"""
        return None

    def set_playback_rate(self, rate):
        self.playback_rate = rate

    def pause(self):
        pass

    def resume(self):
        pass

    def play_beat_sound(self):
        self.beat_sounds += 1
