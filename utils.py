import logging

import numpy as np
import pygame

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100
VOLUME = 0.2

# Note sequences (Hz) for the end-of-game jingles
WIN_NOTES = (523.25, 659.25, 783.99)  # C5 E5 G5
DRAW_NOTES = (392.00, 329.63)         # G4 E4
NOTE_DURATION = 0.12


def setup_logging(verbose=False):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")


def tone_samples(freqs, duration=NOTE_DURATION, volume=VOLUME,
                 sample_rate=SAMPLE_RATE, channels=2):
    """
    Render a sequence of sine notes as signed 16-bit samples.

    Each note gets a short linear fade in/out to avoid clicks. Returns an
    array of shape (n,) for mono or (n, channels) otherwise.
    """
    n = int(sample_rate * duration)
    t = np.arange(n) / sample_rate
    # Fade never covers more than half a note; notes under 2 samples stay flat
    fade = min(max(1, n // 10), n // 2)
    envelope = np.ones(n)
    if fade:
        envelope[:fade] = np.linspace(0.0, 1.0, fade)
        envelope[-fade:] = np.linspace(1.0, 0.0, fade)

    notes = [np.sin(2.0 * np.pi * f * t) * envelope for f in freqs]
    wave = np.concatenate(notes) if notes else np.zeros(0)
    samples = (wave * volume * 32767).astype(np.int16)

    if channels == 1:
        return samples
    return np.ascontiguousarray(np.repeat(samples[:, None], channels, axis=1))


def load_sounds():
    """
    Build the win and draw sounds.

    Returns a dict with 'win' and 'draw' keys, or an empty dict if no audio
    device is available.
    """
    try:
        if not pygame.mixer.get_init():
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2)
        frequency, _, channels = pygame.mixer.get_init()
    except pygame.error as e:
        logger.warning("Audio unavailable, playing muted: %s", e)
        return {}

    return {
        'win': pygame.sndarray.make_sound(
            tone_samples(WIN_NOTES, sample_rate=frequency, channels=channels)),
        'draw': pygame.sndarray.make_sound(
            tone_samples(DRAW_NOTES, sample_rate=frequency, channels=channels)),
    }
