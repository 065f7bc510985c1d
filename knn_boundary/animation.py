import logging
from enum import Enum
from typing import Callable, Optional

from knn_boundary import config
from knn_boundary.recompute import FieldSession

logger = logging.getLogger(__name__)


class PlayState(Enum):
    IDLE = 'idle'
    PLAYING = 'playing'


class AnimationDriver:
    """Steps k over time and schedules rebuilds on a FieldSession.

    The driver owns the only counter. Every change of k queues a rebuild
    request; a newer request replaces a pending one and cancel() drops it,
    so a rebuild either runs to completion or never starts. run_pending()
    executes the latest request, typically once per animation frame.
    """

    def __init__(self, session: FieldSession, k: int = config.K_MIN,
                 truncation: Optional[int] = None, k_max: int = config.K_MAX,
                 on_rebuild: Optional[Callable] = None):
        """
        Args:
            session: Session holding the dataset and the last valid fields
            k: Starting neighbor count
            truncation: Fixed truncation count, None lets the session decide
            k_max: Last k the animation reaches before stopping
            on_rebuild: Called as on_rebuild(k, decision_field, density_field)
                after each completed rebuild
        """
        self.session = session
        self.k_max = config.validate_k(k_max)
        self.k = config.validate_k(k)
        self.truncation = truncation
        self.on_rebuild = on_rebuild
        self.state = PlayState.IDLE
        self.pending: Optional[int] = None
        self.n_superseded = 0

    @property
    def is_playing(self):
        return self.state is PlayState.PLAYING

    def request_rebuild(self):
        """Queue a rebuild for the current k, superseding any pending one"""
        if self.pending is not None:
            self.n_superseded += 1
        self.pending = self.k

    def cancel(self):
        """Drop the pending rebuild, if any"""
        self.pending = None

    def run_pending(self) -> bool:
        """
        Execute the latest pending rebuild.

        Returns:
            True if the session fields were replaced
        """
        if self.pending is None:
            return False
        k = self.pending
        self.pending = None

        updated = self.session.update(k, self.truncation)
        if updated and self.on_rebuild is not None:
            decision_field, density_field = self.session.fields()
            self.on_rebuild(k, decision_field, density_field)
        return updated

    def set_k(self, value: int):
        """Slider input: jump to k, clamped to the interactive range"""
        self.k = min(config.validate_k(value, clamp=True), self.k_max)
        self.request_rebuild()

    def play(self, from_start: bool = True):
        """Start playing, from k = 1 unless from_start is False"""
        self.state = PlayState.PLAYING
        if from_start:
            self.k = config.K_MIN
        self.request_rebuild()
        logger.debug("Animation started")

    def pause(self):
        self.state = PlayState.IDLE
        self.cancel()
        logger.debug("Animation paused at k=%d", self.k)

    def toggle(self):
        """Play/pause switch (the space key in the interactive view)"""
        if self.is_playing:
            self.pause()
        else:
            self.play()
        return self.state

    def tick(self) -> bool:
        """
        Advance one animation step.

        Returns:
            True if k advanced, False when idle or already at k_max (which
            also ends playback)
        """
        if not self.is_playing:
            return False
        if self.k >= self.k_max:
            self.state = PlayState.IDLE
            logger.debug("Animation finished at k=%d", self.k)
            return False
        self.k += 1
        self.request_rebuild()
        return True

    def run(self, from_start: bool = True, max_steps: Optional[int] = None):
        """
        Play up to k_max synchronously, one rebuild per step.

        Args:
            from_start: Restart from k = 1 rather than the current k
            max_steps: Optional cap on the number of ticks
        """
        self.play(from_start)
        self.run_pending()
        steps = 0
        while self.tick():
            self.run_pending()
            steps += 1
            if max_steps is not None and steps >= max_steps:
                self.pause()
                break
