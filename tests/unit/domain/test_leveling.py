"""Tests for atomize/domain/leveling/engine.py

The engine remembers the last observed global XP and fires once per
upward crossing of a 500 XP boundary.

Key behaviors:
- First observation in a session is a baseline, never a level-up
- Crossing fires exactly once; further gains in the same level do not
- Drops do not move the memory backward
"""

from atomize.domain.leveling import (
    LevelingEngine,
    level_for,
    level_progress,
    next_level_threshold,
)


class TestLevelFor:
    """Tests for bucketing XP into levels."""

    def test_buckets_of_five_hundred(self):
        assert level_for(0) == 0
        assert level_for(499) == 0
        assert level_for(500) == 1
        assert level_for(1250) == 2

    def test_next_threshold(self):
        assert next_level_threshold(0) == 500
        assert next_level_threshold(3) == 2000

    def test_progress_view(self):
        progress = level_progress(1250)

        assert progress.level == 2
        assert progress.xp_into_level == 250
        assert progress.next_level_at == 1500
        assert progress.percent == 50


class TestLevelingEngine:
    """Tests for crossing detection."""

    def test_crossing_fires_once(self):
        """480 -> 520 fires; 520 -> 540 does not."""
        engine = LevelingEngine()
        engine.seed(480)

        event = engine.observe(520)
        assert event is not None
        assert (event.old_level, event.new_level, event.total_xp) == (0, 1, 520)

        assert engine.observe(540) is None
        assert engine.last_observed_xp == 540

    def test_first_observation_is_baseline(self):
        """Seeding at 0 then seeing 600 records a baseline without firing."""
        engine = LevelingEngine()
        engine.seed(0)

        assert engine.observe(600) is None
        assert engine.last_observed_xp == 600
        assert engine.observe(1000) is not None

    def test_zero_total_keeps_engine_uninitialized(self):
        engine = LevelingEngine()
        assert engine.observe(0) is None
        assert engine.last_observed_xp == 0

    def test_drop_does_not_move_memory(self):
        """Dropping to 490 leaves the memory at 540, so 510 does not fire."""
        engine = LevelingEngine()
        engine.seed(480)
        engine.observe(520)
        engine.observe(540)

        assert engine.observe(490) is None
        assert engine.last_observed_xp == 540
        assert engine.observe(510) is None

    def test_regain_refires_after_new_session(self):
        """A session that starts at 490 celebrates the 500 crossing again."""
        engine = LevelingEngine()
        engine.seed(490)

        event = engine.observe(510)
        assert event is not None
        assert event.new_level == 1

    def test_gain_below_memory_does_not_advance(self):
        engine = LevelingEngine()
        engine.seed(700)
        engine.observe(600)

        assert engine.observe(650) is None
        assert engine.last_observed_xp == 700

    def test_multi_level_jump(self):
        engine = LevelingEngine()
        engine.seed(450)

        event = engine.observe(1600)
        assert (event.old_level, event.new_level) == (0, 3)

    def test_seed_only_once(self):
        """Only the first seed counts."""
        engine = LevelingEngine()

        assert engine.seed(480) is True
        assert engine.seed(9000) is False
        assert engine.last_observed_xp == 480
        assert engine.level == 0
