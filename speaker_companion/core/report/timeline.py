"""
Per-minute timeline construction.

Buckets the source video into consecutive one-minute windows and summarises
the sampled frames falling inside each window.

Dependencies: speaker_companion.models
System role: Timeline section of the analysis report
"""

import math
from collections import Counter
from typing import Iterable, Sequence

from speaker_companion.models.raw_output import FrameSample
from speaker_companion.models.report import TimelineBucket

WINDOW_SECONDS = 60
VERTICAL_GAZE_KEYS = ("up", "level", "down", "away")
HORIZONTAL_GAZE_KEYS = ("left", "center-left", "center", "center-right", "right", "away")
TOP_POSTURE_COUNT = 2


def format_clock(seconds: float) -> str:
    """Render seconds as ``m:ss``."""
    whole = int(seconds)
    return f"{whole // 60}:{whole % 60:02d}"


def _pct(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(100.0 * count / total, 1)


def _distribution(values: Iterable[str], keys: Sequence[str], total: int) -> dict[str, float]:
    counts = Counter(values)
    return {key: _pct(counts.get(key, 0), total) for key in keys}


def summarize_window(minute: int, start: float, end: float, samples: list[FrameSample]) -> TimelineBucket:
    """
    Summarise the samples of one window.

    Args:
        minute: 1-based window index
        start: Window start on the source clock (seconds)
        end: Window end on the source clock (seconds)
        samples: Samples whose timestamp falls in the window

    Returns:
        TimelineBucket: Percentages for gaze, movement, gesture activity and
        the most frequent postures; all zero when the window has no samples
    """
    total = len(samples)
    movement_pct = _pct(sum(1 for s in samples if s.is_moving), total)
    postures = Counter(s.posture for s in samples).most_common(TOP_POSTURE_COUNT)

    return TimelineBucket(
        minute=minute,
        start_time=format_clock(start),
        end_time=format_clock(end),
        vertical_gaze=_distribution((s.vertical_gaze for s in samples), VERTICAL_GAZE_KEYS, total),
        horizontal_gaze=_distribution((s.horizontal_gaze for s in samples), HORIZONTAL_GAZE_KEYS, total),
        movement_pct=movement_pct,
        stationary_pct=round(100.0 - movement_pct, 1) if total else 0.0,
        gesture_activity_pct=_pct(sum(1 for s in samples if s.gesture_active), total),
        top_postures={name: _pct(count, total) for name, count in postures},
    )


def build_timeline(samples: Iterable[FrameSample], duration_seconds: float) -> list[TimelineBucket]:
    """
    Build the per-minute timeline for a video.

    Args:
        samples: Frame samples on the source video clock
        duration_seconds: Source video duration

    Returns:
        list[TimelineBucket]: One bucket per started minute, ascending by
        minute; the last bucket may cover less than a minute. Samples past the
        end of the video are ignored.
    """
    if duration_seconds <= 0:
        return []
    window_count = math.ceil(duration_seconds / WINDOW_SECONDS)
    windows: list[list[FrameSample]] = [[] for _ in range(window_count)]

    for sample in samples:
        if sample.timestamp_seconds > duration_seconds:
            continue
        index = min(int(sample.timestamp_seconds // WINDOW_SECONDS), window_count - 1)
        windows[index].append(sample)

    return [
        summarize_window(
            minute=index + 1,
            start=index * WINDOW_SECONDS,
            end=min((index + 1) * WINDOW_SECONDS, duration_seconds),
            samples=window,
        )
        for index, window in enumerate(windows)
    ]
