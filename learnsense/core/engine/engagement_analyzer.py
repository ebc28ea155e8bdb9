"""
Engagement analyzer.
Rolling-window summary of focus, study time and scores with simple anomaly alerts.
"""
from typing import List, Sequence

import numpy as np

from learnsense.core.engine.engagement_scorer import as_number
from learnsense.core.engine.ordering import timestamp_sort_key
from learnsense.core.engine.schemas import ActivityRecord, EngagementReport

RECENT_WINDOW = 5
FOCUS_DROP_ALERT = -20
TREND_THRESHOLD = 10
LOW_SCORE = 50
LOW_STUDY_TIME = 30

LOW_ENGAGEMENT_TIPS = [
    "Try switching learning modes",
    "Take breaks between study sessions",
    "Set specific learning goals",
]


def no_activity_report(days: int) -> EngagementReport:
    return EngagementReport(
        engagement_score=0,
        status="no_activity",
        alerts=[f"No activity recorded in the last {days} days"],
        recommendations=["Start a learning session to begin tracking"],
        window_days=days,
    )


def error_report(days: int) -> EngagementReport:
    return EngagementReport(
        engagement_score=0,
        status="error",
        alerts=["Error analyzing engagement"],
        window_days=days,
    )


def _mean(values: Sequence[float]) -> float:
    return float(np.mean(values)) if len(values) else 0.0


def analyze_engagement(activities: Sequence[ActivityRecord], days: int = 7) -> EngagementReport:
    """
    Summarize engagement over the records of a trailing window.

    Reading seconds and playback counts are summed into one "time" figure
    without unit conversion.

    Args:
        activities: Activity records inside the window, any order
        days: Window length, echoed in the report

    Returns:
        EngagementReport
    """
    if not activities:
        return no_activity_report(days)

    # Oldest first so that the tail is the most recent window
    ordered = sorted(activities, key=lambda a: timestamp_sort_key(a.session_timestamp))

    focus = [as_number(a.focus_level) for a in ordered]
    avg_focus = _mean(focus)
    total_time = sum(as_number(a.reading_time_seconds) + as_number(a.playback_count) for a in ordered)
    scored = [as_number(a.quiz_score) for a in ordered if a.quiz_score is not None]
    avg_score = _mean(scored)

    recent_focus = focus[-RECENT_WINDOW:]
    older_focus = focus[:max(0, len(focus) - RECENT_WINDOW)]
    focus_drop = _mean(recent_focus) - _mean(older_focus) if older_focus else 0.0

    engagement = avg_focus * 0.4 + (total_time / 60) * 0.3 + avg_score * 0.3
    engagement_score = int(round(max(0.0, min(100.0, engagement))))

    alerts: List[str] = []
    if focus_drop < FOCUS_DROP_ALERT:
        alerts.append("Significant drop in focus level detected")
    if avg_score < LOW_SCORE and len(ordered) > 3:
        alerts.append("Performance below average - consider reviewing previous topics")
    if total_time < LOW_STUDY_TIME:
        alerts.append("Low study time - aim for at least 30 minutes per day")

    recommendations = list(LOW_ENGAGEMENT_TIPS) if engagement_score < 50 else []

    if engagement_score > 70:
        status = "high"
    elif engagement_score > 50:
        status = "medium"
    else:
        status = "low"

    if focus_drop < -TREND_THRESHOLD:
        trend = "declining"
    elif focus_drop > TREND_THRESHOLD:
        trend = "improving"
    else:
        trend = "stable"

    return EngagementReport(
        engagement_score=engagement_score,
        status=status,
        alerts=alerts,
        recommendations=recommendations,
        avg_focus=int(round(avg_focus)),
        total_time=int(round(total_time)),
        avg_score=int(round(avg_score)),
        focus_drop=focus_drop,
        trend=trend,
        window_days=days,
        activity_count=len(ordered),
    )
