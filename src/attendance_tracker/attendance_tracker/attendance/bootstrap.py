from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping

from ..schedules.model import ClassSession, DaySchedule


def generate_initial_attendance(
    schedule: Iterable[DaySchedule],
    target_ratios: Mapping[str, Mapping[str, int]],
    *,
    today: date,
) -> dict[str, bool]:
    """Seed an attendance map from known per-subject ratios.

    ``target_ratios`` maps subject name to ``{"attended": n, "total": m}``.
    For each subject the earliest ``attended`` sessions up to ``today`` are
    marked attended and the rest absent; subjects without a ratio are marked
    fully attended.
    """
    by_subject: dict[str, list[ClassSession]] = {}
    for day in sorted(schedule, key=lambda d: d.date):
        if day.date > today:
            continue
        for cls in day.classes:
            by_subject.setdefault(cls.subject_name, []).append(cls)

    out: dict[str, bool] = {}
    for subject_name, classes in by_subject.items():
        target = target_ratios.get(subject_name)
        if not target:
            out.update({cls.id: True for cls in classes})
            continue

        attended = min(int(target.get("attended", 0)), len(classes))
        for index, cls in enumerate(classes):
            out[cls.id] = index < attended
    return out
