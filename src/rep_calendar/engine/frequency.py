"""Visit frequency classification over a rep's doctor roster."""

from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Iterable

import numpy as np

from rep_calendar.engine.dates import in_month
from rep_calendar.models.client import Client, ClientKind, Specialization
from rep_calendar.models.period import YearMonth
from rep_calendar.models.reports import DoctorFrequency, FrequencyBuckets
from rep_calendar.models.visit import VisitEvent

# Visit counts at or above this share the top bucket
TOP_BUCKET = 3
BUCKET_NAMES = ("f0", "f1", "f2", "f3")


def roster_for_rep(rep_id: int, doctors: Iterable[Client]) -> list[Client]:
    """Doctors currently assigned to the rep."""
    return [d for d in doctors if d.kind == ClientKind.DOCTOR and d.rep_id == rep_id]


def count_doctor_visits(
    rep_id: int,
    visits: Iterable[VisitEvent],
    year_month: YearMonth,
    today: date | None = None,
) -> Counter[int]:
    """Doctor visits logged by the rep within the month, per doctor id.

    With ``today`` set, visits after that day are not counted.
    """
    return Counter(
        v.client_id
        for v in visits
        if v.rep_id == rep_id
        and v.client_kind == ClientKind.DOCTOR
        and in_month(v.occurred_at, year_month)
        and (today is None or v.visit_date <= today)
    )


def bucket_of(visit_count: int) -> str:
    """Bucket name (``f0``..``f3``) for a visit count."""
    return BUCKET_NAMES[min(visit_count, TOP_BUCKET)]


def classify(
    rep_id: int,
    doctors: Iterable[Client],
    visits: Iterable[VisitEvent],
    year_month: YearMonth,
    today: date | None = None,
) -> FrequencyBuckets:
    """Bucket every doctor on the rep's roster by monthly visit count.

    Only the rep's own doctor visits count, up to ``today`` when given. A
    never-visited doctor lands in ``f0``, so the buckets always sum to the
    roster size.
    """
    roster = roster_for_rep(rep_id, doctors)
    counts = count_doctor_visits(rep_id, visits, year_month, today)

    per_doctor = np.array([counts.get(d.id, 0) for d in roster], dtype=np.int_)
    buckets = np.bincount(np.minimum(per_doctor, TOP_BUCKET), minlength=TOP_BUCKET + 1)

    return FrequencyBuckets(
        f0=int(buckets[0]), f1=int(buckets[1]), f2=int(buckets[2]), f3=int(buckets[3])
    )


def frequency_detail(
    rep_id: int,
    doctors: Iterable[Client],
    visits: Iterable[VisitEvent],
    year_month: YearMonth,
    today: date | None = None,
) -> dict[str, list[DoctorFrequency]]:
    """Doctors in each bucket with their visit counts, most visited first."""
    roster = roster_for_rep(rep_id, doctors)
    counts = count_doctor_visits(rep_id, visits, year_month, today)

    detail: dict[str, list[DoctorFrequency]] = {name: [] for name in BUCKET_NAMES}
    for doctor in roster:
        n = counts.get(doctor.id, 0)
        detail[bucket_of(n)].append(
            DoctorFrequency(
                doctor_id=doctor.id,
                name=doctor.name,
                region_id=doctor.region_id,
                specialization=doctor.specialization,
                visits=n,
            )
        )
    for rows in detail.values():
        rows.sort(key=lambda r: (-r.visits, r.name))
    return detail


def specialization_counts(doctors: Iterable[Client]) -> dict[Specialization, int]:
    """Roster size per specialization; clients without a tag are left out."""
    return dict(Counter(d.specialization for d in doctors if d.specialization is not None))
