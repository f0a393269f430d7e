"""
Checkpoint catalog.

Read-only reference data describing every auditable item. The default
catalog covers a restaurant venue: 17 checkpoints across 8 sections.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from venueaudit.domain.errors import CheckpointLookupError
from venueaudit.domain.models import Checkpoint


DEFAULT_CHECKPOINTS: tuple[Checkpoint, ...] = (
    # System Compliance
    Checkpoint("System Compliance", "Prep lists fully ticked?", "100%", "Sous Chef", 3,
               "Audit daily prep sheets; retrain on completion standard; implement AM spot-check."),
    Checkpoint("System Compliance", "SOPs followed on line?", "0 deviations", "Head Chef", 3,
               "Run 2-dish line check; correct deviations; sign-off on shift brief."),
    # Food Safety & Hygiene
    Checkpoint("Food Safety & Hygiene", "Allergen matrix current & on-hand", "Matches menu & labels", "Duty Manager", 1,
               "Print current matrix; cross-check labels; brief FOH/BOH."),
    Checkpoint("Food Safety & Hygiene", "Fridge ≤ 5 °C / Freezer ≤ −15 °C", "100%", "Sous Chef", 0,
               "Verify temps; calibrate probes; discard non-compliant stock; log corrective action.",
               photo_mandatory=True),
    Checkpoint("Food Safety & Hygiene", "Cleaning schedule signed", "100%", "Section Leads", 2,
               "Close gaps; reassign tasks; implement sign-off photo proof."),
    # Food Quality
    Checkpoint("Food Quality", "Tasting panel (2 dishes)", "≥ 2 (Good)", "Head Chef", 2,
               "Run panel; adjust seasoning/plating; update plate spec.",
               photo_mandatory=True),
    Checkpoint("Food Quality", "Presentation matches photos", "Yes", "Head Chef", 2,
               "Refresh plating demo; update pass photo; brief team.",
               photo_mandatory=True),
    # Health & Safety
    Checkpoint("Health & Safety", "Knife & PPE checks", "No defects", "Sous Chef", 0,
               "Replace damaged PPE; log and educate; certify knives safe."),
    Checkpoint("Health & Safety", "New hazards logged", "Up to date", "Duty Manager", 1,
               "Log hazards; assign controls; verify by EOD."),
    # Council / Regulatory
    Checkpoint("Council / Regulatory", "Required docs on-site & in date", "100%", "Venue Manager", 0,
               "Update folder; print missing docs; date-stamp review."),
    Checkpoint("Council / Regulatory", "Probe calibration < 7 days", "Yes", "Sous Chef", 0,
               "Calibrate or replace; attach certificate; reset reminder."),
    # KPIs
    Checkpoint("KPIs", "POS / Payroll", "≤ 17.5%", "Venue Manager", 7,
               "Adjust rosters; cap OT; align staffing to forecast; review after 1 week."),
    Checkpoint("KPIs", "COGS % (last week)", "≤ 30%", "Head Chef", 7,
               "Trim high-cost SKUs; portion checks; negotiate buys; monitor daily."),
    Checkpoint("KPIs", "Wastage $", "↓ week-on-week", "Head Chef", 7,
               "Introduce waste board; butcher maps; next-day review."),
    # Guest / Staff Feedback
    Checkpoint("Guest / Staff Feedback", "Public reviews ≥ 4★", "≥ 4.7", "Venue Manager", 7,
               "Reply to reviews; table touches; service huddles."),
    Checkpoint("Guest / Staff Feedback", "Staff training hours", "≥ 2 h pp / month", "Head Chef", 14,
               "Schedule training blocks; capture attendance; sign-off."),
    # Maintenance
    Checkpoint("Maintenance", "Critical equipment serviced", "No overdue", "Venue Manager", 3,
               "Book tech; tag out if needed; close work order."),
)


class CheckpointCatalog:
    """
    Ordered, immutable sequence of checkpoints keyed by their text.

    Usage:
        catalog = CheckpointCatalog(DEFAULT_CHECKPOINTS)
        checkpoint = catalog.lookup("Knife & PPE checks")
    """

    def __init__(self, checkpoints: Iterable[Checkpoint] = DEFAULT_CHECKPOINTS) -> None:
        self._checkpoints = tuple(checkpoints)
        self._by_text: dict[str, Checkpoint] = {}
        for checkpoint in self._checkpoints:
            if checkpoint.text in self._by_text:
                raise ValueError(f"Duplicate checkpoint text in catalog: {checkpoint.text!r}")
            if checkpoint.default_due_offset_days < 0:
                raise ValueError(f"Negative due offset for checkpoint: {checkpoint.text!r}")
            self._by_text[checkpoint.text] = checkpoint

    def all(self) -> tuple[Checkpoint, ...]:
        return self._checkpoints

    def lookup(self, checkpoint_text: str) -> Checkpoint:
        """
        Find a checkpoint by exact text.

        Raises:
            CheckpointLookupError: If no checkpoint has that text
        """
        try:
            return self._by_text[checkpoint_text]
        except KeyError:
            raise CheckpointLookupError(checkpoint_text) from None

    def __contains__(self, checkpoint_text: object) -> bool:
        return checkpoint_text in self._by_text

    def __iter__(self) -> Iterator[Checkpoint]:
        return iter(self._checkpoints)

    def __len__(self) -> int:
        return len(self._checkpoints)

    @property
    def texts(self) -> tuple[str, ...]:
        return tuple(cp.text for cp in self._checkpoints)

    @property
    def categories(self) -> list[str]:
        """Section names in first-seen order."""
        seen: dict[str, None] = {}
        for checkpoint in self._checkpoints:
            seen.setdefault(checkpoint.category, None)
        return list(seen)
