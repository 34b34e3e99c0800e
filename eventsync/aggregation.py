"""Turn per-slot tallies into render-ready ratios.

All functions here are pure: identical tallies always give identical
ratios, and a slot nobody answered renders as an empty bar.
"""

from dataclasses import dataclass

from eventsync.models.events import Availability
from eventsync.models.results import CandidateResult, ResultsSnapshot

BAR_GLYPHS = {
    Availability.OK: "#",
    Availability.MAYBE: "~",
    Availability.NG: "x",
}


@dataclass(frozen=True)
class SlotRatios:
    ok: float
    maybe: float
    ng: float
    total: int

    def as_dict(self) -> dict[Availability, float]:
        return {
            Availability.OK: self.ok,
            Availability.MAYBE: self.maybe,
            Availability.NG: self.ng,
        }


@dataclass(frozen=True)
class CandidateRow:
    """One candidate as displayed: the tallies plus their ratios."""

    result: CandidateResult
    ratios: SlotRatios


def _ratio(count: int, total: int) -> float:
    return count / total * 100 if total > 0 else 0.0


def compute_ratios(ok: int, maybe: int, ng: int) -> SlotRatios:
    total = ok + maybe + ng
    return SlotRatios(
        ok=_ratio(ok, total),
        maybe=_ratio(maybe, total),
        ng=_ratio(ng, total),
        total=total,
    )


def ratios_for(result: CandidateResult) -> SlotRatios:
    return compute_ratios(result.ok, result.maybe, result.ng)


def summarize(snapshot: ResultsSnapshot) -> list[CandidateRow]:
    """Rows in the order the server delivered them."""
    return [CandidateRow(result=c, ratios=ratios_for(c)) for c in snapshot.candidates]


def bar_segments(ratios: SlotRatios) -> list[tuple[Availability, float]]:
    """Non-empty segments of a proportional bar, OK first."""
    return [(kind, pct) for kind, pct in ratios.as_dict().items() if pct > 0]


def render_text_bar(ratios: SlotRatios, width: int = 20) -> str:
    """Fixed-width text bar; blank when nobody answered."""
    if ratios.total == 0:
        return " " * width
    segments = bar_segments(ratios)
    cells = [round(pct * width / 100) for _, pct in segments]
    # rounding can overshoot or undershoot by a cell; adjust the widest segment
    if cells:
        widest = max(range(len(cells)), key=lambda i: cells[i])
        cells[widest] += width - sum(cells)
    return "".join(BAR_GLYPHS[kind] * n for (kind, _), n in zip(segments, cells))
