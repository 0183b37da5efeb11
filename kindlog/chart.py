import logging
from typing import Callable, Generic, Optional, Protocol, Sequence, TypeVar

import plotly.graph_objects as go

from kindlog.config import CHART_SERIES_LABEL, CHART_TITLE, MOOD_PALETTE

logger = logging.getLogger(__name__)


class ChartHandle(Protocol):
    def dispose(self) -> None:
        ...


H = TypeVar("H", bound=ChartHandle)


def palette_for(n: int, palette: Sequence[str] = MOOD_PALETTE) -> list[str]:
    """Cycle the fixed palette over n categories."""
    return [palette[i % len(palette)] for i in range(n)]


def build_mood_figure(labels: Sequence[str], counts: Sequence[int]) -> go.Figure:
    fig = go.Figure(
        go.Pie(
            labels=list(labels),
            values=list(counts),
            name=CHART_SERIES_LABEL,
            marker=dict(colors=palette_for(len(labels))),
            sort=False,
            direction="clockwise",
            hovertemplate="%{label}: %{value}<extra></extra>",
        )
    )
    fig.update_layout(
        title=dict(text=CHART_TITLE),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="center", x=0.5),
        margin=dict(t=60, b=10, l=10, r=10),
    )
    return fig


class MoodChart:
    """A rendered mood chart. Holds its figure until disposed."""

    def __init__(self, labels: Sequence[str], counts: Sequence[int]):
        self.labels = tuple(labels)
        self.counts = tuple(counts)
        self.figure: Optional[go.Figure] = build_mood_figure(self.labels, self.counts)

    @property
    def active(self) -> bool:
        return self.figure is not None

    def dispose(self) -> None:
        self.figure = None


class ChartSlot(Generic[H]):
    """Owns at most one chart handle; a new one is only created after the old is disposed."""

    def __init__(self):
        self._handle: Optional[H] = None

    @property
    def handle(self) -> Optional[H]:
        return self._handle

    def replace(self, factory: Callable[[], H]) -> H:
        self.dispose()
        self._handle = factory()
        return self._handle

    def dispose(self) -> None:
        if self._handle is not None:
            logger.debug("Disposing chart %r", self._handle)
            self._handle.dispose()
            self._handle = None
