import logging
from datetime import date
from typing import Any, Callable, List, Optional, Tuple

from kindlog.chart import ChartSlot, MoodChart
from kindlog.client import RecordStoreClient
from kindlog.config import EXPORT_FILENAME
from kindlog.domain import Record, RecordForm
from kindlog.events import (
    EXPORT_EMPTY,
    LOAD_FAILED,
    RECORD_SUBMITTED,
    RECORDS_LOADED,
    SUBMIT_FAILED,
    EventBus,
    register_default_handlers,
)
from kindlog.exceptions import LoadError, SubmitError
from kindlog.exporter import workbook_bytes
from kindlog.transforms import RecordRow, chart_input, record_rows, sort_newest_first

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Could not load records."


class RecordService:
    """Owns the record cache and the mood chart, and runs load, submit and export.

    The cache, its display rows and the chart handle are only ever rebound
    as a whole. Overlapping loads are not sequenced: whichever response
    resolves last is what the cache holds.
    """

    def __init__(
        self,
        client: Optional[RecordStoreClient] = None,
        bus: Optional[EventBus] = None,
        chart_factory: Callable[..., Any] = MoodChart,
        today: Callable[[], date] = date.today,
    ):
        self.client = client or RecordStoreClient()
        self.bus = bus if bus is not None else register_default_handlers(EventBus())
        self.chart: ChartSlot = ChartSlot()
        self._chart_factory = chart_factory
        self._today = today

        self.records: Tuple[Record, ...] = ()
        self.rows: Tuple[RecordRow, ...] = ()
        self.load_error: Optional[str] = None
        self.submitting = False
        self.notices: List[dict] = []

    def _publish(self, name: str, payload: dict) -> None:
        for result in self.bus.publish(name, payload):
            if isinstance(result, dict) and result.get("notice"):
                self.notices.append(result)

    def drain_notices(self) -> List[dict]:
        notices, self.notices = self.notices, []
        return notices

    async def load(self) -> bool:
        """Refresh the cache from the endpoint, then redraw list and chart.

        On failure the cache and chart keep their last good state and
        load_error carries the message for the records region.
        """
        try:
            fetched = await self.client.fetch_records()
        except LoadError as e:
            logger.error(f"Loading records failed: {e}")
            self.load_error = LOAD_ERROR_MESSAGE
            self._publish(LOAD_FAILED, {"reason": str(e)})
            return False

        records = sort_newest_first(fetched)
        rows = record_rows(records)
        labels, counts = chart_input(records)

        self.records, self.rows = records, rows
        self.load_error = None
        self._draw_chart(labels, counts)
        self._publish(RECORDS_LOADED, {"count": len(self.records)})
        return True

    def render_chart(self):
        return self._draw_chart(*chart_input(self.records))

    def _draw_chart(self, labels, counts):
        return self.chart.replace(lambda: self._chart_factory(labels, counts))

    async def submit(self, form: RecordForm) -> RecordForm:
        """Post one record and return the form state to show next.

        A failed post hands back the form as entered. A successful one
        hands back a blank form dated today and triggers a reload whose
        failure is reported through load_error only.
        """
        self.submitting = True
        try:
            await self.client.submit_record(form)
        except SubmitError as e:
            logger.error(f"Submitting record failed: {e}")
            self._publish(SUBMIT_FAILED, {"reason": str(e), "form": form.to_payload()})
            return form
        finally:
            self.submitting = False

        self._publish(RECORD_SUBMITTED, form.to_payload())
        await self.load()
        return RecordForm.blank(self._today())

    def export(
        self,
        sink: Callable[[str, bytes], Any],
        writer: Callable[..., bytes] = workbook_bytes,
    ) -> bool:
        """Hand the cached records to sink as an xlsx workbook. Never hits the network."""
        if not self.records:
            logger.info("Export requested with an empty cache")
            self._publish(EXPORT_EMPTY, {})
            return False

        sink(EXPORT_FILENAME, writer(self.records))
        return True
