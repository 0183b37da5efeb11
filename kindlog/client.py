"""
Client for the Apps Script web app that stores the records sheet.

GET returns every row as a JSON array of objects with capitalized keys;
POST appends one row from a lower-case JSON body. The script answers
both with a redirect to its content host, so redirects are followed.
"""

import logging
from typing import Optional, Tuple

import httpx

from kindlog.config import REQUEST_TIMEOUT, WEB_APP_URL
from kindlog.domain import Record, RecordForm
from kindlog.exceptions import LoadError, SubmitError
from kindlog.functional import parse_records

logger = logging.getLogger(__name__)


class RecordStoreClient:
    """
    Async client for the records endpoint.

    Args:
        url: Web app URL, defaults to the deployed script.
        timeout: Seconds before a request is abandoned; None waits forever.
        transport: Optional httpx transport, mainly for tests.
    """

    def __init__(
        self,
        url: str = WEB_APP_URL,
        timeout: Optional[float] = REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self.transport,
        )

    async def fetch_records(self) -> Tuple[Record, ...]:
        """
        Fetch every stored record, in payload order.

        Raises:
            LoadError: on transport failure, a non-2xx status, an undecodable
                body, or a body that is not a list of objects.
        """
        try:
            async with self._client() as client:
                response = await client.get(self.url)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            raise LoadError(f"Request to records endpoint failed: {e}") from e
        except ValueError as e:
            raise LoadError(f"Records endpoint returned invalid JSON: {e}") from e

        result = parse_records(data)
        if result.is_left():
            error = result.get_error()
            logger.error(f"Records endpoint error payload: {data!r}")
            raise LoadError(error["message"], payload=data)

        records = result.get_or_else(())
        logger.info(f"Fetched {len(records)} records")
        return records

    async def submit_record(self, form: RecordForm) -> None:
        """
        Append one record. The response body is not inspected.

        Raises:
            SubmitError: on transport failure or a non-2xx status.
        """
        try:
            async with self._client() as client:
                response = await client.post(self.url, json=form.to_payload())
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise SubmitError(f"Posting record failed: {e}") from e
        logger.info(f"Submitted {form.type or '?'} record dated {form.date}")
