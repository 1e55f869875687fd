# Path: mica_ixbrl/engine/checks/registry_client.py
"""
GLEIF Registry Client

Async HTTP client for the GLEIF LEI records API.

One attempt per lookup, bounded by a total timeout. Any failure other
than a confirmed 404 yields a result with lookup_performed=False so the
caller can treat the LEI as unconfirmed rather than invalid.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import aiohttp

from ...constants import (
    DEFAULT_GLEIF_API_URL,
    DEFAULT_REGISTRY_TIMEOUT,
    HTTP_OK,
    HTTP_NOT_FOUND,
    LOG_INPUT,
    LOG_OUTPUT,
    LOG_PROCESS,
)
from ...core.config_loader import ConfigLoader
from ...core.logger import get_input_logger


logger = get_input_logger('registry_client')


@dataclass
class RegistryLookupResult:
    """
    Outcome of one GLEIF lookup.

    Attributes:
        lei: LEI that was looked up
        lookup_performed: False when the registry could not be asked
            (timeout, network error, unexpected status)
        is_valid: True if the record exists, False on 404, None when
            the lookup was not performed
        legal_name: Entity legal name
        entity_status: Entity status (e.g. 'ACTIVE')
        registration_status: Registration status (e.g. 'ISSUED', 'LAPSED')
        country: Legal address country
        error: Failure reason when lookup_performed is False
    """
    lei: str
    lookup_performed: bool
    is_valid: Optional[bool] = None
    legal_name: Optional[str] = None
    entity_status: Optional[str] = None
    registration_status: Optional[str] = None
    country: Optional[str] = None
    error: Optional[str] = None


def _object(value) -> dict:
    """A JSON object from the payload, or an empty one for any other shape."""
    return value if isinstance(value, dict) else {}


class LEIRegistryClient:
    """
    HTTP client for api.gleif.org.

    Example:
        async with LEIRegistryClient() as client:
            result = await client.lookup('529900T8BM49AURSDO55')
            if result.lookup_performed and result.is_valid:
                print(result.legal_name)
    """

    def __init__(self, config: ConfigLoader = None, session: Optional[aiohttp.ClientSession] = None):
        """
        Initialize registry client.

        Args:
            config: Optional ConfigLoader instance
            session: Optional externally managed session; it is not closed
                by this client
        """
        self.config = config if config else ConfigLoader()
        self._session = session
        self._owns_session = session is None

        self.base_url = self.config.get('gleif_api_url', DEFAULT_GLEIF_API_URL).rstrip('/')
        self.api_key = self.config.get('lei_api_key')
        self.timeout = self.config.get('registry_timeout', DEFAULT_REGISTRY_TIMEOUT)

    async def _get_session(self) -> aiohttp.ClientSession:
        """
        Get or create HTTP session.

        Returns:
            aiohttp.ClientSession: HTTP session
        """
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self._session

    def _build_headers(self) -> dict[str, str]:
        """
        Build HTTP request headers.

        Returns:
            dict: Request headers
        """
        headers = {'Accept': 'application/vnd.api+json'}
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'
        return headers

    async def lookup(self, lei: str) -> RegistryLookupResult:
        """
        Look up one LEI record.

        Args:
            lei: 20-character LEI

        Returns:
            RegistryLookupResult (never raises for network problems)
        """
        url = f"{self.base_url}/lei-records/{quote(lei)}"
        logger.debug(f"{LOG_INPUT} GLEIF request: {url}")

        try:
            session = await self._get_session()
            async with session.get(
                url,
                headers=self._build_headers(),
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                status = response.status

                if status == HTTP_NOT_FOUND:
                    logger.info(f"{LOG_OUTPUT} LEI not found in GLEIF: {lei}")
                    return RegistryLookupResult(lei=lei, lookup_performed=True, is_valid=False)

                if status != HTTP_OK:
                    logger.warning(f"{LOG_OUTPUT} GLEIF API error {status} for {lei}")
                    return RegistryLookupResult(
                        lei=lei, lookup_performed=False, error=f"HTTP {status}"
                    )

                payload = await response.json(content_type=None)

        except asyncio.TimeoutError:
            logger.warning(f"{LOG_PROCESS} GLEIF request timeout for {lei}")
            return RegistryLookupResult(lei=lei, lookup_performed=False, error='Timeout')

        except aiohttp.ClientError as e:
            logger.warning(f"{LOG_PROCESS} GLEIF request error for {lei}: {e}")
            return RegistryLookupResult(lei=lei, lookup_performed=False, error=str(e))

        except ValueError as e:
            logger.warning(f"{LOG_PROCESS} GLEIF response is not JSON for {lei}: {e}")
            return RegistryLookupResult(lei=lei, lookup_performed=False, error='Invalid response')

        return self._parse_record(lei, payload)

    def _parse_record(self, lei: str, payload) -> RegistryLookupResult:
        """Map a JSON-API lei-record document to a lookup result."""
        data = payload.get('data') if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            return RegistryLookupResult(lei=lei, lookup_performed=False, error='Invalid response')

        attributes = data.get('attributes')
        if not isinstance(attributes, dict):
            return RegistryLookupResult(lei=lei, lookup_performed=False, error='Invalid response')

        entity = _object(attributes.get('entity'))
        registration = _object(attributes.get('registration'))

        result = RegistryLookupResult(
            lei=lei,
            lookup_performed=True,
            is_valid=True,
            legal_name=_object(entity.get('legalName')).get('name'),
            entity_status=entity.get('status'),
            registration_status=registration.get('status'),
            country=_object(entity.get('legalAddress')).get('country'),
        )
        logger.debug(
            f"{LOG_OUTPUT} GLEIF record {lei}: {result.legal_name} "
            f"({result.registration_status})"
        )
        return result

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None if self._owns_session else self._session

    async def __aenter__(self) -> 'LEIRegistryClient':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


__all__ = ['RegistryLookupResult', 'LEIRegistryClient']
