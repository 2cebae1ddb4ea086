"""
Formatter service for CodeTools.

Maps a language to a formatter parser id and hands the code to a backend:
JSON is pretty-printed locally, every other parser goes to a remote
formatter service over HTTP.
"""

import json
import logging
from abc import ABC, abstractmethod

import httpx

from codetools.core.errors import FormatterBackendError
from codetools.core.languages import normalize_language

logger = logging.getLogger(__name__)

# Canonical language tag -> formatter parser id
PARSER_MAP: dict[str, str] = {
    "javascript": "babel",
    "typescript": "babel-ts",
    "json": "json",
    "css": "css",
    "html": "html",
    "php": "php",
    "java": "java",
    "kotlin": "kotlin",
    "bash": "sh",
}


def get_parser(language: str | None) -> str | None:
    """Get the formatter parser id for a raw or canonical language identifier."""
    return PARSER_MAP.get(normalize_language(language))


class FormatterBackend(ABC):
    """Abstract interface for a code formatter backend."""

    @abstractmethod
    def supports(self, parser: str) -> bool:
        """Whether this backend handles ``parser``."""
        pass

    @abstractmethod
    async def format(self, code: str, parser: str) -> str:
        """
        Format ``code`` with ``parser``.

        Raises:
            FormatterBackendError: If formatting failed
        """
        pass

    async def aclose(self) -> None:
        pass


class JsonFormatterBackend(FormatterBackend):
    """Pretty-prints JSON locally with a 2-space indent."""

    def __init__(self, indent: int = 2):
        self._indent = indent

    def supports(self, parser: str) -> bool:
        return parser == "json"

    async def format(self, code: str, parser: str) -> str:
        try:
            data = json.loads(code)
        except json.JSONDecodeError as e:
            raise FormatterBackendError(f"Invalid JSON: {e}") from e
        return json.dumps(data, indent=self._indent, ensure_ascii=False) + "\n"


class HttpFormatterBackend(FormatterBackend):
    """
    Formatter backed by a remote HTTP service.

    Posts ``{"parser": ..., "code": ...}`` to the endpoint and expects
    ``{"formatted": ...}`` back.
    """

    def __init__(
        self,
        api_url: str,
        api_key: str = "",
        endpoint: str = "/format",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._endpoint = endpoint if endpoint.startswith("/") else f"/{endpoint}"
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self._client = httpx.AsyncClient(
            base_url=api_url.rstrip("/"),
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    def supports(self, parser: str) -> bool:
        return parser in PARSER_MAP.values()

    async def format(self, code: str, parser: str) -> str:
        payload = {"parser": parser, "code": code}
        try:
            response = await self._client.post(self._endpoint, json=payload)
        except httpx.RequestError as exc:
            raise FormatterBackendError(
                f"Formatter HTTP error: {exc} (base={self._client.base_url}, endpoint={self._endpoint})"
            ) from exc

        if response.status_code != 200:
            raise FormatterBackendError(
                f"Formatter API error: status={response.status_code}, body={response.text}"
            )

        try:
            formatted = response.json().get("formatted")
        except (ValueError, AttributeError) as exc:
            raise FormatterBackendError(f"Formatter returned an invalid response: {exc}") from exc

        if not isinstance(formatted, str):
            raise FormatterBackendError("Formatter response has no 'formatted' string")
        return formatted

    async def aclose(self) -> None:
        await self._client.aclose()


class CodeFormatter:
    """
    Formats code for the languages with a known parser.

    ``format_code`` never raises: unmapped languages, missing backends and
    backend failures all return the input unchanged.
    """

    def __init__(self, backends: list[FormatterBackend] | None = None):
        self._backends = backends if backends is not None else [JsonFormatterBackend()]

    def _backend_for(self, parser: str) -> FormatterBackend | None:
        for backend in self._backends:
            if backend.supports(parser):
                return backend
        return None

    async def format_code(self, code: str, language: str | None) -> str:
        """
        Format ``code`` as ``language``.

        Args:
            code: Source text
            language: Raw or canonical language identifier

        Returns:
            Formatted code, or ``code`` unchanged if it could not be formatted
        """
        parser = get_parser(language)
        if parser is None:
            return code

        backend = self._backend_for(parser)
        if backend is None:
            logger.debug(f"No formatter backend for parser {parser}")
            return code

        try:
            return await backend.format(code, parser)
        except Exception as e:
            logger.error(f"Format error (parser={parser}): {e}")
            return code

    async def aclose(self) -> None:
        for backend in self._backends:
            await backend.aclose()


def create_formatter(
    api_url: str = "",
    api_key: str = "",
    endpoint: str = "/format",
    timeout: float = 10.0,
) -> CodeFormatter:
    """Create a CodeFormatter with the local JSON backend and, if configured, the HTTP backend."""
    backends: list[FormatterBackend] = [JsonFormatterBackend()]
    if api_url:
        backends.append(
            HttpFormatterBackend(api_url=api_url, api_key=api_key, endpoint=endpoint, timeout=timeout)
        )
    return CodeFormatter(backends)
