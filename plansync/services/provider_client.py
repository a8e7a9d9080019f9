import requests
from urllib3.exceptions import NameResolutionError
import logging
import time
from typing import Callable
from plansync.core.errors import FetchError, FetchErrorCause
from plansync.core.parser import parse_feed_xml
from plansync.core.parsing_schemas import RawFeed
from plansync.services.retry import build_retrying

logger = logging.getLogger(__name__)

USER_AGENT = "plansync/1.0"


def _is_dns_failure(error: requests.exceptions.ConnectionError) -> bool:
    reason = error.args[0] if error.args else None
    reason = getattr(reason, "reason", reason)
    return isinstance(reason, NameResolutionError)


class ProviderClient:
    """
    A client for the provider plan feed.
    """

    def __init__(
        self,
        provider_config: dict,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the provider client with a provider configuration dictionary.

        Args:
            provider_config (dict): A dictionary containing provider details
                                      including 'name', 'url', 'timeout' and
                                      'retries'.
            sleep: Called with the backoff delay between attempts.
        """
        if not all(
            key in provider_config for key in ["name", "url", "timeout", "retries"]
        ):
            raise ValueError(
                "Provider config must contain 'name', 'url', 'timeout' and 'retries' keys."
            )

        self.provider_name = provider_config["name"]
        self.base_url = provider_config["url"]
        self.timeout = provider_config["timeout"]
        self.max_retries = provider_config["retries"]
        self.sleep = sleep
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update(
            {"User-Agent": USER_AGENT, "Accept": "application/xml, text/xml"}
        )
        return session

    def _get_feed_body(self) -> bytes:
        """
        Issues a single GET against the provider, translating every failure
        into a classified FetchError.
        """
        try:
            response = self.session.get(self.base_url, timeout=self.timeout)
            response.raise_for_status()
            return response.content
        except requests.exceptions.HTTPError as http_err:
            status_code = getattr(http_err.response, "status_code", None) or 0
            cause = (
                FetchErrorCause.HTTP_5XX
                if status_code >= 500
                else FetchErrorCause.HTTP_4XX
            )
            logger.error(
                f"HTTP error occurred: {http_err} - Status: {status_code}"
            )
            raise FetchError(
                f"Provider returned HTTP {status_code}", cause
            ) from http_err
        except requests.exceptions.Timeout as timeout_err:
            logger.error(f"Timeout error occurred: {timeout_err}")
            raise FetchError(
                f"Provider timed out after {self.timeout}s", FetchErrorCause.TIMEOUT
            ) from timeout_err
        except requests.exceptions.ConnectionError as conn_err:
            if _is_dns_failure(conn_err):
                logger.error(f"DNS resolution failed: {conn_err}")
                raise FetchError(
                    f"Could not resolve provider host: {conn_err}",
                    FetchErrorCause.DNS,
                ) from conn_err
            logger.error(f"Connection error occurred: {conn_err}")
            raise FetchError(
                f"Could not connect to provider: {conn_err}", FetchErrorCause.NETWORK
            ) from conn_err
        except requests.exceptions.RequestException as req_err:
            logger.error(f"An unexpected error occurred during the request: {req_err}")
            raise FetchError(
                f"Provider request failed: {req_err}", FetchErrorCause.NETWORK
            ) from req_err

    def fetch(self) -> RawFeed:
        """
        Fetches and parses the plan feed, retrying transient failures with
        exponential backoff.

        Returns:
            RawFeed: The validated feed (possibly with no base plans).

        Raises:
            FetchError: When the provider stays unreachable or answers an
                error status.
            ParseError: When the body is not a valid plan feed. Never retried.
        """
        logger.info(
            f"Fetching plans from provider {self.provider_name} at {self.base_url} "
            f"(timeout {self.timeout}s)"
        )
        started = time.monotonic()
        retrying = build_retrying(self.max_retries, sleep=self.sleep)
        body = retrying(self._get_feed_body)
        logger.info(
            f"Fetched {len(body)} bytes from {self.provider_name} in "
            f"{(time.monotonic() - started) * 1000:.0f}ms"
        )
        return parse_feed_xml(body)
