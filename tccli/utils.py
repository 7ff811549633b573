from typing import Any, Optional

import httpx
from loguru import logger

from tccli.errors import DecodeError, HTTPStatusError, NetworkError

# Only this much of an error response body is kept for the error message
MAX_ERROR_BODY = 200


def create_client(timeout: Optional[float] = None) -> httpx.Client:
    """Create the http client shared by one command invocation"""
    if timeout is None:
        return httpx.Client()
    return httpx.Client(timeout=timeout)


def _send(client: httpx.Client, method: str, url: str, **kwargs: Any) -> httpx.Response:
    try:
        return client.request(method, url, **kwargs)
    except httpx.InvalidURL as e:
        raise NetworkError(f"Invalid url {url}: {e}", url=url, cause=e) from e
    except httpx.HTTPError as e:
        raise NetworkError(f"Request to {url} failed: {e}", url=url, cause=e) from e


def request_json(client: httpx.Client, method: str, url: str, **kwargs: Any) -> Any:
    """Send a request and return the decoded json body.

    Raises:
        NetworkError: If the request could not be sent or no response arrived
        HTTPStatusError: If the response status is anything other than 200
        DecodeError: If the response body is not valid json
    """
    logger.debug(f"{method} {url}")
    response = _send(client, method, url, **kwargs)
    if response.status_code != 200:
        raise HTTPStatusError(
            f"Bad (!= 200) status code {response.status_code} from {url}",
            url=url,
            status_code=response.status_code,
            response_body=response.text[:MAX_ERROR_BODY],
        )
    try:
        return response.json()
    except ValueError as e:
        raise DecodeError(f"Invalid json from {url}: {e}", url=url, cause=e) from e


def fetch_json(client: httpx.Client, url: str) -> Any:
    """GET a url returning json"""
    return request_json(client, "GET", url)
