import httpx
from pydantic import ValidationError

from tccli.errors import DecodeError
from tccli.models import PingResponse
from tccli.utils import fetch_json


def ping(client: httpx.Client, ping_url: str) -> PingResponse:
    """Query a service ping endpoint. Any status other than 200 is an error, not 'not alive'."""
    data = fetch_json(client, ping_url)
    try:
        return PingResponse.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Unexpected ping response from {ping_url}: {e}", url=ping_url, cause=e) from e
