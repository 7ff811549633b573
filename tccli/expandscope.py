from typing import List, Sequence

import httpx
from loguru import logger
from pydantic import ValidationError

from tccli.errors import DecodeError
from tccli.models import ScopeSet
from tccli.utils import request_json


def expand_scopes(client: httpx.Client, auth_url: str, scopes: Sequence[str]) -> List[str]:
    """Return the given scope set expanded with the scopes implied by any roles it includes.

    The request is sent without credentials.
    """
    url = f"{auth_url.rstrip('/')}/scopes/expand"
    logger.debug(f"Expanding {len(scopes)} scope(s) via {url}")
    data = request_json(client, "POST", url, json=ScopeSet(scopes=list(scopes)).model_dump())
    try:
        return ScopeSet.model_validate(data).scopes
    except ValidationError as e:
        raise DecodeError(f"Unexpected scope expansion response from {url}: {e}", url=url, cause=e) from e
