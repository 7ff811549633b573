from datetime import datetime
from pydantic import BaseModel, Field
from typing import Dict, List, Optional

# Service name (e.g. "queue") -> http ping endpoint of that service
PingURLs = Dict[str, str]

# Service name -> url of the service's api reference document
Manifest = Dict[str, str]


class APIEntry(BaseModel):
    """Single endpoint of a service api reference (only name and route are used)"""
    name: str
    route: str = ""


class APIReference(BaseModel):
    """Subset of a service api reference needed to find its ping endpoint"""
    base_url: str = Field(..., alias="baseUrl")
    entries: List[APIEntry] = Field(default_factory=list)

    class Config:
        populate_by_name = True

    def find_entry(self, name: str) -> Optional[APIEntry]:
        """Return the first entry with the given name"""
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None


class CachedURLs(BaseModel):
    """On-disk format of the ping url cache file"""
    last_updated: datetime = Field(..., alias="lastUpdated")
    ping_urls: PingURLs = Field(..., alias="pingURLs")

    class Config:
        populate_by_name = True


class PingResponse(BaseModel):
    """Body returned by a service ping endpoint"""
    alive: bool
    uptime: float


class ScopeSet(BaseModel):
    """Request and response body of the auth service scope expansion"""
    scopes: List[str] = Field(default_factory=list)
