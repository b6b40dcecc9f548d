import logging
from typing import List, Optional

from ..config import settings
from ..core.exceptions import Conflict, InvalidCode, InvalidUrl, NotFound
from ..core.shortener import generate_short_code
from ..models import Link
from ..schemas.link import LinkResponse
from ..utils.validators import is_valid_code, is_valid_url
from .store import LinkStore

logger = logging.getLogger(__name__)

# Path segments served by fixed routes; a link under one would be unreachable
RESERVED_CODES = frozenset({"api", "code", "health", "docs", "redoc"})


class LinkService:
    """
    Create, list, read and delete links.

    Validation always runs before any storage call. Responses are Link
    views: the stored row plus a computed short_url.
    """

    def __init__(self, store: LinkStore, base_url: str,
                 code_length: int = None, generation_attempts: int = None):
        self.store = store
        self.base_url = base_url.rstrip("/")
        if code_length is None:
            code_length = settings.SHORT_CODE_LENGTH
        if generation_attempts is None:
            generation_attempts = settings.CODE_GENERATION_ATTEMPTS
        self.code_length = code_length
        self.generation_attempts = generation_attempts

    def to_view(self, link: Link) -> LinkResponse:
        return LinkResponse(
            code=link.code,
            long_url=link.long_url,
            clicks=link.clicks,
            last_clicked=link.last_clicked,
            created_at=link.created_at,
            short_url=f"{self.base_url}/{link.code}"
        )

    def create_link(self, long_url: str, code: Optional[str] = None) -> LinkResponse:
        if not is_valid_url(long_url):
            raise InvalidUrl()

        custom = code.strip() if isinstance(code, str) else ""
        if custom:
            link = self._insert(custom, long_url)
        else:
            link = self._insert_generated(long_url)

        logger.info("Created link %s -> %s", link.code, link.long_url)
        return self.to_view(link)

    def _insert(self, code: str, long_url: str) -> Link:
        self._check_code(code)
        if self.store.exists(code):
            raise Conflict(f"Code '{code}' already exists")
        # A concurrent duplicate that slipped past the check fails here with DuplicateCode
        return self.store.create(code, long_url)

    def _insert_generated(self, long_url: str) -> Link:
        # Generated codes retry on collision; custom codes never do
        for attempt in range(1, self.generation_attempts + 1):
            code = generate_short_code(self.code_length)
            if code.lower() in RESERVED_CODES:
                continue
            try:
                return self._insert(code, long_url)
            except Conflict:
                logger.warning("Generated code %s collided (attempt %d)", code, attempt)
        raise Conflict("Unable to generate a unique code")

    def _check_code(self, code: str) -> None:
        if not is_valid_code(code) or code.lower() in RESERVED_CODES:
            raise InvalidCode()

    def list_links(self) -> List[LinkResponse]:
        return [self.to_view(link) for link in self.store.list_all()]

    def get_link(self, code: str) -> LinkResponse:
        if not is_valid_code(code):
            raise InvalidCode()

        link = self.store.get_by_code(code)
        if link is None:
            raise NotFound("Link not found")
        return self.to_view(link)

    def delete_link(self, code: str) -> None:
        """
        Delete a link by code.

        Only blank input is rejected. The code grammar is not applied so
        rows created under older, looser rules can still be removed.
        """
        code = (code or "").strip()
        if not code:
            raise InvalidCode("Invalid code parameter")

        if not self.store.delete_by_code(code):
            raise NotFound("Link not found")
        logger.info("Deleted link %s", code)
