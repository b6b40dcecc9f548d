from ..core.exceptions import NotFound
from ..utils.validators import is_valid_code
from .store import LinkStore


class RedirectResolver:
    """Turns a short code into its destination and records the visit"""

    def __init__(self, store: LinkStore):
        self.store = store

    def resolve(self, code: str) -> str:
        """
        Resolve a code to its long URL.

        Invalid and unknown codes both raise NotFound. The click counter
        is incremented only after a successful lookup, and before the
        destination is returned.
        """
        if not is_valid_code(code):
            raise NotFound()

        link = self.store.get_by_code(code)
        if link is None:
            raise NotFound()

        long_url = link.long_url
        self.store.increment_clicks(code)
        return long_url
