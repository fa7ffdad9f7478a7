"""
Search criteria for the admin user search.

Turns raw query parameters into exactly one search mode:

    ById            search="id:<user id>"
    FreeText        search="<term>"
    AttributeFilter any structured field or a non-empty q
    ListAll         nothing of the above

The first matching rule wins, in that order.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Union

from .models import UserSearchParams

logger = logging.getLogger(__name__)


SEARCH_ID_PREFIX = "id:"
NO_OFFSET = -1

# Attribute keys understood by the user directory
LAST_NAME = "lastName"
FIRST_NAME = "firstName"
EMAIL = "email"
USERNAME = "username"
EMAIL_VERIFIED = "emailVerified"
PHONE_NUMBER = "phoneNumber"
PHONE_NUMBER_LOCALE = "phoneNumberLocale"
PHONE_NUMBER_VERIFIED = "phoneNumberVerified"
IDP_ALIAS = "idpAlias"
IDP_USER_ID = "idpUserId"
ENABLED = "enabled"

# Keys that steer the search itself and may never come from q
RESERVED_QUERY_KEYS = frozenset({"search", "exact", "includeServiceAccount", "groups"})

_QUERY_PAIR = re.compile(r'(?:"([^"]*)"|([^\s:"]+))\s*:\s*(?:"([^"]*)"|([^\s"]+))')
_QUERY_KEY = re.compile(r"[A-Za-z0-9_.\-]+")


@dataclass(frozen=True)
class ById:
    id: str


@dataclass(frozen=True)
class FreeText:
    term: str
    enabled: Optional[bool] = None


@dataclass(frozen=True)
class AttributeFilter:
    attributes: dict[str, str] = field(default_factory=dict)
    exact: bool = False
    include_service_accounts: bool = True


@dataclass(frozen=True)
class ListAll:
    pass


SearchMode = Union[ById, FreeText, AttributeFilter, ListAll]


@dataclass(frozen=True)
class SearchCriteria:
    """A search mode plus the requested result window."""

    mode: SearchMode
    first: int = NO_OFFSET
    max: int = 100

    @property
    def include_service_accounts(self) -> bool:
        return isinstance(self.mode, AttributeFilter) and self.mode.include_service_accounts


def parse_search_query(query: str) -> dict[str, str]:
    """
    Parse a structured query string of key:value pairs.

    Keys and values may be double-quoted to contain spaces:

        department:sales "cost center":"42 b"

    Any malformed pair or disallowed key discards the whole query and
    returns an empty mapping.
    """
    fields: dict[str, str] = {}
    pos = 0
    length = len(query)

    while pos < length:
        if query[pos].isspace():
            pos += 1
            continue

        match = _QUERY_PAIR.match(query, pos)
        if match is None:
            logger.debug(f"Ignoring malformed search query at offset {pos}: {query!r}")
            return {}

        key_quoted, key, value_quoted, value = match.groups()
        key = key_quoted if key_quoted is not None else key
        value = value_quoted if value_quoted is not None else value

        if not _QUERY_KEY.fullmatch(key) or key in RESERVED_QUERY_KEYS:
            logger.debug(f"Ignoring search query with disallowed key {key!r}")
            return {}

        fields[key] = value
        pos = match.end()

    return fields


def _bool_str(value: bool) -> str:
    return "true" if value else "false"


class SearchCriteriaBuilder:
    """
    Builds SearchCriteria from raw query parameters.

    Pure: no I/O, no side effects.
    """

    def __init__(self, default_max_results: int = 100) -> None:
        self._default_max_results = default_max_results

    def build(self, params: UserSearchParams) -> SearchCriteria:
        return SearchCriteria(
            mode=self.select_mode(params),
            first=params.first if params.first is not None else NO_OFFSET,
            max=params.max if params.max is not None else self._default_max_results,
        )

    def select_mode(self, params: UserSearchParams) -> SearchMode:
        if params.search is not None:
            if params.search.startswith(SEARCH_ID_PREFIX):
                return ById(id=params.search[len(SEARCH_ID_PREFIX):].strip())
            # Structured fields are not combined with free text
            return FreeText(term=params.search.strip(), enabled=params.enabled)

        query_fields = parse_search_query(params.q) if params.q is not None else {}
        explicit = self._explicit_fields(params)

        if explicit or params.exact is not None or query_fields:
            attributes = {**query_fields, **explicit}
            return AttributeFilter(attributes=attributes, exact=bool(params.exact))

        return ListAll()

    @staticmethod
    def _explicit_fields(params: UserSearchParams) -> dict[str, str]:
        candidates = {
            LAST_NAME: params.last_name,
            FIRST_NAME: params.first_name,
            EMAIL: params.email,
            PHONE_NUMBER_LOCALE: params.phone_number_locale,
            PHONE_NUMBER: params.phone_number,
            USERNAME: params.username,
            EMAIL_VERIFIED: params.email_verified,
            PHONE_NUMBER_VERIFIED: params.phone_number_verified,
            IDP_ALIAS: params.idp_alias,
            IDP_USER_ID: params.idp_user_id,
            ENABLED: params.enabled,
        }
        fields = {}
        for key, value in candidates.items():
            if value is None:
                continue
            fields[key] = _bool_str(value) if isinstance(value, bool) else value
        return fields
