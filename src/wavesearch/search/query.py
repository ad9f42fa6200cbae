"""Translation of user search queries into backend filter syntax."""

import re

from wavesearch.search.schemas import (
    CREATOR,
    DOC_NAME,
    IN,
    LMT,
    TEXT,
    WAVE_ID,
    WAVELET_ID,
    WITH,
    WITH_FUZZY,
)

# Every indexed blip carries all of these fields.
COMPLETENESS_QUERY = " AND ".join(
    f"{field}:[* TO *]"
    for field in (WAVE_ID, WAVELET_ID, DOC_NAME, LMT, WITH, WITH_FUZZY, CREATOR, TEXT)
)

FILTER_QUERY_PREFIX = f"{{!lucene q.op=AND df={TEXT}}}{WITH}:"

IN_PATTERN = re.compile(r"\bin:\S*")

_TOKEN_FIELDS: dict[str, str] = {
    "in": IN,
    "with": WITH_FUZZY,
    "creator": CREATOR,
}
_TOKEN_PATTERN = re.compile(r"\b(in|with|creator):")


def build_user_query(query: str) -> str:
    """Rewrite recognised query tokens into backend field predicates.

    Only tokens starting at a word boundary are rewritten, so "login:x" and
    "inward:" stay untouched. Anything else is left as free text, which the
    backend matches against the extracted blip text.

    Args:
        query: Raw user query.

    Returns:
        Query with in:/with:/creator: replaced by their field names.
    """
    return _TOKEN_PATTERN.sub(lambda m: f"{_TOKEN_FIELDS[m.group(1)]}:", query)


def is_folder_scoped(query: str) -> bool:
    """Whether the query already names a folder with an in: token."""
    return IN_PATTERN.search(query) is not None


def build_filter_query(user: str, query: str, shared_participant: str) -> str:
    """Combine participant scope and user query into one filter clause.

    Without an explicit folder the search covers waves addressed to the
    user or to the domain's shared participant.

    Args:
        user: Address of the searching participant.
        query: Raw user query.
        shared_participant: Broadcast participant address of the domain.

    Returns:
        Backend filter query.
    """
    if is_folder_scoped(query):
        fq = FILTER_QUERY_PREFIX + user
    else:
        fq = f"{FILTER_QUERY_PREFIX}({user} OR {shared_participant})"
    if query:
        fq += f" AND ({build_user_query(query)})"
    return fq
