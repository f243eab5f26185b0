"""
Classification of the free-text embargo terms chosen at deposit time.
"""

import enum


class MissingEmbargoTerms(Exception):
    """
    An embargo date was supplied without any terms. This is an integration
    error in the caller, not a recoverable condition.
    """

    pass


class EmbargoKind(str, enum.Enum):
    # Public access is deferred until the embargo date.
    DELAYED_RELEASE = "delayed_release"
    # Public access is deferred, the institution reads immediately.
    INSTITUTION_RESTRICTED = "institution_restricted"


def classify_terms(terms: str | None, marker: str) -> EmbargoKind:
    """
    Classify a terms string by looking for the institutional marker.

    Parameters
    ----------
    terms: str | None
        The terms string from the deposit metadata.
    marker: str
        The phrase that marks an institution-restricted embargo, e.g.
        "Restrict to UW". Matching is a case-sensitive substring test.

    Raises
    ------
    MissingEmbargoTerms
        If `terms` is None.
    """
    if terms is None:
        raise MissingEmbargoTerms("Embargo terms are required to classify an embargo")

    if marker in terms:
        return EmbargoKind.INSTITUTION_RESTRICTED

    return EmbargoKind.DELAYED_RELEASE
