"""
ResourceProvider contract and the backend error classification shared by
all providers.

A provider lists one resource kind at one scope. ``query`` never lets a
backend error escape: the exception is turned into a tagged outcome, either
``not_applicable`` (the scope does not exist for this kind) or ``failed``
with an ErrorCategory.
"""
from enum import Enum
from typing import TYPE_CHECKING, FrozenSet, Iterable, Optional

from google.api_core import exceptions as gexc
from google.auth import exceptions as auth_exceptions
from googleapiclient.errors import HttpError

from gcpfootprint.models.outcome import ErrorCategory, ProviderOutcome
from gcpfootprint.models.record import ResourceRecord
from gcpfootprint.models.scope import Scope, ScopeKind

if TYPE_CHECKING:
    from gcpfootprint.context import RunContext

_MAX_ERROR_LEN = 200


class Placement(str, Enum):
    HEADER   = "header"     # own section ahead of GLOBAL RESOURCES
    GLOBAL   = "global"
    TRAILING = "trailing"   # own section after the regions


def http_status(exc: BaseException) -> Optional[int]:
    """HTTP status carried by a google-api-core or googleapiclient error."""
    if isinstance(exc, gexc.GoogleAPICallError):
        return exc.code
    if isinstance(exc, HttpError):
        try:
            return int(exc.resp.status)
        except (AttributeError, TypeError, ValueError):
            return None
    return None


def classify_error(exc: BaseException) -> ErrorCategory:
    if isinstance(exc, auth_exceptions.GoogleAuthError):
        return ErrorCategory.AUTH
    if isinstance(exc, (gexc.RetryError, ConnectionError, TimeoutError)):
        return ErrorCategory.NETWORK

    status = http_status(exc)
    if status is None:
        return ErrorCategory.UNKNOWN
    if status == 401:
        return ErrorCategory.AUTH
    if status == 429:
        return ErrorCategory.QUOTA
    if status == 403:
        msg = str(exc).lower()
        if "quota" in msg or "ratelimitexceeded" in msg:
            return ErrorCategory.QUOTA
        return ErrorCategory.PERMISSION_DENIED
    if status in (408, 504) or status >= 500:
        return ErrorCategory.NETWORK
    if 400 <= status < 500:
        return ErrorCategory.INVALID
    return ErrorCategory.UNKNOWN


def describe_error(exc: BaseException) -> str:
    text = str(exc).strip().splitlines()
    msg = text[0] if text else type(exc).__name__
    if len(msg) > _MAX_ERROR_LEN:
        msg = msg[: _MAX_ERROR_LEN - 1] + "…"
    return msg


class ResourceProvider:
    """Lists one resource kind at the scopes it applies to."""

    kind: str = ""
    scopes: FrozenSet[ScopeKind] = frozenset()
    placement: Placement = Placement.GLOBAL
    section_title: Optional[str] = None

    def applies_to(self, scope_kind: ScopeKind) -> bool:
        return scope_kind in self.scopes

    def list_resources(self, scope: Scope, ctx: "RunContext") -> Iterable[ResourceRecord]:
        raise NotImplementedError

    def is_scope_absent(self, exc: BaseException, scope: Scope) -> bool:
        """
        True when *exc* means the scope does not exist for this kind.
        A 404 on the global scope means the project is missing, which is a
        real failure.
        """
        return not scope.is_global and http_status(exc) == 404

    def query(self, scope: Scope, ctx: "RunContext") -> ProviderOutcome:
        if not self.applies_to(scope.kind):
            raise ValueError(f"{self.kind} does not apply to {scope.kind.value} scopes")
        try:
            records = list(self.list_resources(scope, ctx))
        except Exception as exc:
            if self.is_scope_absent(exc, scope):
                return ProviderOutcome.not_applicable(self.kind, scope, describe_error(exc))
            return ProviderOutcome.failed(self.kind, scope, classify_error(exc), describe_error(exc))
        return ProviderOutcome.ok(self.kind, scope, records)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.kind!r}>"


class ZonalProvider(ResourceProvider):
    """Compute Engine zonal listings; an unknown zone is reported as 400."""

    scopes = frozenset({ScopeKind.ZONE})

    def is_scope_absent(self, exc: BaseException, scope: Scope) -> bool:
        if super().is_scope_absent(exc, scope):
            return True
        return http_status(exc) == 400 and "unknown zone" in str(exc).lower()


def format_timestamp(value) -> str:
    """Render proto/datetime timestamps; API strings pass through."""
    if value is None or value == "":
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def enum_name(value) -> str:
    """Proto enums render by name, plain strings as-is."""
    return getattr(value, "name", value) if value is not None else ""


def last_segment(url: str) -> str:
    """'https://…/zones/us-central1-a/machineTypes/e2-small' -> 'e2-small'."""
    return url.rsplit("/", 1)[-1] if url else ""
