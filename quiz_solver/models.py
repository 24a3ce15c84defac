# models.py - value types passed between the page, resolver, summation and job layers

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

PDF_MAGIC = b"%PDF"


@dataclass(frozen=True)
class PageArtifacts:
    """What the browser hands over after rendering a quiz page.

    Hrefs and form actions are absolute; script sources are kept as written
    in the markup and resolved against ``base_url`` when fetched.
    """
    links: Tuple[Tuple[str, str], ...] = ()
    inline_scripts: Tuple[str, ...] = ()
    external_script_sources: Tuple[str, ...] = ()
    body_text: str = ""
    base_url: str = ""
    form_actions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RemoteUrl:
    url: str
    kind = "remote_url"


@dataclass(frozen=True)
class InlineBytes:
    data: bytes = field(repr=False)
    kind = "inline_bytes"


@dataclass(frozen=True)
class NotFound:
    kind = "not_found"


NOT_FOUND = NotFound()

ResolvedReference = Union[RemoteUrl, InlineBytes]


@dataclass(frozen=True)
class CandidateDecode:
    raw: str
    data: bytes = field(repr=False)

    @property
    def looks_like_document(self):
        return self.data[:4] == PDF_MAGIC

    @property
    def text(self):
        return self.data.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class TableScan:
    """Fold state for the table summation pass."""
    header_index: Optional[int] = None
    value_column_index: Optional[int] = None
    cells: Tuple[str, ...] = ()
    done: bool = False
    position: int = 0

    @property
    def header_found(self):
        return self.header_index is not None


@dataclass(frozen=True)
class SumResult:
    total: float
    method: str  # "table" or "fallback"
    header: Optional[str] = None


@dataclass(frozen=True)
class QuizTask:
    email: str
    secret: str
    url: str


@dataclass(frozen=True)
class JobOutcome:
    status: str
    answer: object = None
    submit_url: Optional[str] = None
    reference: str = NOT_FOUND.kind
    method: Optional[str] = None
