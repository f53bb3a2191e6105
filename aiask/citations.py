from typing import List, Optional, Set, Sequence

from pydantic import BaseModel

UNTITLED = "Untitled"


class Citation(BaseModel):  # type: ignore
    url: str
    title: str = UNTITLED
    content: Optional[str] = None


class CitationRegistry:
    def __init__(self) -> None:
        self._citations: List[Citation] = []
        self._urls: Set[str] = set()

    def add(self, citation: Citation) -> bool:
        if citation.url in self._urls:
            return False
        self._urls.add(citation.url)
        self._citations.append(citation)
        return True

    def list(self) -> List[Citation]:
        return list(self._citations)

    def __contains__(self, url: object) -> bool:
        return url in self._urls

    def __len__(self) -> int:
        return len(self._citations)


def format_citations(citations: Sequence[Citation]) -> str:
    if not citations:
        return ""
    lines = ["", "---", "Sources:"]
    for index, citation in enumerate(citations, start=1):
        lines.append(f"[{index}] {citation.title}")
        lines.append(f"    {citation.url}")
    return "\n".join(lines) + "\n"
