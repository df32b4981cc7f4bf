"""Plain-text edge lists.

One declaration per line::

    # comments and blank lines are ignored
    usnews.com umd.edu          # an edge
    umd.edu -> cs.umd.edu       # an edge, arrow form
    orphan.example              # an isolated node

Parsing is pure; reading wraps file errors into :class:`EdgeListError`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

_ARROW = "->"


class EdgeListError(ValueError):
    """Raised when an edge list cannot be read or has a malformed line."""

    def __init__(self, message: str, *, origin: str, line: int | None = None) -> None:
        location = f"{origin}:{line}" if line is not None else origin
        super().__init__(f"{location}: {message}")
        self.origin = origin
        self.line = line


@dataclass(frozen=True)
class EdgeDeclarations:
    """Nodes and edges declared by one edge list, in declaration order."""

    nodes: tuple[str, ...] = ()
    edges: tuple[tuple[str, str], ...] = field(default_factory=tuple)


def _strip_comment(line: str) -> str:
    return line.split("#", 1)[0].strip()


def parse_edge_list(text: str, *, origin: str = "<string>") -> EdgeDeclarations:
    """Parse edge-list *text* into node and edge declarations.

    Raises:
        EdgeListError: On a line with more than two labels or a dangling arrow.
    """
    nodes: list[str] = []
    edges: list[tuple[str, str]] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = _strip_comment(raw)
        if not line:
            continue
        if _ARROW in line:
            left, _, right = line.partition(_ARROW)
            if len(left.split()) != 1 or len(right.split()) != 1:
                raise EdgeListError(
                    f"expected 'source -> target', got {raw.strip()!r}",
                    origin=origin,
                    line=lineno,
                )
            parts = [left.strip(), right.strip()]
        else:
            parts = line.split()
        if len(parts) == 1:
            nodes.append(parts[0])
        elif len(parts) == 2:
            edges.append((parts[0], parts[1]))
        else:
            raise EdgeListError(
                f"expected 'source target' or a single node, got {len(parts)} labels",
                origin=origin,
                line=lineno,
            )
    return EdgeDeclarations(nodes=tuple(nodes), edges=tuple(edges))


def read_edge_list(path: Path) -> EdgeDeclarations:
    """Read and parse a UTF-8 edge-list file."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise EdgeListError(f"cannot read edge list ({exc})", origin=str(path)) from exc
    return parse_edge_list(text, origin=str(path))
