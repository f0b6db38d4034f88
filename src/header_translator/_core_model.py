from __future__ import annotations

from dataclasses import field

from ._core_base import *  # noqa: F401,F403


@dataclass(frozen=True)
class SourceLocation:
    path: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Statement:
    """One translated declaration.

    ``location`` is kept for diagnostics only and does not take part in
    equality, so the same declaration parsed for two target triples compares
    equal even if line numbers differ.
    """

    kind: str
    name: str
    details: dict[str, Any] = field(default_factory=dict)
    location: SourceLocation | None = field(default=None, compare=False)

    def as_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "name": self.name,
            "details": self.details,
            "location": str(self.location) if self.location is not None else None,
        }

    def describe(self) -> str:
        where = f" at {self.location}" if self.location is not None else ""
        return f"{self.kind} {self.name or '<anonymous>'}{where}"


@dataclass
class File:
    statements: list[Statement] = field(default_factory=list)

    def add_stmt(self, stmt: Statement) -> None:
        self.statements.append(stmt)


@dataclass
class Library:
    files: dict[str, File] = field(default_factory=dict)

    def ensure_file(self, name: str) -> File:
        existing = self.files.get(name)
        if existing is None:
            existing = File()
            self.files[name] = existing
        return existing

    def statement_count(self) -> int:
        return sum(len(item.statements) for item in self.files.values())
