"""
Styled text model shared by the renderer stages and the display host
"""

from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class StyledRun:
    """Styling over text[start:end]; a run later in a document's list wins on conflicts"""
    start: int
    end: int
    bold: bool = False
    italic: bool = False
    monospace: bool = False
    color: str | None = None

    def shifted(self, offset: int) -> "StyledRun":
        return replace(self, start=self.start + offset, end=self.end + offset)

    @property
    def attributes(self) -> frozenset:
        attrs = set()
        if self.bold:
            attrs.add("bold")
        if self.italic:
            attrs.add("italic")
        if self.monospace:
            attrs.add("monospace")
        if self.color is not None:
            attrs.add("foregroundColor")
        return frozenset(attrs)


@dataclass
class StyledDocument:
    """Output text plus the ordered runs styling it"""
    text: str = ""
    runs: list[StyledRun] = field(default_factory=list)

    def __len__(self):
        return len(self.text)

    def add_run(self, start: int, end: int, **attributes) -> None:
        """Append a run, ignoring empty or out-of-range ones"""
        start = max(start, 0)
        end = min(end, len(self.text))
        if start >= end:
            return
        self.runs.append(StyledRun(start, end, **attributes))

    def runs_at(self, position: int) -> list[StyledRun]:
        return [run for run in self.runs if run.start <= position < run.end]

    def slice_text(self, run: StyledRun) -> str:
        return self.text[run.start:run.end]

    @classmethod
    def join(cls, documents: list["StyledDocument"], separator: str = "\n") -> "StyledDocument":
        """Concatenate documents, shifting each one's runs into the joined text"""
        joined = cls()
        parts = []
        offset = 0
        for index, document in enumerate(documents):
            if index:
                parts.append(separator)
                offset += len(separator)
            parts.append(document.text)
            joined.runs.extend(run.shifted(offset) for run in document.runs)
            offset += len(document.text)
        joined.text = "".join(parts)
        return joined
