"""
# mdbook: blocks.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Block rendering of documents.

Every line is trimmed and then classified by its leading characters, in order of priority:
````
#[...] «text»           heading; the number of hashes is the depth
| «cell» | [...] |      table row
> «text»                blockquote line
---[...]                page break
«text»                  paragraph
````
Blank lines produce nothing.

Headings open nested `<article class="a«depth»">` sections,
which remain open until a heading of the same or lesser depth, or the end of input.
Consecutive table rows form one `<table>`, where a second row of `---` cells
makes the first row a header row. Consecutive blockquote lines form one `<blockquote>`.
"""

import enum
from typing import Iterable, NamedTuple, Optional

from mdbook.constants import PAGE_BREAK_HTML, RULE_MARKER, TABLE_SEPARATOR_MARKER
from mdbook.inline import InlineRenderer


class LineKind(enum.Enum):
    HEADING = enum.auto()
    TABLE_ROW = enum.auto()
    BLOCKQUOTE = enum.auto()
    RULE = enum.auto()
    PARAGRAPH = enum.auto()
    BLANK = enum.auto()


class ClassifiedLine(NamedTuple):
    kind: LineKind
    content: str
    depth: int = 0
    cells: tuple[str, ...] = ()


def is_table_row(line: str) -> bool:
    return len(line) >= 2 and line.startswith('|') and line.endswith('|')


def extract_cells(line: str) -> tuple[str, ...]:
    return tuple(
        cell.strip()
        for cell in line[1:-1].split('|')
    )


def classify_line(line: str) -> 'ClassifiedLine':
    line = line.strip()

    if line == '':
        return ClassifiedLine(LineKind.BLANK, line)

    if line.startswith('#'):
        text = line.lstrip('#')
        depth = len(line) - len(text)
        return ClassifiedLine(LineKind.HEADING, text.strip(), depth=depth)

    if is_table_row(line):
        return ClassifiedLine(LineKind.TABLE_ROW, line, cells=extract_cells(line))

    if line.startswith('>'):
        return ClassifiedLine(LineKind.BLOCKQUOTE, line[1:].lstrip())

    if line.startswith(RULE_MARKER):
        return ClassifiedLine(LineKind.RULE, line)

    return ClassifiedLine(LineKind.PARAGRAPH, line)


class SectionStack:
    """
    Object tracking the open `<article>` sections, innermost last.

    Opening a section of depth «d» first closes every open section of depth at least «d».
    """
    _open_depths: list[int]

    def __init__(self):
        self._open_depths = []

    @property
    def depth(self) -> int:
        if len(self._open_depths) == 0:
            return 0

        return self._open_depths[-1]

    @property
    def open_count(self) -> int:
        return len(self._open_depths)

    def open(self, depth: int) -> str:
        closing_tags = self._close_while(lambda open_depth: open_depth >= depth)
        self._open_depths.append(depth)

        return f'{closing_tags}<article class="a{depth}">'

    def close_all(self) -> str:
        return self._close_while(lambda open_depth: True)

    def _close_while(self, predicate) -> str:
        closing_tags = []
        while len(self._open_depths) > 0 and predicate(self._open_depths[-1]):
            self._open_depths.pop()
            closing_tags.append('</article>\n')

        return ''.join(closing_tags)


class BlockState(enum.Enum):
    NONE = enum.auto()
    IN_TABLE = enum.auto()
    IN_BLOCKQUOTE = enum.auto()


class BlockRenderer:
    """
    Object rendering documents (sequences of lines) to a single HTML fragment.

    A renderer may be reused; each call to `render(...)` or `render_documents(...)` starts afresh.
    """
    _inline_renderer: 'InlineRenderer'

    def __init__(self, inline_renderer: Optional['InlineRenderer'] = None):
        if inline_renderer is None:
            inline_renderer = InlineRenderer()
        self._inline_renderer = inline_renderer

    def render(self, lines: Iterable[str]) -> str:
        return self.render_documents([lines])

    def render_documents(self, documents: Iterable[Iterable[str]]) -> str:
        """
        Render several documents in order, as if one.

        Tables and blockquotes end with their document, but sections run on into the next.
        """
        builder = _FragmentBuilder(self._inline_renderer)
        for lines in documents:
            for line in lines:
                builder.feed(classify_line(line))
            builder.flush()

        return builder.finish()


class _FragmentBuilder:
    """
    State machine accumulating table rows and blockquote lines between blocks.
    """
    _inline_renderer: 'InlineRenderer'
    _section_stack: 'SectionStack'
    _state: 'BlockState'
    _table_rows: list[tuple[str, ...]]
    _blockquote_lines: list[str]
    _output: list[str]

    def __init__(self, inline_renderer: 'InlineRenderer'):
        self._inline_renderer = inline_renderer
        self._section_stack = SectionStack()
        self._state = BlockState.NONE
        self._table_rows = []
        self._blockquote_lines = []
        self._output = []

    def feed(self, classified_line: 'ClassifiedLine'):
        kind = classified_line.kind

        if self._state == BlockState.IN_TABLE:
            if kind == LineKind.TABLE_ROW:
                self._table_rows.append(classified_line.cells)
                return
            self.flush()

        elif self._state == BlockState.IN_BLOCKQUOTE:
            if kind == LineKind.BLOCKQUOTE:
                self._blockquote_lines.append(classified_line.content)
                return
            self.flush()

        if kind == LineKind.HEADING:
            self._emit_heading(classified_line.depth, classified_line.content)
        elif kind == LineKind.TABLE_ROW:
            self._state = BlockState.IN_TABLE
            self._table_rows = [classified_line.cells]
        elif kind == LineKind.BLOCKQUOTE:
            self._state = BlockState.IN_BLOCKQUOTE
            self._blockquote_lines = [classified_line.content]
        elif kind == LineKind.RULE:
            self._output.append(f'{PAGE_BREAK_HTML}\n')
        elif kind == LineKind.PARAGRAPH:
            self._emit_paragraph(classified_line.content)

    def flush(self):
        if self._state == BlockState.IN_TABLE:
            self._emit_table(self._table_rows)
            self._table_rows = []
        elif self._state == BlockState.IN_BLOCKQUOTE:
            self._emit_blockquote(self._blockquote_lines)
            self._blockquote_lines = []

        self._state = BlockState.NONE

    def finish(self) -> str:
        self.flush()
        self._output.append(self._section_stack.close_all())

        return ''.join(self._output)

    def _emit_heading(self, depth: int, text: str):
        article_tags = self._section_stack.open(depth)
        content = self._inline_renderer.render(text)
        self._output.append(f'{article_tags}<h{depth}>{content}</h{depth}>\n')

    def _emit_paragraph(self, line: str):
        keep, text = self._inline_renderer.translator.filter_line(line)
        if keep:
            self._output.append(f'<p>{InlineRenderer.render_markup(text)}</p>\n')

    def _emit_blockquote(self, lines: list[str]):
        paragraphs = '</p><p>'.join(
            self._inline_renderer.render(line)
            for line in lines
            if line != ''
        )
        self._output.append(f'<blockquote><p>{paragraphs}</p></blockquote>\n')

    def _emit_table(self, rows: list[tuple[str, ...]]):
        has_header = len(rows) >= 2 and all(TABLE_SEPARATOR_MARKER in cell for cell in rows[1])

        table_rows = []
        if has_header:
            table_rows.append(self._build_table_row(rows[0], 'th'))
            body_rows = rows[2:]
        else:
            body_rows = rows

        for cells in body_rows:
            table_rows.append(self._build_table_row(cells, 'td'))

        self._output.append(f'<table>{"".join(table_rows)}</table>\n')

    def _build_table_row(self, cells: tuple[str, ...], tag_name: str) -> str:
        rendered_cells = ''.join(
            f'<{tag_name}>{self._inline_renderer.render(cell)}</{tag_name}>'
            for cell in cells
        )

        return f'<tr>{rendered_cells}</tr>'
