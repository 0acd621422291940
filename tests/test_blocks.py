"""
# mdbook: test_blocks.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `blocks.py`.
"""

import unittest

from mdbook.blocks import (
    BlockRenderer,
    ClassifiedLine,
    LineKind,
    SectionStack,
    classify_line,
    extract_cells,
    is_table_row,
)
from mdbook.inline import InlineRenderer
from mdbook.translations import Translator


class TestClassifyLine(unittest.TestCase):
    def test_is_table_row(self):
        self.assertTrue(is_table_row('| a | b |'))
        self.assertTrue(is_table_row('||'))
        self.assertFalse(is_table_row('|'))
        self.assertFalse(is_table_row('| a | b'))
        self.assertFalse(is_table_row('a | b |'))

    def test_extract_cells(self):
        self.assertEqual(extract_cells('| a | b |'), ('a', 'b'))
        self.assertEqual(extract_cells('|a|  |c|'), ('a', '', 'c'))
        self.assertEqual(extract_cells('||'), ('',))

    def test_classify_line(self):
        self.assertEqual(classify_line(''), ClassifiedLine(LineKind.BLANK, ''))
        self.assertEqual(classify_line('  \t '), ClassifiedLine(LineKind.BLANK, ''))
        self.assertEqual(classify_line('# Title'), ClassifiedLine(LineKind.HEADING, 'Title', depth=1))
        self.assertEqual(classify_line('  ###   Deep  '), ClassifiedLine(LineKind.HEADING, 'Deep', depth=3))
        self.assertEqual(classify_line('##NoSpace'), ClassifiedLine(LineKind.HEADING, 'NoSpace', depth=2))
        self.assertEqual(classify_line('########'), ClassifiedLine(LineKind.HEADING, '', depth=8))
        self.assertEqual(
            classify_line('| a | b |'),
            ClassifiedLine(LineKind.TABLE_ROW, '| a | b |', cells=('a', 'b')),
        )
        self.assertEqual(classify_line('>   quoted'), ClassifiedLine(LineKind.BLOCKQUOTE, 'quoted'))
        self.assertEqual(classify_line('>'), ClassifiedLine(LineKind.BLOCKQUOTE, ''))
        self.assertEqual(classify_line('---'), ClassifiedLine(LineKind.RULE, '---'))
        self.assertEqual(classify_line('-----x'), ClassifiedLine(LineKind.RULE, '-----x'))
        self.assertEqual(classify_line('|---|---|').kind, LineKind.TABLE_ROW)
        self.assertEqual(classify_line('--'), ClassifiedLine(LineKind.PARAGRAPH, '--'))
        self.assertEqual(classify_line('| not a row'), ClassifiedLine(LineKind.PARAGRAPH, '| not a row'))
        self.assertEqual(classify_line('  text  '), ClassifiedLine(LineKind.PARAGRAPH, 'text'))


class TestSectionStack(unittest.TestCase):
    def test_open_and_close(self):
        section_stack = SectionStack()
        self.assertEqual(section_stack.depth, 0)
        self.assertEqual(section_stack.open(1), '<article class="a1">')
        self.assertEqual(section_stack.open(2), '<article class="a2">')
        self.assertEqual(section_stack.open(3), '<article class="a3">')
        self.assertEqual(section_stack.depth, 3)
        self.assertEqual(section_stack.open(1), '</article>\n' * 3 + '<article class="a1">')
        self.assertEqual(section_stack.open_count, 1)
        self.assertEqual(section_stack.open(1), '</article>\n<article class="a1">')
        self.assertEqual(section_stack.close_all(), '</article>\n')
        self.assertEqual(section_stack.close_all(), '')
        self.assertEqual(section_stack.depth, 0)

    def test_skipped_depth(self):
        section_stack = SectionStack()
        section_stack.open(1)
        section_stack.open(3)
        self.assertEqual(section_stack.open_count, 2)
        self.assertEqual(section_stack.open(2), '</article>\n<article class="a2">')
        self.assertEqual(section_stack.open_count, 2)
        self.assertEqual(section_stack.close_all(), '</article>\n</article>\n')


class TestBlockRenderer(unittest.TestCase):
    def setUp(self):
        self.block_renderer = BlockRenderer()

    def assert_balanced(self, html: str):
        depth = 0
        for index in range(len(html)):
            if html.startswith('<article', index):
                depth += 1
            elif html.startswith('</article>', index):
                depth -= 1
            self.assertGreaterEqual(depth, 0)
        self.assertEqual(depth, 0)

    def test_render_empty(self):
        self.assertEqual(self.block_renderer.render([]), '')
        self.assertEqual(self.block_renderer.render(['', '   ', '\t']), '')

    def test_render_heading(self):
        self.assertEqual(
            self.block_renderer.render(['# Title']),
            '<article class="a1"><h1>Title</h1>\n'
            '</article>\n',
        )

    def test_render_heading_sequence(self):
        html = self.block_renderer.render(['# One', '## Two', '### Three', '# Four'])
        self.assertEqual(
            html,
            '<article class="a1"><h1>One</h1>\n'
            '<article class="a2"><h2>Two</h2>\n'
            '<article class="a3"><h3>Three</h3>\n'
            '</article>\n'
            '</article>\n'
            '</article>\n'
            '<article class="a1"><h1>Four</h1>\n'
            '</article>\n',
        )
        self.assert_balanced(html)

    def test_render_heading_sequences_balanced(self):
        for depths in [[1], [3, 1], [1, 1, 1], [2, 4, 3, 1, 6], [1, 2, 2, 3, 1, 7, 7]]:
            lines = ['#' * depth + ' Heading' for depth in depths]
            html = self.block_renderer.render(lines)
            self.assertEqual(html.count('<article'), len(depths))
            self.assertEqual(html.count('</article>'), len(depths))
            self.assert_balanced(html)

    def test_render_deep_heading(self):
        self.assertEqual(
            self.block_renderer.render(['######## Deep *text*']),
            '<article class="a8"><h8>Deep <i>text</i></h8>\n'
            '</article>\n',
        )

    def test_render_paragraph(self):
        self.assertEqual(
            self.block_renderer.render(['**bold** and *italic*']),
            '<p><b>bold</b> and <i>italic</i></p>\n',
        )
        self.assertEqual(
            self.block_renderer.render(['  first  ', '', 'second']),
            '<p>first</p>\n'
            '<p>second</p>\n',
        )

    def test_render_paragraph_inside_section(self):
        self.assertEqual(
            self.block_renderer.render(['# Title', 'Text.']),
            '<article class="a1"><h1>Title</h1>\n'
            '<p>Text.</p>\n'
            '</article>\n',
        )

    def test_render_rule(self):
        self.assertEqual(
            self.block_renderer.render(['before', '---', 'after']),
            '<p>before</p>\n'
            '<p style="page-break-after: always;"></p>\n'
            '<p>after</p>\n',
        )

    def test_render_blockquote(self):
        self.assertEqual(
            self.block_renderer.render(['> one', '>two', '>', '>   *three*', 'after']),
            '<blockquote><p>one</p><p>two</p><p><i>three</i></p></blockquote>\n'
            '<p>after</p>\n',
        )
        self.assertEqual(
            self.block_renderer.render(['> one', '', '> two']),
            '<blockquote><p>one</p></blockquote>\n'
            '<blockquote><p>two</p></blockquote>\n',
        )
        self.assertEqual(self.block_renderer.render(['>']), '<blockquote><p></p></blockquote>\n')

    def test_render_table_with_header(self):
        self.assertEqual(
            self.block_renderer.render([
                '| Name | Value |',
                '| --- | :---: |',
                '| `a` | 1 |',
                '| b | **2** |',
            ]),
            '<table>'
            '<tr><th>Name</th><th>Value</th></tr>'
            '<tr><td><span class="code">a</span></td><td>1</td></tr>'
            '<tr><td>b</td><td><b>2</b></td></tr>'
            '</table>\n',
        )

    def test_render_table_header_only(self):
        self.assertEqual(
            self.block_renderer.render(['| A | B |', '|---|---|']),
            '<table><tr><th>A</th><th>B</th></tr></table>\n',
        )

    def test_render_table_without_separator(self):
        self.assertEqual(
            self.block_renderer.render(['| a | b |', '| c | d |', '| e | f |']),
            '<table>'
            '<tr><td>a</td><td>b</td></tr>'
            '<tr><td>c</td><td>d</td></tr>'
            '<tr><td>e</td><td>f</td></tr>'
            '</table>\n',
        )
        self.assertEqual(
            self.block_renderer.render(['| a | b |', '| --- | c |']),
            '<table>'
            '<tr><td>a</td><td>b</td></tr>'
            '<tr><td>---</td><td>c</td></tr>'
            '</table>\n',
        )
        self.assertEqual(
            self.block_renderer.render(['| only |']),
            '<table><tr><td>only</td></tr></table>\n',
        )

    def test_render_table_stops_at_other_line(self):
        self.assertEqual(
            self.block_renderer.render(['| a |', '# Next', '| b |']),
            '<table><tr><td>a</td></tr></table>\n'
            '<article class="a1"><h1>Next</h1>\n'
            '<table><tr><td>b</td></tr></table>\n'
            '</article>\n',
        )
        self.assertEqual(
            self.block_renderer.render(['| a |', '---', '> q']),
            '<table><tr><td>a</td></tr></table>\n'
            '<p style="page-break-after: always;"></p>\n'
            '<blockquote><p>q</p></blockquote>\n',
        )

    def test_render_documents(self):
        self.assertEqual(
            self.block_renderer.render_documents([
                ['# One', '> quote'],
                ['> next document', '## Two'],
            ]),
            '<article class="a1"><h1>One</h1>\n'
            '<blockquote><p>quote</p></blockquote>\n'
            '<blockquote><p>next document</p></blockquote>\n'
            '<article class="a2"><h2>Two</h2>\n'
            '</article>\n'
            '</article>\n',
        )

    def test_renderer_is_reusable(self):
        self.assertEqual(self.block_renderer.render(['# A', '| x |']), self.block_renderer.render(['# A', '| x |']))

    def test_render_with_translations(self):
        translator = Translator({'TITLE': 'Book', 'HELLO': 'Hi', 'EN_ONLY': '', 'CELL': 'Cell'})
        block_renderer = BlockRenderer(InlineRenderer(translator))
        self.assertEqual(
            block_renderer.render(['# TITLE', 'HELLO world', 'EN_ONLY', 'HELLOWORLD', '> HELLO', '| CELL |']),
            '<article class="a1"><h1>Book</h1>\n'
            '<p>Hi world</p>\n'
            '<p>HELLOWORLD</p>\n'
            '<blockquote><p>Hi</p></blockquote>\n'
            '<table><tr><td>Cell</td></tr></table>\n'
            '</article>\n',
        )

    def test_paragraph_translated_once(self):
        translator = Translator({'A': 'B', 'B': 'A'})
        block_renderer = BlockRenderer(InlineRenderer(translator))
        self.assertEqual(block_renderer.render(['A']), '<p>B</p>\n')


if __name__ == '__main__':
    unittest.main()
