"""Tests for the SEARCH/REPLACE block parser."""

import pytest

from spekta.editing.block_parser import EditBlock, parse_edit_blocks
from spekta.editing.errors import MalformedEditError


SINGLE_BLOCK = """\
<<<<<<< SEARCH
def greet():
    return "hi"
=======
def greet():
    return "hello"
>>>>>>> REPLACE
"""

MULTI_BLOCK_WITH_CHATTER = """\
Sure, here are the edits:

<<<<<<< SEARCH
import os
=======
import os
import sys
>>>>>>> REPLACE

And the second one:

<<<<<<< SEARCH
    return 1
=======
    return 2
>>>>>>> REPLACE
Done.
"""


class TestParse:
    def test_single_block(self):
        blocks = parse_edit_blocks(SINGLE_BLOCK)

        assert blocks == [
            EditBlock(
                search='def greet():\n    return "hi"',
                replace='def greet():\n    return "hello"',
            )
        ]

    def test_multiple_blocks_in_source_order(self):
        blocks = parse_edit_blocks(MULTI_BLOCK_WITH_CHATTER)

        assert len(blocks) == 2
        assert blocks[0].search == "import os"
        assert blocks[0].replace == "import os\nimport sys"
        assert blocks[1].search == "    return 1"
        assert blocks[1].replace == "    return 2"

    def test_sentinels_matched_after_trim(self):
        raw = "   <<<<<<< SEARCH  \n  x = 1\n\t=======\n  x = 2\n >>>>>>> REPLACE\t\n"
        blocks = parse_edit_blocks(raw)

        # Content lines keep their indentation
        assert blocks == [EditBlock(search="  x = 1", replace="  x = 2")]

    def test_empty_replacement(self):
        raw = "<<<<<<< SEARCH\nremove me\n=======\n>>>>>>> REPLACE"
        blocks = parse_edit_blocks(raw)

        assert blocks == [EditBlock(search="remove me", replace="")]

    def test_crlf_input(self):
        raw = "<<<<<<< SEARCH\r\nfoo\r\nbar\r\n=======\r\nbaz\r\n>>>>>>> REPLACE\r\n"
        blocks = parse_edit_blocks(raw)

        assert blocks == [EditBlock(search="foo\nbar", replace="baz")]

    def test_blocks_are_immutable(self):
        block = parse_edit_blocks(SINGLE_BLOCK)[0]
        with pytest.raises(AttributeError):
            block.search = "changed"


class TestMalformed:
    def test_no_blocks(self):
        with pytest.raises(MalformedEditError, match="No SEARCH/REPLACE blocks"):
            parse_edit_blocks("just some prose, no edits here")

    def test_missing_separator(self):
        raw = "<<<<<<< SEARCH\nfoo\n>>>>>>> REPLACE\n"
        with pytest.raises(MalformedEditError, match="separator"):
            parse_edit_blocks(raw)

    def test_missing_terminator(self):
        raw = "<<<<<<< SEARCH\nfoo\n=======\nbar\n"
        with pytest.raises(MalformedEditError, match="REPLACE"):
            parse_edit_blocks(raw)

    def test_one_bad_block_fails_whole_parse(self):
        raw = SINGLE_BLOCK + "<<<<<<< SEARCH\nfoo\n=======\nbar\n"
        with pytest.raises(MalformedEditError, match="block 2"):
            parse_edit_blocks(raw)

    def test_separator_without_search_is_ignored_text(self):
        raw = "=======\n>>>>>>> REPLACE\n"
        with pytest.raises(MalformedEditError, match="No SEARCH/REPLACE blocks"):
            parse_edit_blocks(raw)
