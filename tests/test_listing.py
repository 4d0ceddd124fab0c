"""
Tests for the Program Listing Annotator
=======================================

Covers listing header detection, non-listing printouts, label line
resynchronization, and the " NN " prefix format.
"""

import pytest

from hp41_reader.printer.listing import (
    LISTING_HEADERS,
    NON_LISTING_HEADERS,
    ListingAnnotator,
    ListingState,
    is_label_line,
)


# =============================================================================
# ListingState Tests
# =============================================================================

class TestListingState:
    """Tests for the ListingState dataclass."""

    def test_defaults(self):
        state = ListingState()
        assert not state.in_listing_mode
        assert state.line_number == 0

    def test_reset(self):
        state = ListingState(in_listing_mode=True, line_number=12)
        state.reset()
        assert state == ListingState()


# =============================================================================
# Label Line Detection
# =============================================================================

class TestIsLabelLine:
    """Tests for is_label_line()."""

    def test_label_line(self):
        assert is_label_line(' 05♦LBL "A"\n')
        assert is_label_line(" 99♦LBL 01\n")

    def test_needs_leading_space(self):
        assert not is_label_line("05♦LBL A\n")
        assert not is_label_line("  05♦LBL A\n")

    def test_needs_two_digits(self):
        assert not is_label_line(" 5♦LBL A\n")
        assert not is_label_line(" 0A♦LBL A\n")

    def test_needs_marker(self):
        assert not is_label_line(" 05 LBL A\n")
        assert not is_label_line(" 05*LBL A\n")

    def test_short_lines(self):
        assert not is_label_line("")
        assert not is_label_line(" 05")


# =============================================================================
# Annotator Tests
# =============================================================================

class TestListingAnnotator:
    """Tests for ListingAnnotator.annotate()."""

    def test_header_constants(self):
        assert LISTING_HEADERS == ("PRP", "LIST")
        assert NON_LISTING_HEADERS == ("PRFLAGS", "PRKEYS", "PRREG", "STATUS")

    def test_lines_outside_listing_unchanged(self):
        annotator = ListingAnnotator()
        assert annotator.annotate("1.0000\n") == "1.0000\n"
        assert not annotator.in_listing_mode
        assert annotator.line_number == 0

    @pytest.mark.parametrize("header", ["PRP TEST\n", "LIST\n", "  prp \"X\"\n", "list 010\n"])
    def test_listing_header(self, header):
        """Headers start a listing and are not numbered themselves."""
        annotator = ListingAnnotator()
        assert annotator.annotate(header) == header
        assert annotator.in_listing_mode
        assert annotator.line_number == 0

    def test_body_lines_numbered(self):
        annotator = ListingAnnotator()
        annotator.annotate("PRP TEST\n")
        assert annotator.annotate("A\n") == " 01 A\n"
        assert annotator.annotate("STO 01\n") == " 02 STO 01\n"
        assert annotator.line_number == 2

    def test_newline_stays_at_end(self):
        annotator = ListingAnnotator()
        annotator.annotate("LIST\n")
        result = annotator.annotate("RCL 00\n")
        assert result.endswith("\n")
        assert result.count("\n") == 1

    def test_label_resyncs_counter(self):
        annotator = ListingAnnotator()
        annotator.annotate("PRP TEST\n")
        assert annotator.annotate("A\n") == " 01 A\n"
        assert annotator.annotate(" 05♦LBL A\n") == " 05♦LBL A\n"
        assert annotator.line_number == 5
        assert annotator.annotate("B\n") == " 06 B\n"

    def test_label_can_move_counter_backwards(self):
        annotator = ListingAnnotator()
        annotator.annotate("PRP\n")
        for _ in range(10):
            annotator.annotate("CLX\n")
        annotator.annotate(" 03♦LBL 02\n")
        assert annotator.annotate("CLX\n") == " 04 CLX\n"

    def test_label_outside_listing_ignored(self):
        annotator = ListingAnnotator()
        assert annotator.annotate(" 05♦LBL A\n") == " 05♦LBL A\n"
        assert annotator.line_number == 0

    def test_numbers_past_99(self):
        annotator = ListingAnnotator()
        annotator.annotate("PRP\n")
        annotator.state.line_number = 99
        assert annotator.annotate("END\n") == " 100 END\n"

    @pytest.mark.parametrize("header", ["PRFLAGS\n", "PRKEYS\n", "PRREG\n", "STATUS:\n", " prflags\n"])
    def test_non_listing_header_ends_listing(self, header):
        annotator = ListingAnnotator()
        annotator.annotate("PRP\n")
        annotator.annotate("A\n")
        assert annotator.annotate(header) == header
        assert not annotator.in_listing_mode
        assert annotator.line_number == 0
        assert annotator.annotate("B\n") == "B\n"

    def test_new_listing_restarts_numbering(self):
        annotator = ListingAnnotator()
        annotator.annotate("PRP ONE\n")
        annotator.annotate("A\n")
        annotator.annotate("B\n")
        annotator.annotate("PRP TWO\n")
        assert annotator.annotate("C\n") == " 01 C\n"

    def test_blank_line_in_listing_is_numbered(self):
        annotator = ListingAnnotator()
        annotator.annotate("PRP\n")
        assert annotator.annotate("\n") == " 01 \n"

    def test_reset(self):
        annotator = ListingAnnotator()
        annotator.annotate("PRP\n")
        annotator.annotate("A\n")
        annotator.reset()
        assert not annotator.in_listing_mode
        assert annotator.line_number == 0
