import unittest

from longlines.config import WrapSettings
from longlines.document import Document
from longlines.unfill import join_spacing, unfill_buffer, unfill_paragraph

DOUBLE = WrapSettings(double_space_after_sentence=True, double_space_after_colon=True)


def _unfill(text: str, settings: WrapSettings | None = None, hard=()) -> tuple[Document, int]:
    doc = Document.from_text(text, hard=hard)
    delta = unfill_paragraph(doc, 0, len(doc), settings=settings)
    return doc, delta


class TestUnfillParagraph(unittest.TestCase):
    def test_double_space_after_sentence(self):
        doc, delta = _unfill("End of sentence.\nNext word", DOUBLE)
        self.assertEqual(doc.text, "End of sentence.  Next word")
        self.assertEqual(delta, 1)

    def test_single_space_after_sentence_by_default(self):
        doc, delta = _unfill("End of sentence.\nNext word")
        self.assertEqual(doc.text, "End of sentence. Next word")
        self.assertEqual(delta, 0)

    def test_double_space_after_colon(self):
        doc, _ = _unfill("See below:\nDetails here", WrapSettings(double_space_after_colon=True))
        self.assertEqual(doc.text, "See below:  Details here")

    def test_colon_option_does_not_affect_sentences(self):
        doc, _ = _unfill("Done.\nSee below:\nDetails", WrapSettings(double_space_after_colon=True))
        self.assertEqual(doc.text, "Done. See below:  Details")

    def test_closing_quote_still_ends_sentence(self):
        doc, _ = _unfill('He said "stop."\nThen left.', DOUBLE)
        self.assertEqual(doc.text, 'He said "stop."  Then left.')

    def test_delta_accumulates_over_joins(self):
        doc, delta = _unfill("One.\nTwo.\nThree", DOUBLE)
        self.assertEqual(doc.text, "One.  Two.  Three")
        self.assertEqual(delta, 2)

    def test_hard_breaks_are_never_joined(self):
        doc, _ = _unfill("first line\nsecond line\nthird", hard=[10])
        self.assertEqual(doc.text, "first line\nsecond line third")
        self.assertEqual(doc.hard, {10})

    def test_break_before_indented_line_is_kept(self):
        doc, delta = _unfill("item one\n  indented")
        self.assertEqual(doc.text, "item one\n  indented")
        self.assertEqual(delta, 0)

    def test_single_line_paragraph_is_noop(self):
        doc, delta = _unfill("   \nsingle line")
        self.assertEqual(doc.text, "   \nsingle line")
        self.assertEqual(delta, 0)
        self.assertFalse(doc.modified)

    def test_blank_lines_are_noop(self):
        doc, delta = _unfill("\n\n\n")
        self.assertEqual(doc.text, "\n\n\n")
        self.assertEqual(delta, 0)

    def test_join_spacing(self):
        self.assertEqual(join_spacing("Why?", DOUBLE), 2)
        self.assertEqual(join_spacing("Why? ", DOUBLE), 1)
        self.assertEqual(join_spacing("note:", WrapSettings()), 1)
        self.assertEqual(join_spacing("plain", DOUBLE), 1)


class TestUnfillBuffer(unittest.TestCase):
    def test_every_paragraph_is_unfilled(self):
        doc = Document.from_text("a b\nc d\n\ne f\ng\n")
        unfill_buffer(doc)
        self.assertEqual(doc.text, "a b c d\n\ne f g\n")

    def test_point_follows_inserted_spaces(self):
        doc = Document.from_text("One.\nTwo\n\nThree.\nFour")
        doc.point = doc.text.index("Four")
        unfill_buffer(doc, settings=DOUBLE)
        self.assertEqual(doc.text, "One.  Two\n\nThree.  Four")
        self.assertEqual(doc.point, doc.text.index("Four"))

    def test_second_pass_changes_nothing(self):
        doc = Document.from_text("A.\nb:\nc\n\n  d\ne\n", hard=[2])
        unfill_buffer(doc, settings=DOUBLE)
        once = doc.text
        unfill_buffer(doc, settings=DOUBLE)
        self.assertEqual(doc.text, once)

    def test_empty_document(self):
        doc = Document.from_text("")
        unfill_buffer(doc)
        self.assertEqual(doc.text, "")
        self.assertFalse(doc.modified)


if __name__ == "__main__":
    unittest.main()
