from longlines.layout import LayoutEngine, TextWrapLayout


def _lines(text: str) -> list[str]:
    return text.split("\n")


def test_reference_engine_satisfies_protocol():
    assert isinstance(TextWrapLayout(), LayoutEngine)


def test_long_line_breaks_at_last_fitting_space(document):
    doc = document("the quick brown fox jumps")
    TextWrapLayout().wrap_display(doc, 10)
    assert doc.text == "the quick\nbrown fox\njumps"
    assert doc.hard == set()


def test_word_longer_than_width_breaks_after_it(document):
    doc = document("abcdefghijklmnop qrs")
    TextWrapLayout().wrap_display(doc, 5)
    assert doc.text == "abcdefghijklmnop\nqrs"


def test_soft_breaks_merge_back_into_spaces(document):
    doc = document("short\nline")
    TextWrapLayout().wrap_display(doc, 80)
    assert doc.text == "short line"


def test_hard_breaks_are_kept(document):
    doc = document("short\nline", hard=[5])
    TextWrapLayout().wrap_display(doc, 80)
    assert doc.text == "short\nline"
    assert doc.hard == {5}


def test_blank_lines_survive_refill(document):
    doc = document("para one\n\npara two")
    TextWrapLayout().wrap_display(doc, 80)
    assert doc.text == "para one\n\npara two"


def test_leading_indentation_is_not_a_break_point(document):
    doc = document("    indented words here")
    TextWrapLayout().wrap_display(doc, 8)
    assert _lines(doc.text)[0] == "    indented"


def test_refill_preserves_length_and_is_reversible(document):
    original = "Alpha beta.  Gamma delta: epsilon zeta eta theta."
    doc = document(original)
    layout = TextWrapLayout()
    layout.wrap_display(doc, 12)
    assert len(doc) == len(original)
    assert all(len(line) <= 12 for line in _lines(doc.text))
    layout.wrap_display(doc, 1000)
    assert doc.text == original


def test_region_refill_leaves_other_paragraphs(document):
    doc = document("aaa bbb ccc\n\nddd eee fff")
    TextWrapLayout().wrap_display(doc, 4, 0, 11)
    assert doc.text == "aaa\nbbb\nccc\n\nddd eee fff"


def test_continuous_wrapping_follows_edits(document):
    doc = document("alpha beta gamma")
    layout = TextWrapLayout()
    layout.enable_continuous(doc, 10)
    doc.insert(len(doc), " delta")
    assert all(len(line) <= 10 for line in _lines(doc.text))
    assert doc.text.replace("\n", " ") == "alpha beta gamma delta"

    layout.disable_continuous(doc)
    wrapped = doc.text
    doc.insert(len(doc), " epsilon")
    assert doc.text == wrapped + " epsilon"
