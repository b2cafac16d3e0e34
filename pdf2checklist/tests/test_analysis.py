from pdf2checklist.analysis import StructureAnalyzer

PAGES = [
    [
        "CUSTOMER DUE DILIGENCE",
        "1.1 The institution must maintain customer records.",
        "1.1.a Records shall be retained for 5 years.",
        "(a) including identification documents",
        "• Beneficial ownership must be verified",
    ],
    [
        "(المادة 5 تعريفات)",
        "Article (5) Definitions",
        "يجب على البنوك الاحتفاظ بالسجلات",
        "1.2.3 - 45",
    ],
]


def test_page_counts():
    analysis = StructureAnalyzer().analyze("circular.pdf", PAGES)

    assert analysis.file_name == "circular.pdf"
    assert analysis.total_pages == 2
    first, second = analysis.pages

    assert first.page_number == 1
    assert first.total_lines == 5
    assert first.english_lines == 5
    assert first.arabic_lines == 0
    assert first.bullet_points == 1

    assert second.arabic_lines == 2
    assert second.english_lines == 1
    assert second.sample_texts.mixed == ["1.2.3 - 45"]


def test_structure_patterns():
    first, second = StructureAnalyzer().analyze("circular.pdf", PAGES).pages
    patterns = first.structure_patterns

    assert patterns.main_numbers[0]["ref"] == "1.1"
    assert [entry["ref"] for entry in patterns.sub_numbers] == ["1.1.a"]
    assert patterns.list_items == [{"marker": "a", "text": "including identification documents"}]
    assert patterns.bullets == ["Beneficial ownership must be verified"]

    articles = second.structure_patterns.articles
    assert {"type": "arabic", "number": "5", "title": "تعريفات"} in articles
    assert {"type": "english", "number": "5", "title": "Definitions"} in articles


def test_samples_are_limited():
    lines = [f"English sample line number {n}" for n in range(12)]
    page = StructureAnalyzer().analyze("circular.pdf", [lines]).pages[0]

    assert page.english_lines == 12
    assert len(page.sample_texts.english) == 5


def test_long_pattern_text_is_truncated():
    line = "1.1 " + "x" * 80
    page = StructureAnalyzer().analyze("circular.pdf", [[line]]).pages[0]
    text = page.structure_patterns.main_numbers[0]["text"]
    assert text == "x" * 50 + "..."
