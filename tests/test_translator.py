"""
Tests for AttachmentTranslator
"""

import pytest
from eudora_attach.translator import AttachmentTranslator


@pytest.fixture
def translator():
    """Fixture to create translator instance."""
    return AttachmentTranslator()


@pytest.fixture
def sent_message():
    """A sent message with two attachments, as Eudora stores it."""
    return [
        "From ???@??? Mon Jan 01 10:00:00 2024",
        "To: bob@example.com",
        "Subject: report",
        "X-Attachments: C:\\Docs\\report.doc; C:\\Docs\\figures.xls;",
        "",
        "See attached.",
    ]


def test_find_x_attachments_last_wins(translator):
    """Test that the last X-Attachments line is used."""
    lines = [
        "X-Attachments: first;",
        "Subject: x",
        "X-Attachments: second;",
    ]

    assert translator.find_x_attachments(lines) == "X-Attachments: second;"


def test_find_x_attachments_missing(translator):
    """Test that a message without the header gives an empty string."""
    assert translator.find_x_attachments(["Subject: x", "X-Attachments:none;"]) == ""


def test_split_attachments(translator):
    """Test that one path is produced per semicolon in Eudora's format."""
    field = "X-Attachments: C:\\a.txt; C:\\b.txt; C:\\c.txt;"

    paths = translator.split_attachments(field)

    assert translator.count_attachments(field) == 3
    assert paths == [" C:\\a.txt", " C:\\b.txt", " C:\\c.txt"]


def test_split_attachments_keeps_inner_empty(translator):
    """Test that empty fields are kept unless they trail the list."""
    paths = translator.split_attachments("X-Attachments: a;;b;;")

    assert paths == [" a", "", "b"]


def test_find_converted(translator):
    """Test extraction of paths from existing converted lines."""
    lines = [
        "Subject: x",
        'Attachment Converted: "C:\\Eudora\\Attach\\photo.jpg"',
        'Attachment Converted: "  C:\\Eudora\\Attach\\notes.txt  "',
    ]

    converted = translator.find_converted(lines)

    assert converted == [
        "C:\\Eudora\\Attach\\photo.jpg",
        "C:\\Eudora\\Attach\\notes.txt",
    ]


def test_parse_message_structure(translator, sent_message):
    """Test that parse_message returns the expected fields."""
    message = translator.parse_message(sent_message)

    assert message["raw_lines"] == sent_message
    assert message["x_attachments"] == sent_message[3]
    assert message["attachments"] == [" C:\\Docs\\report.doc", " C:\\Docs\\figures.xls"]
    assert message["already_converted"] == []


def test_parse_message_without_semicolons(translator):
    """Test that attachments is None when nothing is listed."""
    message = translator.parse_message(["X-Attachments: "])

    assert message["attachments"] is None


def test_translate_appends_converted_lines(translator, sent_message):
    """Test that one converted line is appended per attachment."""
    result = translator.translate(sent_message)

    assert result[:len(sent_message)] == sent_message
    assert result[len(sent_message):] == [
        'Attachment Converted: " C:\\Docs\\report.doc"',
        'Attachment Converted: " C:\\Docs\\figures.xls"',
    ]


def test_translate_quoted_paths(translator):
    """Test the header form with quoted paths and sizes."""
    batch = [
        "From - Mon Jan 1",
        "Subject: test",
        'X-Attachments: "c:\\f1.txt" (1234);"c:\\f2.txt" (5678)',
    ]

    result = translator.translate(batch)

    assert len(result) == len(batch) + 2
    assert result[-2] == 'Attachment Converted: " "c:\\f1.txt" (1234)"'
    assert result[-1] == 'Attachment Converted: ""c:\\f2.txt" (5678)"'


def test_translate_no_semicolons_is_noop(translator):
    """Test that an empty X-Attachments header changes nothing."""
    batch = ["From - Mon", "X-Attachments: ", "body"]

    assert translator.translate(batch) == batch


def test_translate_without_header_is_noop(translator):
    """Test that received mail with converted lines passes through."""
    batch = [
        "From - Mon",
        "Subject: received",
        'Attachment Converted: "C:\\Eudora\\Attach\\photo.jpg"',
    ]

    assert translator.translate(batch) == batch


def test_translate_empty_batch(translator):
    """Test that an empty batch stays empty."""
    assert translator.translate([]) == []


def test_translate_skips_already_converted(translator):
    """Test case- and whitespace-insensitive duplicate removal."""
    batch = [
        "From - Mon",
        "X-Attachments: C:\\Docs\\Report.DOC;",
        'Attachment Converted: "  c:\\docs\\report.doc "',
    ]

    assert translator.translate(batch) == batch


def test_translate_partial_duplicates(translator):
    """Test that only the missing attachments are added."""
    batch = [
        "From - Mon",
        "X-Attachments: C:\\a.txt; C:\\b.txt; C:\\a.txt; C:\\c.txt;",
        'Attachment Converted: "C:\\A.TXT"',
    ]

    result = translator.translate(batch)

    assert result[len(batch):] == [
        'Attachment Converted: " C:\\b.txt"',
        'Attachment Converted: " C:\\c.txt"',
    ]


def test_translate_is_idempotent(translator, sent_message):
    """Test that translating a translated message adds nothing."""
    once = translator.translate(sent_message)

    assert translator.translate(once) == once


def test_translate_emits_whitespace_path(translator):
    """Test that malformed values still produce a literal line."""
    result = translator.translate(["X-Attachments: ;"])

    assert result == ["X-Attachments: ;", 'Attachment Converted: " "']


def test_translate_does_not_modify_input(translator, sent_message):
    """Test that the batch passed in is left untouched."""
    original = list(sent_message)

    translator.translate(sent_message)

    assert sent_message == original


def test_translate_trims_control_characters(translator):
    """Test that control characters around paths are ignored when comparing."""
    batch = [
        "X-Attachments: C:\\a.txt; C:\\b.txt\x1f;",
        'Attachment Converted: "C:\\a.txt\x1c"',
        'Attachment Converted: "C:\\b.txt"',
    ]

    assert translator.find_converted(batch) == ["C:\\a.txt", "C:\\b.txt"]
    assert translator.translate(batch) == batch


def test_translate_keeps_non_breaking_space(translator):
    """Test that a non-breaking space is part of the path, not padding."""
    batch = [
        "X-Attachments: C:\\a.txt;",
        'Attachment Converted: "C:\\a.txt\xa0"',
    ]

    result = translator.translate(batch)

    assert result[-1] == 'Attachment Converted: " C:\\a.txt"'
