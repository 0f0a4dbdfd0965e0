from models.analysis_models import InlineImagePart, TextPart
from services.analysis.response_extractor import extract_parts


def test_finds_text_and_image_regardless_of_order() -> None:
    image = InlineImagePart(data=b"img", mime_type="image/png")

    text, found = extract_parts([image, TextPart(text="  hello  ")])

    assert text == "hello"
    assert found is image


def test_first_match_wins_for_each_kind() -> None:
    first_image = InlineImagePart(data=b"first")
    parts = [
        TextPart(text="first"),
        first_image,
        TextPart(text="second"),
        InlineImagePart(data=b"second"),
    ]

    text, image = extract_parts(parts)

    assert text == "first"
    assert image is first_image


def test_missing_text_does_not_stop_image_search() -> None:
    text, image = extract_parts([InlineImagePart(data=b"img")])

    assert text is None
    assert image is not None


def test_missing_image_does_not_stop_text_search() -> None:
    text, image = extract_parts([TextPart(text="only text")])

    assert text == "only text"
    assert image is None


def test_empty_text_parts_are_skipped() -> None:
    text, _ = extract_parts([TextPart(text=""), TextPart(text="real")])

    assert text == "real"


def test_whitespace_only_text_counts_as_missing() -> None:
    text, _ = extract_parts([TextPart(text="   \n")])

    assert text is None


def test_image_without_data_counts_as_missing() -> None:
    _, image = extract_parts([InlineImagePart(data=b""), InlineImagePart(data=b"later")])

    assert image is None


def test_empty_sequence() -> None:
    assert extract_parts([]) == (None, None)
