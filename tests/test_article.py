# tests/test_article.py
from relay.services.article import build_article_messages, strip_code_fence, unwrap_article


def test_fenced_json_is_unwrapped():
    # A fenced JSON answer yields its content field.
    art = unwrap_article('```json\n{"content":"Hello"}\n```')
    assert art.content == "Hello"


def test_plain_text_is_kept_verbatim():
    # Non-JSON text is kept as-is, with the default title.
    art = unwrap_article("Hello", default_title="Greetings")
    assert art.content == "Hello"
    assert art.title == "Greetings"


def test_bare_json_with_title():
    # Unfenced JSON works too, and a string title is used.
    art = unwrap_article('{"title": "On Bees", "content": "<p>Bees.</p>"}', default_title="bees")
    assert art.title == "On Bees"
    assert art.content == "<p>Bees.</p>"


def test_json_without_string_content_falls_back_to_raw():
    # JSON without a string content is treated as prose.
    raw = '{"content": 42}'
    assert unwrap_article(raw).content == raw
    assert unwrap_article("[1, 2]").content == "[1, 2]"


def test_strip_fence_without_language_tag():
    # Fences without a language tag are stripped; unfenced text is untouched.
    assert strip_code_fence("```\nbody\n```") == "body"
    assert strip_code_fence("no fence") == "no fence"


def test_article_messages_mention_tone_and_length():
    # The article prompt carries topic, tone and length.
    turns = build_article_messages("gardening", tone="playful", min_words=600)
    assert turns[0].role == "system"
    assert "gardening" in turns[1].content
    assert "playful" in turns[1].content
    assert "600" in turns[1].content
